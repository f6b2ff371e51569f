"""
Schemas shared between domains.

The ``*Mini`` models are the compact references embedded in other
views: a borrow shows who borrowed what without the full member and
book records.
"""

from typing import Optional

from pydantic import BaseModel


class RecordIdPayload(BaseModel):
    """Body of the DELETE endpoints: ``{"id": "..."}``."""

    id: Optional[str] = None


class MemberMini(BaseModel):
    id: str
    name: str


class BookMini(BaseModel):
    id: str
    title: str


class MessageRead(BaseModel):
    message: str
