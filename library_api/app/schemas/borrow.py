"""
Pydantic models for borrow records.

Field names are camelCase on the wire (``memberId``, ``startDate``)
and snake_case in Python; ``populate_by_name`` allows either when
building the models.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .common import BookMini, MemberMini


class BorrowCreate(BaseModel):
    """Schema for requesting a borrow.  Dates are ISO-8601 strings."""

    member_id: Optional[str] = Field(None, alias="memberId")
    book_id: Optional[str] = Field(None, alias="bookId")
    start_date: Optional[str] = Field(None, alias="startDate", example="2025-03-01")
    end_date: Optional[str] = Field(None, alias="endDate", example="2025-03-15")

    model_config = {
        "populate_by_name": True,
    }


class BorrowRead(BaseModel):
    id: str
    member: MemberMini
    book: BookMini
    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")

    model_config = {
        "populate_by_name": True,
    }


class BorrowDeleted(BaseModel):
    deleted: bool
