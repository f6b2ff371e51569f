"""
Pydantic models for library members.

A member is read back together with the borrows that reference it;
each embedded borrow carries only the book reference since the member
is the enclosing object.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import BookMini


class MemberBase(BaseModel):
    name: Optional[str] = Field(None, example="Ana Pérez")
    phone: Optional[str] = Field(None, example="+34600111222")
    email: Optional[str] = Field(None, example="ana@example.com")
    address: Optional[str] = Field(None, example="Calle Mayor 1, Madrid")


class MemberCreate(MemberBase):
    """Schema for registering a member."""
    pass


class MemberUpdate(MemberBase):
    """Schema for replacing a member's fields.

    The identifier travels in the body together with the full set of
    fields; partial updates are not supported.
    """

    id: Optional[str] = None


class MemberBorrowRead(BaseModel):
    id: str
    book: BookMini
    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")

    model_config = {
        "populate_by_name": True,
    }


class MemberRead(BaseModel):
    id: str
    name: str
    phone: str
    email: str
    address: str
    borrows: List[MemberBorrowRead] = []
