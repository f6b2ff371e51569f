"""
Pydantic models for books.
"""

from typing import Optional

from pydantic import BaseModel, Field


class BookCreate(BaseModel):
    """Schema for creating a book.  All fields are required by the service."""

    title: Optional[str] = Field(None, example="Cien años de soledad")
    author: Optional[str] = Field(None, example="Gabriel García Márquez")
    isbn: Optional[str] = Field(None, example="978-0307474728")
    year: Optional[int] = Field(None, example=1967)


class BookRead(BaseModel):
    id: str
    title: str
    author: str
    isbn: str
    year: int

    model_config = {
        "from_attributes": True,
    }
