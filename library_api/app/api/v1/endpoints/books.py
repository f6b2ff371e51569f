"""
Book endpoints for API v1.

The catalogue can be listed and extended; books are never updated or
deleted through the API.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from library_api.app.api.deps import get_book_service
from library_api.app.core.errors import LibraryError
from library_api.app.schemas.book import BookCreate, BookRead
from library_api.app.services.book_service import BookService


router = APIRouter()


@router.get("/books", response_model=List[BookRead])
async def list_books(service: BookService = Depends(get_book_service)) -> List[BookRead]:
    return await service.list_books()


@router.post("/books", response_model=BookRead, status_code=status.HTTP_201_CREATED)
async def create_book(
    book: BookCreate | None = None,
    service: BookService = Depends(get_book_service),
) -> BookRead:
    try:
        return await service.create_book(book)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
