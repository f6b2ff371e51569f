"""
Borrow endpoints for API v1.

Borrows are listed and scheduled on ``/borrows`` and deleted on
``/borrow``.  Scheduling rejects periods that overlap an existing
borrow of the same book; such conflicts are answered with 400 like
any other rejected request.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from library_api.app.api.deps import get_borrow_service
from library_api.app.core.errors import LibraryError
from library_api.app.schemas.borrow import BorrowCreate, BorrowDeleted, BorrowRead
from library_api.app.schemas.common import RecordIdPayload
from library_api.app.services.borrow_service import BorrowService


router = APIRouter()


@router.get("/borrows", response_model=List[BorrowRead])
async def list_borrows(service: BorrowService = Depends(get_borrow_service)) -> List[BorrowRead]:
    """List every borrow with its member and book resolved."""
    return await service.list_borrows()


@router.post("/borrows", response_model=BorrowRead, status_code=status.HTTP_201_CREATED)
async def create_borrow(
    borrow: BorrowCreate | None = None,
    service: BorrowService = Depends(get_borrow_service),
) -> BorrowRead:
    """Lend a book to a member for a period.

    Returns 404 if the member or the book does not exist and 400 for
    missing fields, an empty or inverted period, or an overlap with an
    existing borrow of the same book.
    """
    try:
        return await service.schedule_borrow(borrow)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/borrow", response_model=BorrowDeleted)
async def delete_borrow(
    payload: RecordIdPayload | None = None,
    service: BorrowService = Depends(get_borrow_service),
) -> BorrowDeleted:
    """Delete a borrow.  Deleting an unknown id reports ``deleted: false``."""
    try:
        deleted = await service.delete_borrow(payload.id if payload else None)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return BorrowDeleted(deleted=deleted)
