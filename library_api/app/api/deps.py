"""
FastAPI dependencies.

The store handles and the validation client are created once at
startup and kept on ``app.state``.  These dependencies read them from
there and build the per-request services.  Tests replace
``get_validator`` (or ``get_stores``) through
``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from library_api.app.core.db import Stores
from library_api.app.services.book_service import BookService
from library_api.app.services.borrow_service import BorrowService
from library_api.app.services.contact_validator import ContactValidator
from library_api.app.services.member_service import MemberService


def get_stores(request: Request) -> Stores:
    return request.app.state.stores


def get_validator(request: Request) -> ContactValidator:
    return request.app.state.validator


def get_member_service(
    stores: Stores = Depends(get_stores),
    validator: ContactValidator = Depends(get_validator),
) -> MemberService:
    return MemberService(stores, validator)


def get_book_service(stores: Stores = Depends(get_stores)) -> BookService:
    return BookService(stores)


def get_borrow_service(stores: Stores = Depends(get_stores)) -> BorrowService:
    return BorrowService(stores)
