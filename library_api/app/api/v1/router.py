"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers (members, books, borrows).
Each endpoint module declares its full paths, so no prefixes are
added here.
"""

from fastapi import APIRouter

from .endpoints import books, borrows, members

router = APIRouter()

router.include_router(members.router, tags=["members"])
router.include_router(books.router, tags=["books"])
router.include_router(borrows.router, tags=["borrows"])
