"""
Business logic for books.

Books are created and listed only.  No uniqueness is enforced on the
ISBN and no external validation is performed.
"""

import logging
from typing import List

from library_api.app.core.db import Stores
from library_api.app.core.errors import MissingFields
from library_api.app.schemas.book import BookCreate, BookRead
from library_api.app.services.common import require_fields
from library_api.app.services.reference_resolver import ReferenceResolver


class BookService:
    """Service for the book catalogue."""

    def __init__(self, stores: Stores):
        self.stores = stores

    async def list_books(self) -> List[BookRead]:
        return [ReferenceResolver.book_view(book) for book in self.stores.books.find()]

    async def create_book(self, data: BookCreate) -> BookRead:
        """Insert a book; every field is required and a zero year counts as absent."""
        require_fields(data, ("title", "author", "isbn", "year"), message="Missing fields")
        if data.year == 0:
            raise MissingFields("Missing fields")
        book_id = self.stores.books.insert(data.model_dump())
        logging.getLogger(__name__).info("Added book %s (%s)", book_id, data.title)
        return ReferenceResolver.book_view(self.stores.books.get(book_id))
