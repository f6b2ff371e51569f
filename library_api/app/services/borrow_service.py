"""
Business logic for borrow records.

A borrow reserves one book for one member between two dates.  The
``BorrowService`` enforces the scheduling rules when a borrow is
created:

* the member and the book must exist;
* the start date must be strictly before the end date;
* the period must not overlap any existing borrow of the same book.

Overlap is inclusive at both ends: a borrow ending on day 5 and one
starting on day 5 share that day and conflict.  The overlap scan and
the insert run in one immediate store transaction, so two concurrent
requests for the same book cannot both pass the check.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from library_api.app.core.db import Stores
from library_api.app.core.errors import BookAlreadyBorrowed, InvalidRange, MissingFields, NotFound
from library_api.app.core.ids import parse_record_id
from library_api.app.schemas.borrow import BorrowCreate, BorrowRead
from library_api.app.services.common import is_blank, require_fields
from library_api.app.services.reference_resolver import ReferenceResolver


logger = logging.getLogger(__name__)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime.

    A trailing ``Z`` is accepted and naive values are taken as UTC so
    that all stored periods compare with each other.  Raises
    ``InvalidRange`` for anything that is not a valid timestamp.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise InvalidRange(f"Invalid date: {value}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def periods_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Inclusive interval overlap: shared endpoints count as overlapping."""
    return a_start <= b_end and b_start <= a_end


class BorrowService:
    """Service for scheduling, listing and removing borrows."""

    def __init__(self, stores: Stores, resolver: Optional[ReferenceResolver] = None):
        self.stores = stores
        self.resolver = resolver or ReferenceResolver(stores)

    async def list_borrows(self) -> List[BorrowRead]:
        """Return every borrow as a resolved view, oldest first."""
        return [self.resolver.resolve_borrow_view(borrow) for borrow in self.stores.borrows.find()]

    def _find_conflict(self, book_id: str, start: datetime, end: datetime) -> Optional[dict]:
        for existing in self.stores.borrows.find({"book_id": book_id}):
            if periods_overlap(
                parse_timestamp(existing["start_date"]),
                parse_timestamp(existing["end_date"]),
                start,
                end,
            ):
                return existing
        return None

    async def schedule_borrow(self, data: BorrowCreate) -> BorrowRead:
        """Create a borrow after checking references, dates and overlaps.

        Raises ``MissingFields``, ``NotFound`` (member or book),
        ``InvalidRange`` or ``BookAlreadyBorrowed``.  Returns the stored
        borrow resolved into its view.
        """
        require_fields(data, ("member_id", "book_id", "start_date", "end_date"))
        member_id = parse_record_id(data.member_id)
        book_id = parse_record_id(data.book_id)

        if self.stores.members.get(member_id) is None:
            raise NotFound("member")
        if self.stores.books.get(book_id) is None:
            raise NotFound("book")

        start = parse_timestamp(data.start_date)
        end = parse_timestamp(data.end_date)
        if start >= end:
            raise InvalidRange()

        with self.stores.database.transaction():
            conflict = self._find_conflict(book_id, start, end)
            if conflict is not None:
                logger.warning(
                    "Borrow of book %s from %s to %s overlaps borrow %s",
                    book_id,
                    data.start_date,
                    data.end_date,
                    conflict["id"],
                )
                raise BookAlreadyBorrowed()
            borrow_id = self.stores.borrows.insert(
                {
                    "member_id": member_id,
                    "book_id": book_id,
                    "start_date": data.start_date,
                    "end_date": data.end_date,
                }
            )

        logger.info("Member %s borrowed book %s (borrow %s)", member_id, book_id, borrow_id)
        return self.resolver.resolve_borrow_view(self.stores.borrows.get(borrow_id))

    async def delete_borrow(self, borrow_id: Optional[str]) -> bool:
        """Delete a borrow; return whether a record was actually removed."""
        if is_blank(borrow_id):
            raise MissingFields("id is required")
        deleted = self.stores.borrows.delete(parse_record_id(borrow_id))
        if deleted:
            logger.info("Deleted borrow %s", borrow_id)
        return deleted
