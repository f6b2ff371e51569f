"""
Assembly of denormalized views from normalized storage.

Borrow records reference members and books by id only.  The resolver
looks each reference up and builds the composite response objects:

* a borrow view embeds a mini member and a mini book;
* a member view embeds the member's borrows, each with a mini book.

References are weak: a member or book deleted after the borrow was
created is replaced by a placeholder instead of failing the read.  The
two views use different placeholder text for a missing book ("N/A" in
the borrow view, "Unknown" inside a member view); clients have relied
on both, so they are kept apart.

Every call performs one lookup per reference per record and writes
nothing.
"""

from typing import Any, Dict

from library_api.app.core.db import Stores
from library_api.app.schemas.book import BookRead
from library_api.app.schemas.borrow import BorrowRead
from library_api.app.schemas.common import BookMini, MemberMini
from library_api.app.schemas.member import MemberBorrowRead, MemberRead

BORROW_VIEW_PLACEHOLDER = "N/A"
MEMBER_VIEW_PLACEHOLDER = "Unknown"


class ReferenceResolver:
    """Build response views for stored documents."""

    def __init__(self, stores: Stores):
        self.stores = stores

    def member_mini(self, member_id: str) -> MemberMini:
        member = self.stores.members.get(member_id)
        if member is None:
            return MemberMini(id=member_id, name=BORROW_VIEW_PLACEHOLDER)
        return MemberMini(id=member["id"], name=member["name"])

    def book_mini(self, book_id: str, placeholder: str = BORROW_VIEW_PLACEHOLDER) -> BookMini:
        book = self.stores.books.get(book_id)
        if book is None:
            return BookMini(id=book_id, title=placeholder)
        return BookMini(id=book["id"], title=book["title"])

    def resolve_borrow_view(self, borrow: Dict[str, Any]) -> BorrowRead:
        return BorrowRead(
            id=borrow["id"],
            member=self.member_mini(borrow["member_id"]),
            book=self.book_mini(borrow["book_id"]),
            start_date=borrow["start_date"],
            end_date=borrow["end_date"],
        )

    def resolve_member_view(self, member: Dict[str, Any]) -> MemberRead:
        borrows = [
            MemberBorrowRead(
                id=borrow["id"],
                book=self.book_mini(borrow["book_id"], placeholder=MEMBER_VIEW_PLACEHOLDER),
                start_date=borrow["start_date"],
                end_date=borrow["end_date"],
            )
            for borrow in self.stores.borrows.find({"member_id": member["id"]})
        ]
        return MemberRead(
            id=member["id"],
            name=member["name"],
            phone=member["phone"],
            email=member["email"],
            address=member["address"],
            borrows=borrows,
        )

    @staticmethod
    def book_view(book: Dict[str, Any]) -> BookRead:
        return BookRead(**book)
