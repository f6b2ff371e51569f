"""
Business logic for library members.

Members carry a phone number and an email address that must be
plausible (checked by the external ``ContactValidator``) and unique
across all members.  On update, a value is only re-validated and
re-checked for duplicates when it actually changes, so a member
keeping its own phone does not collide with itself.

Deleting a member also deletes every borrow that references it.  The
two deletes are separate statements; the store offers no
multi-document atomicity here.
"""

import logging
from typing import List, Optional

from library_api.app.core.db import Stores
from library_api.app.core.errors import (
    DuplicateContact,
    InvalidEmail,
    InvalidPhone,
    MissingFields,
    NotFound,
)
from library_api.app.core.ids import parse_record_id
from library_api.app.schemas.common import MessageRead
from library_api.app.schemas.member import MemberCreate, MemberRead, MemberUpdate
from library_api.app.services.common import is_blank, require_fields
from library_api.app.services.contact_validator import ContactValidator
from library_api.app.services.reference_resolver import ReferenceResolver


logger = logging.getLogger(__name__)

MEMBER_FIELDS = ("name", "phone", "email", "address")


class MemberService:
    """Service for registering, updating and removing members."""

    def __init__(
        self,
        stores: Stores,
        validator: ContactValidator,
        resolver: Optional[ReferenceResolver] = None,
    ):
        self.stores = stores
        self.validator = validator
        self.resolver = resolver or ReferenceResolver(stores)

    def _load(self, member_id: Optional[str]) -> dict:
        if is_blank(member_id):
            raise MissingFields("id is required")
        member = self.stores.members.get(parse_record_id(member_id))
        if member is None:
            raise NotFound("member")
        return member

    async def _check_phone(self, phone: str) -> None:
        if not await self.validator.is_valid_phone(phone):
            raise InvalidPhone()

    async def _check_email(self, email: str) -> None:
        if not await self.validator.is_valid_email(email):
            raise InvalidEmail()

    async def list_members(self, name: Optional[str] = None) -> List[MemberRead]:
        """Return all members, optionally only those whose name matches exactly."""
        filters = {"name": name} if name else None
        return [self.resolver.resolve_member_view(member) for member in self.stores.members.find(filters)]

    async def get_member(self, member_id: Optional[str]) -> MemberRead:
        return self.resolver.resolve_member_view(self._load(member_id))

    async def create_member(self, data: MemberCreate) -> MemberRead:
        """Register a new member.

        Raises ``MissingFields`` if any field is absent, ``InvalidPhone``
        or ``InvalidEmail`` if the validation service rejects a value,
        and ``DuplicateContact`` if another member already uses the
        phone or the email.
        """
        require_fields(data, MEMBER_FIELDS)
        await self._check_phone(data.phone)
        await self._check_email(data.email)

        duplicate = self.stores.members.find_one({"phone": data.phone, "email": data.email}, match_any=True)
        if duplicate is not None:
            raise DuplicateContact()

        member_id = self.stores.members.insert(data.model_dump(include=set(MEMBER_FIELDS)))
        logger.info("Registered member %s (%s)", member_id, data.email)
        return self.resolver.resolve_member_view(self.stores.members.get(member_id))

    async def update_member(self, data: MemberUpdate) -> MemberRead:
        """Replace a member's fields.

        ``phone`` and ``email`` go through validation and the duplicate
        check only when they differ from the stored values.
        """
        require_fields(data, ("id",) + MEMBER_FIELDS)
        current = self._load(data.id)

        if data.phone != current["phone"]:
            await self._check_phone(data.phone)
            if self.stores.members.find_one({"phone": data.phone}) is not None:
                raise DuplicateContact("Duplicate phone")
        if data.email != current["email"]:
            await self._check_email(data.email)
            if self.stores.members.find_one({"email": data.email}) is not None:
                raise DuplicateContact("Duplicate email")

        # The member may have been deleted while the validation calls were pending.
        if not self.stores.members.update(current["id"], data.model_dump(include=set(MEMBER_FIELDS))):
            raise NotFound("member")
        logger.info("Updated member %s", current["id"])
        return self.resolver.resolve_member_view(self.stores.members.get(current["id"]))

    async def delete_member(self, member_id: Optional[str]) -> MessageRead:
        """Delete a member and cascade to the borrows that reference it."""
        member = self._load(member_id)
        self.stores.members.delete(member["id"])
        removed = self.stores.borrows.delete_many({"member_id": member["id"]})
        logger.info("Deleted member %s and %s borrow(s)", member["id"], removed)
        return MessageRead(message="Member deleted")
