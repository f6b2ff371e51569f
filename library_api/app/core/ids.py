"""
Record identifiers.

Every stored record is keyed by an opaque 32 character hex string
generated by the store on insert.  Identifiers arriving from clients
are checked with ``parse_record_id`` before they reach a query so that
malformed values are reported as bad input rather than as missing
records.
"""

import re
import uuid

from .errors import InvalidIdentifier

_RECORD_ID = re.compile(r"^[0-9a-f]{32}$")


def new_record_id() -> str:
    return uuid.uuid4().hex


def parse_record_id(value) -> str:
    """Normalise a client supplied identifier.

    Raises ``InvalidIdentifier`` unless ``value`` is a string of 32 hex
    digits.  Upper case digits are accepted and lowered.
    """
    if not isinstance(value, str):
        raise InvalidIdentifier(value)
    candidate = value.strip().lower()
    if not _RECORD_ID.match(candidate):
        raise InvalidIdentifier(value)
    return candidate
