"""
Helpers shared by the services.
"""

from typing import Any, Iterable

from library_api.app.core.errors import MissingFields


def is_blank(value: Any) -> bool:
    """True for values that count as absent: ``None`` and the empty string.

    Whitespace-only strings are present.
    """
    return value is None or value == ""


def require_fields(payload: Any, names: Iterable[str], message: str = "Missing required fields") -> None:
    """Raise ``MissingFields`` unless every attribute in ``names`` is set."""
    if payload is None or any(is_blank(getattr(payload, name, None)) for name in names):
        raise MissingFields(message)
