from datetime import datetime, timezone
from uuid import UUID

from .exceptions import InvalidInput


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_id(value, what: str = "id") -> UUID:
    """Parses a path/body identifier, raising InvalidInput on malformed values."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise InvalidInput(f"Invalid {what}")
