"""Path and header value validation shared by the routers."""

import re
import uuid

from .exceptions import ValidationException

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_uuid(value) -> bool:
    """True for canonical RFC 4122 identifiers, versions 1-5."""
    return isinstance(value, str) and bool(UUID_PATTERN.match(value))


def parse_uuid(value, message: str = "Invalid project ID format") -> uuid.UUID:
    if not is_valid_uuid(value):
        raise ValidationException(message)
    return uuid.UUID(value)
