"""Input sanitization utilities."""
import re
from typing import Any

from guestlist.core.constants import MAX_IDENTIFIER_LENGTH

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_identifier(identifier: Any) -> str:
    """
    Normalize a registrant identifier taken from a request body.

    Identifiers arrive as strings or as JSON integers (QR payloads are often
    purely numeric); both are compared as text against the sheet.

    Args:
        identifier: Raw identifier value

    Returns:
        The identifier as a trimmed string (may be empty)

    Raises:
        ValueError: If the identifier has the wrong type, is too long or
            contains control characters
    """
    if isinstance(identifier, bool) or not isinstance(identifier, (str, int)):
        raise ValueError("ID must be a string or an integer")

    sanitized = str(identifier).strip()

    if len(sanitized) > MAX_IDENTIFIER_LENGTH:
        raise ValueError(f"ID exceeds maximum length of {MAX_IDENTIFIER_LENGTH} characters")

    if _CONTROL_CHARS.search(sanitized):
        raise ValueError("ID contains invalid characters")

    return sanitized
