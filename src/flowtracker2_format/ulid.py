"""
ULID generation utility for field visit identities.

Field visits created by the in-memory results sink are identified by a ULID:
- 26 characters
- Uppercase Crockford base32 (0-9, A-Z without I, L, O, U)
- Lexicographically sortable by visit start time

Example:
    01JFH3Q8Z1Q9F0XG3V7N4K2M8C
"""

from datetime import datetime
from typing import Optional

from ulid import ULID

ULID_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"


def generate_ulid(timestamp: Optional[datetime] = None) -> str:
    """
    Generate a ULID string.

    Args:
        timestamp: Optional datetime to use for the ULID's time component.
                   If None, uses current time.

    Returns:
        26-character uppercase ULID string.
    """
    if timestamp is not None:
        ulid_obj = ULID.from_datetime(timestamp)
    else:
        ulid_obj = ULID()

    return str(ulid_obj).upper()


def validate_ulid(value: str) -> bool:
    """Check that a string is a 26-character uppercase ULID."""
    if len(value) != 26:
        return False

    return all(char in ULID_ALPHABET for char in value)
