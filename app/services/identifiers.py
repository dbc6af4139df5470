# /app/services/identifiers.py

import re
import uuid

BOOK_PREFIX = "book"
USER_PREFIX = "usr"

_ID_PATTERN = r"^{prefix}_[0-9a-f]{{12}}$"


def new_id(prefix: str) -> str:
    """Generates a server-side id such as `book_1a2b3c4d5e6f`."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def is_well_formed(value: str, prefix: str) -> bool:
    """
    True if `value` could have been produced by `new_id(prefix)`.

    Callers treat a malformed id exactly like an unknown one, so lookups can
    skip the database entirely.
    """
    return isinstance(value, str) and re.match(_ID_PATTERN.format(prefix=prefix), value) is not None
