"""
Record identifiers.

Record ids are opaque tokens assigned once at creation. They are random
rather than content-derived: ingesting the same document twice must yield
two independent records.
"""

from __future__ import annotations

import re
import uuid

# Record ID format: px_{12 hex characters}
RECORD_ID_PREFIX = "px_"
RECORD_ID_PATTERN = re.compile(r"^px_[0-9a-f]{12}$")


def new_record_id() -> str:
    """
    Generate a fresh record id.

    Examples:
        >>> new_record_id().startswith("px_")
        True
    """
    return f"{RECORD_ID_PREFIX}{uuid.uuid4().hex[:12]}"


def validate_record_id(record_id: str) -> bool:
    """
    Check whether a string has the record id format.

    Args:
        record_id: Candidate id.

    Returns:
        True if the id matches ``px_`` followed by 12 hex characters.
    """
    return bool(RECORD_ID_PATTERN.match(record_id))
