"""Core utilities: schema, dates, derivation, duplicate detection, serialization."""

from paxmanifest.core.schema import (
    DateField,
    ExtractedFields,
    FilterCriteria,
    ManifestSnapshot,
    PassengerRecord,
    PassengerType,
    RecordStatus,
    SortConfig,
    SortOrder,
)
from paxmanifest.core.derive import DerivedAttributes, calculate_age, derive_attributes
from paxmanifest.core.duplicates import is_duplicate, refresh_duplicate_flags
from paxmanifest.core.record_id import new_record_id, validate_record_id

__all__ = [
    "DateField",
    "ExtractedFields",
    "FilterCriteria",
    "ManifestSnapshot",
    "PassengerRecord",
    "PassengerType",
    "RecordStatus",
    "SortConfig",
    "SortOrder",
    "DerivedAttributes",
    "calculate_age",
    "derive_attributes",
    "is_duplicate",
    "refresh_duplicate_flags",
    "new_record_id",
    "validate_record_id",
]
