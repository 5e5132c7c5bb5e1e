"""
Canonical schema for passenger manifest records.

Every component (history, pipeline, view, export) exchanges these models.
Records are frozen: a change always produces a new record, and a changed
manifest always produces a new snapshot tuple.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PassengerType(str, Enum):
    """Fare bracket derived from the passenger's age."""

    ADULT = "ADULT"
    CHILD = "CHILD"
    INFANT = "INFANT"


class RecordStatus(str, Enum):
    """Lifecycle state of a record."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class DateField(str, Enum):
    """Record fields that can be range-filtered."""

    DATE_OF_BIRTH = "date_of_birth"
    ISSUE_DATE = "issue_date"
    EXPIRY_DATE = "expiry_date"


# Fields a user may edit directly
EDITABLE_FIELDS = frozenset(
    {
        "passenger_type",
        "title",
        "first_name",
        "last_name",
        "passport_number",
        "nationality",
        "gender",
        "date_of_birth",
        "issue_date",
        "expiry_date",
    }
)

# Fields the view can be sorted by
SORTABLE_FIELDS = frozenset(
    EDITABLE_FIELDS | {"source_file_name", "status", "is_duplicate"}
)

# Fields that must be non-empty on a completed record
REQUIRED_FIELDS = ("first_name", "last_name")


def _upper_or_none(value: Any) -> Any:
    if value is None:
        return None
    return str(value).upper()


class ExtractedFields(BaseModel):
    """
    Partial record returned by the recognition service.

    Accepts both snake_case and the service's camelCase keys. Textual
    fields are trimmed and upper-cased; dates are kept as DD/MM/YYYY text.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    title: str | None = Field(default=None, description="Title (MR, MS, MRS, ...)")
    first_name: str | None = Field(default=None, description="Given name")
    last_name: str | None = Field(default=None, description="Surname")
    passport_number: str | None = Field(default=None, description="Passport number")
    nationality: str | None = Field(default=None, description="Country of nationality")
    gender: str | None = Field(default=None, description="MALE or FEMALE")
    date_of_birth: str | None = Field(default=None, description="DD/MM/YYYY")
    issue_date: str | None = Field(default=None, description="DD/MM/YYYY")
    expiry_date: str | None = Field(default=None, description="DD/MM/YYYY")

    @field_validator(
        "title", "first_name", "last_name", "passport_number", "nationality", "gender",
        mode="before",
    )
    @classmethod
    def _normalize_text(cls, value: Any) -> Any:
        if value is None:
            return None
        return str(value).strip().upper()

    @field_validator("date_of_birth", "issue_date", "expiry_date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> Any:
        if value is None:
            return None
        return str(value).strip()

    def present_fields(self) -> dict[str, str]:
        """Return only the fields the service actually filled in."""
        return {k: v for k, v in self.model_dump().items() if v not in (None, "")}


class PassengerRecord(BaseModel):
    """
    One passenger on the manifest.

    Created either as a processing placeholder when a document is accepted
    or directly as a completed manual entry.
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    id: str = Field(description="Opaque, immutable, never-reused record token")

    # Derived (overridable) attributes
    passenger_type: PassengerType = Field(
        default=PassengerType.ADULT, description="Age bracket"
    )
    title: str = Field(default="", description="MR, MRS, MS, MSTR, MISS or free text")

    # Identity document fields
    first_name: str = Field(default="", description="Given name, upper-cased")
    last_name: str = Field(default="", description="Surname, upper-cased")
    passport_number: str = Field(default="", description="Passport number, upper-cased")
    nationality: str | None = Field(default=None, description="Country of nationality")
    gender: str | None = Field(default=None, description="MALE or FEMALE")
    date_of_birth: str | None = Field(default=None, description="DD/MM/YYYY")
    issue_date: str | None = Field(default=None, description="DD/MM/YYYY")
    expiry_date: str | None = Field(default=None, description="DD/MM/YYYY")

    # Provenance
    source_file_name: str = Field(default="", description="Ingested file name")

    # Lifecycle
    status: RecordStatus = Field(default=RecordStatus.PENDING, description="Record status")
    error_message: str | None = Field(
        default=None, description="Failure message, set only when status is error"
    )
    is_duplicate: bool = Field(
        default=False, description="Advisory duplicate flag, recomputed on every change"
    )

    @field_validator("first_name", "last_name", "passport_number", mode="before")
    @classmethod
    def _upper_required(cls, value: Any) -> Any:
        if value is None:
            return ""
        return str(value).upper()

    @field_validator("nationality", "gender", mode="before")
    @classmethod
    def _upper_optional(cls, value: Any) -> Any:
        return _upper_or_none(value)

    @property
    def missing_required_fields(self) -> list[str]:
        """Required fields that are still empty."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def with_changes(self, **changes: Any) -> PassengerRecord:
        """
        Return a validated copy with the given fields replaced.

        Unlike ``model_copy(update=...)`` this re-runs field validation, so
        upper-casing and enum coercion apply to the new values.
        """
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)


ManifestSnapshot = tuple[PassengerRecord, ...]


class SortConfig(BaseModel):
    """Active sort of the manifest view."""

    model_config = ConfigDict(frozen=True)

    key: str | None = Field(default="last_name", description="Record field to sort by")
    order: SortOrder = Field(default=SortOrder.ASC, description="Sort direction")

    @field_validator("key")
    @classmethod
    def _known_key(cls, value: str | None) -> str | None:
        if value is not None and value not in SORTABLE_FIELDS:
            raise ValueError(f"Unknown sort key: {value}")
        return value


class FilterCriteria(BaseModel):
    """Inclusive date-range filter on one of the record date fields."""

    model_config = ConfigDict(frozen=True)

    field: DateField = Field(default=DateField.EXPIRY_DATE, description="Field to filter on")
    start_date: date | None = Field(default=None, description="Inclusive lower bound")
    end_date: date | None = Field(
        default=None, description="Inclusive upper bound (through end of day)"
    )

    @property
    def is_active(self) -> bool:
        """A filter applies only once at least one bound is set."""
        return self.start_date is not None or self.end_date is not None

