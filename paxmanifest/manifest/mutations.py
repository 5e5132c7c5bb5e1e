"""
Snapshot mutators.

Each function takes a snapshot and returns the next snapshot. When nothing
changes the input tuple itself is returned, so committing the result is a
no-op for the history store.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping

from paxmanifest.core.derive import derive_attributes
from paxmanifest.core.duplicates import refresh_duplicate_flags
from paxmanifest.core.record_id import new_record_id
from paxmanifest.core.schema import (
    EDITABLE_FIELDS,
    ExtractedFields,
    ManifestSnapshot,
    PassengerRecord,
    RecordStatus,
)

# Editing either of these re-derives title and passenger type
DERIVATION_TRIGGERS = frozenset({"date_of_birth", "gender"})


def _index_of(snapshot: ManifestSnapshot, record_id: str) -> int | None:
    for i, record in enumerate(snapshot):
        if record.id == record_id:
            return i
    return None


def _replace_at(
    snapshot: ManifestSnapshot, index: int, record: PassengerRecord
) -> ManifestSnapshot:
    return snapshot[:index] + (record,) + snapshot[index + 1 :]


def find_record(snapshot: ManifestSnapshot, record_id: str) -> PassengerRecord | None:
    """Look up a record by id."""
    index = _index_of(snapshot, record_id)
    return None if index is None else snapshot[index]


def make_placeholder(source_file_name: str) -> PassengerRecord:
    """Create a processing placeholder for an accepted file."""
    return PassengerRecord(
        id=new_record_id(),
        source_file_name=source_file_name,
        status=RecordStatus.PROCESSING,
    )


def prepend_placeholders(
    snapshot: ManifestSnapshot, placeholders: Iterable[PassengerRecord]
) -> ManifestSnapshot:
    """Put a batch of placeholders ahead of the existing records."""
    batch = tuple(placeholders)
    if not batch:
        return snapshot
    return batch + snapshot


def complete_record(
    snapshot: ManifestSnapshot,
    record_id: str,
    fields: ExtractedFields,
    today: date | None = None,
) -> ManifestSnapshot:
    """
    Merge extraction results into a placeholder and mark it completed.

    A title supplied by the recognition service wins over the derived one;
    the passenger type is always derived.

    Args:
        snapshot: Current snapshot.
        record_id: Placeholder id.
        fields: Extracted fields.
        today: Reference date for age derivation.

    Returns:
        Next snapshot, or the same snapshot if the placeholder is gone.
    """
    index = _index_of(snapshot, record_id)
    if index is None:
        return snapshot

    values = fields.present_fields()
    derived = derive_attributes(values.get("date_of_birth"), values.get("gender"), today)
    values["title"] = values.get("title") or derived.title
    values["passenger_type"] = derived.passenger_type

    record = snapshot[index].with_changes(
        **values,
        status=RecordStatus.COMPLETED,
        error_message=None,
    )
    return refresh_duplicate_flags(_replace_at(snapshot, index, record))


def fail_record(
    snapshot: ManifestSnapshot, record_id: str, message: str
) -> ManifestSnapshot:
    """
    Mark a placeholder as failed.

    Returns:
        Next snapshot, or the same snapshot if the placeholder is gone.
    """
    index = _index_of(snapshot, record_id)
    if index is None:
        return snapshot

    record = snapshot[index].model_copy(
        update={"status": RecordStatus.ERROR, "error_message": message}
    )
    return refresh_duplicate_flags(_replace_at(snapshot, index, record))


def update_record(
    snapshot: ManifestSnapshot,
    record_id: str,
    field: str,
    value: Any,
    today: date | None = None,
) -> ManifestSnapshot:
    """
    Edit one field of a record.

    Names, passport number, nationality and gender are stored upper-cased.
    Editing the date of birth or gender re-derives title and passenger
    type, overwriting any manual title.

    Args:
        snapshot: Current snapshot.
        record_id: Record to edit.
        field: Editable field name.
        value: New value.
        today: Reference date for age derivation.

    Returns:
        Next snapshot, or the same snapshot for unknown ids and unchanged values.

    Raises:
        ValueError: If the field is not editable.
    """
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Field is not editable: {field}")

    index = _index_of(snapshot, record_id)
    if index is None:
        return snapshot

    current = snapshot[index]
    updated = current.with_changes(**{field: value})

    if field in DERIVATION_TRIGGERS:
        derived = derive_attributes(updated.date_of_birth, updated.gender, today)
        updated = updated.model_copy(
            update={"title": derived.title, "passenger_type": derived.passenger_type}
        )

    if updated == current:
        return snapshot

    return refresh_duplicate_flags(_replace_at(snapshot, index, updated))


def delete_record(snapshot: ManifestSnapshot, record_id: str) -> ManifestSnapshot:
    """Remove a record. Unknown ids leave the snapshot unchanged."""
    index = _index_of(snapshot, record_id)
    if index is None:
        return snapshot
    return refresh_duplicate_flags(snapshot[:index] + snapshot[index + 1 :])


def clear_records(snapshot: ManifestSnapshot) -> ManifestSnapshot:
    """Remove every record."""
    if not snapshot:
        return snapshot
    return ()


def add_record(
    snapshot: ManifestSnapshot,
    fields: ExtractedFields | Mapping[str, Any],
    today: date | None = None,
) -> ManifestSnapshot:
    """
    Prepend a manually entered, completed record.

    Args:
        snapshot: Current snapshot.
        fields: Field values, as ExtractedFields or a mapping accepted by it.
        today: Reference date for age derivation.

    Returns:
        Next snapshot with the new record first.
    """
    if not isinstance(fields, ExtractedFields):
        fields = ExtractedFields.model_validate(dict(fields))

    record = PassengerRecord(id=new_record_id(), status=RecordStatus.PROCESSING)
    staged = (record,) + snapshot
    return complete_record(staged, record.id, fields, today)
