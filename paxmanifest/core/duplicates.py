"""
Duplicate passenger detection.

A record is flagged when another completed record shares its passport
number or its full name. The flag is advisory and never blocks anything.
"""

from __future__ import annotations

from typing import Any, Iterable

from paxmanifest.core.schema import ManifestSnapshot, PassengerRecord, RecordStatus


def _norm(value: str | None) -> str:
    return (value or "").strip().upper()


def is_duplicate(
    candidate: PassengerRecord | Any,
    exclude_id: str | None,
    snapshot: Iterable[PassengerRecord],
) -> bool:
    """
    Check whether ``candidate`` matches another completed record.

    Args:
        candidate: Record (or any object with first_name, last_name and
            passport_number attributes) to check.
        exclude_id: Id to skip, normally the candidate's own id.
        snapshot: Records to compare against.

    Returns:
        True if any other completed record has the same passport number, or
        the same first and last name, after trimming and upper-casing.
    """
    passport = _norm(candidate.passport_number)
    first = _norm(candidate.first_name)
    last = _norm(candidate.last_name)

    if not passport and not (first and last):
        return False

    for other in snapshot:
        if other.id == exclude_id or other.status != RecordStatus.COMPLETED:
            continue

        if passport and passport == _norm(other.passport_number):
            return True

        if first and last and first == _norm(other.first_name) and last == _norm(other.last_name):
            return True

    return False


def refresh_duplicate_flags(snapshot: ManifestSnapshot) -> ManifestSnapshot:
    """
    Recompute ``is_duplicate`` for every record in a snapshot.

    Completed records are checked against their siblings; every other
    record is unflagged. Unchanged records are reused, and when no flag
    changes the input tuple itself is returned.
    """
    changed = False
    refreshed: list[PassengerRecord] = []

    for record in snapshot:
        flag = record.status == RecordStatus.COMPLETED and is_duplicate(
            record, record.id, snapshot
        )
        if flag != record.is_duplicate:
            record = record.model_copy(update={"is_duplicate": flag})
            changed = True
        refreshed.append(record)

    return tuple(refreshed) if changed else snapshot
