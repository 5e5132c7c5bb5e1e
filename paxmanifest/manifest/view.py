"""
Sort and filter engine.

Derives the presentation view of a snapshot. Nothing here mutates state or
touches history.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from paxmanifest.core.dates import parse_record_date
from paxmanifest.core.schema import (
    SORTABLE_FIELDS,
    FilterCriteria,
    PassengerRecord,
    SortConfig,
    SortOrder,
)


def sort_value(record: PassengerRecord, key: str) -> str:
    """
    String form of a field used for ordering.

    Missing values sort as the empty string; enums use their value; the
    comparison is case-insensitive.
    """
    value: Any = getattr(record, key, None)
    if value is None or value is False:
        return ""
    if isinstance(value, Enum):
        value = value.value
    return str(value).upper()


def filter_records(
    records: Iterable[PassengerRecord], filters: FilterCriteria | None
) -> list[PassengerRecord]:
    """
    Keep records whose filter field falls inside the date range.

    The filter is inactive until a start or end date is set. Once active,
    records with an absent or unparseable value are dropped. Both bounds
    are inclusive.
    """
    records = list(records)
    if filters is None or not filters.is_active:
        return records

    kept = []
    for record in records:
        value = parse_record_date(getattr(record, filters.field.value))
        if value is None:
            continue
        if filters.start_date is not None and value < filters.start_date:
            continue
        if filters.end_date is not None and value > filters.end_date:
            continue
        kept.append(record)
    return kept


def sort_records(
    records: Iterable[PassengerRecord], sort: SortConfig | None
) -> list[PassengerRecord]:
    """
    Stable lexicographic sort on one field.

    Ties keep their prior relative order in both directions.
    """
    records = list(records)
    if sort is None or sort.key is None:
        return records

    key = sort.key
    return sorted(
        records,
        key=lambda r: sort_value(r, key),
        reverse=sort.order == SortOrder.DESC,
    )


def apply_view(
    records: Iterable[PassengerRecord],
    sort: SortConfig | None = None,
    filters: FilterCriteria | None = None,
) -> list[PassengerRecord]:
    """Filter, then sort, a snapshot for display or export."""
    return sort_records(filter_records(records, filters), sort)


def toggle_sort(current: SortConfig, key: str) -> SortConfig:
    """
    Sort config after the user picks ``key``.

    Picking the active key flips the order; picking another key sorts it
    ascending.

    Raises:
        ValueError: If ``key`` is not a sortable field.
    """
    if key not in SORTABLE_FIELDS:
        raise ValueError(f"Unknown sort key: {key}")

    if current.key == key and current.order == SortOrder.ASC:
        return SortConfig(key=key, order=SortOrder.DESC)
    return SortConfig(key=key, order=SortOrder.ASC)
