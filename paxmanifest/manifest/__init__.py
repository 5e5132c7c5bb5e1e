"""Manifest operations: snapshot mutators and the sort/filter view."""

from paxmanifest.manifest.mutations import (
    add_record,
    clear_records,
    complete_record,
    delete_record,
    fail_record,
    find_record,
    make_placeholder,
    prepend_placeholders,
    update_record,
)
from paxmanifest.manifest.view import (
    apply_view,
    filter_records,
    sort_records,
    toggle_sort,
)

__all__ = [
    "add_record",
    "clear_records",
    "complete_record",
    "delete_record",
    "fail_record",
    "find_record",
    "make_placeholder",
    "prepend_placeholders",
    "update_record",
    "apply_view",
    "filter_records",
    "sort_records",
    "toggle_sort",
]
