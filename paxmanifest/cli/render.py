"""
Terminal rendering of the manifest view.
"""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from paxmanifest.core.schema import PassengerRecord, RecordStatus
from paxmanifest.io.export import EXPORT_HEADERS, record_to_row

STATUS_STYLES = {
    RecordStatus.COMPLETED: "green",
    RecordStatus.ERROR: "red",
    RecordStatus.PROCESSING: "yellow",
    RecordStatus.PENDING: "dim",
}


def build_manifest_table(records: Iterable[PassengerRecord]) -> Table:
    """Rich table with the export columns plus status."""
    table = Table(title="Passenger Manifest")
    for header in EXPORT_HEADERS:
        table.add_column(header, style="cyan" if header == "PASSPORT NUMBER" else None)
    table.add_column("STATUS")

    for i, record in enumerate(records, start=1):
        cells = [str(value) for value in record_to_row(i, record)]
        style = STATUS_STYLES[record.status]
        status = f"[{style}]{record.status.value}[/{style}]"
        if record.status == RecordStatus.ERROR and record.error_message:
            status += f" {escape(record.error_message)}"
        if record.is_duplicate:
            status += " [yellow](duplicate)[/yellow]"
        table.add_row(*cells, status)

    return table


def render_manifest(console: Console, records: Iterable[PassengerRecord]) -> None:
    console.print(build_manifest_table(records))
