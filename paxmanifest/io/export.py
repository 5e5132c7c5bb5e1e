"""
Manifest export.

Builds the 11-column manifest table from the current view and writes it as
XLSX, CSV or JSONL.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Iterable

from paxmanifest.core.errors import ExportError
from paxmanifest.core.json_canonical import to_jsonl_line
from paxmanifest.core.logging import get_logger
from paxmanifest.core.schema import PassengerRecord, PassengerType

logger = get_logger(__name__)

EXPORT_HEADERS = (
    "NO",
    "TYPE",
    "TITLE",
    "FIRST NAME",
    "LAST NAME",
    "GENDER",
    "PASSPORT NUMBER",
    "COUNTRY",
    "DATE OF BIRTH",
    "DATE OF ISSUE",
    "DATE OF EXPIRE",
)

# Supported export formats
EXPORT_FORMATS = {"xlsx", "csv", "jsonl"}
DEFAULT_EXPORT_FORMAT = "xlsx"

SHEET_NAME = "Manifest"
HEADER_FILL = "FFFF00"
HEADER_FONT_COLOR = "008000"


@dataclass(frozen=True)
class ExportTable:
    """Header row plus one row per exported record."""

    headers: tuple[str, ...]
    rows: tuple[tuple[Any, ...], ...]

    def as_dicts(self) -> list[dict[str, Any]]:
        """Rows keyed by header."""
        return [dict(zip(self.headers, row)) for row in self.rows]


def record_to_row(number: int, record: PassengerRecord) -> tuple[Any, ...]:
    """One export row; missing values become empty strings."""
    return (
        number,
        (record.passenger_type or PassengerType.ADULT).value,
        record.title or "",
        record.first_name or "",
        record.last_name or "",
        record.gender or "",
        record.passport_number or "",
        record.nationality or "",
        record.date_of_birth or "",
        record.issue_date or "",
        record.expiry_date or "",
    )


def build_export_table(records: Iterable[PassengerRecord]) -> ExportTable:
    """
    Build the export table from records in view order.

    Rows are numbered from 1.
    """
    rows = tuple(record_to_row(i, record) for i, record in enumerate(records, start=1))
    return ExportTable(headers=EXPORT_HEADERS, rows=rows)


def default_export_filename(today: date | None = None, format: str = "xlsx") -> str:
    """
    Default file name for an export.

    Examples:
        >>> default_export_filename(date(2025, 3, 9))
        'Manifest_09-03-2025.xlsx'
    """
    today = today or date.today()
    return f"Manifest_{today.strftime('%d-%m-%Y')}.{format}"


def write_xlsx(table: ExportTable, path: Path) -> None:
    """Write the table as a single-sheet workbook with a highlighted header."""
    from openpyxl import Workbook
    from openpyxl.styles import Alignment, Font, PatternFill

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_NAME

    sheet.append(list(table.headers))
    for row in table.rows:
        sheet.append(list(row))

    fill = PatternFill(start_color=HEADER_FILL, end_color=HEADER_FILL, fill_type="solid")
    font = Font(bold=True, color=HEADER_FONT_COLOR)
    alignment = Alignment(horizontal="center")
    for cell in sheet[1]:
        cell.fill = fill
        cell.font = font
        cell.alignment = alignment

    workbook.save(path)


def write_csv(table: ExportTable, path: Path) -> None:
    """Write the table as CSV."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(table.headers)
        writer.writerows(table.rows)


def write_jsonl(table: ExportTable, path: Path) -> None:
    """Write one JSON object per row, keyed by header."""
    with path.open("w", encoding="utf-8") as f:
        for row in table.as_dicts():
            f.write(to_jsonl_line(row))


_WRITERS = {
    "xlsx": write_xlsx,
    "csv": write_csv,
    "jsonl": write_jsonl,
}


def write_export(
    table: ExportTable,
    path: str | Path,
    *,
    format: str | None = None,
) -> Path:
    """
    Write an export table to disk.

    The format is taken from the file extension unless given.

    Args:
        table: Table to write.
        path: Output file path.
        format: Optional format override ("xlsx", "csv", "jsonl").

    Returns:
        The path written.

    Raises:
        ExportError: If the format is unsupported.
    """
    path = Path(path)

    if format is None:
        suffix = path.suffix.lower().lstrip(".")
        format = "jsonl" if suffix in {"jsonl", "ndjson"} else suffix

    writer = _WRITERS.get(format)
    if writer is None:
        raise ExportError(
            f"Unsupported export format: {format or '(none)'}. Supported: {sorted(EXPORT_FORMATS)}",
            details={"path": str(path)},
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    writer(table, path)
    logger.info("Exported %d row(s) to %s", len(table.rows), path)
    return path
