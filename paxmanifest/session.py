"""
Manifest session.

The single entry point for everything that changes or presents the
manifest. It owns the history store; every mutation computes a full next
snapshot and commits it there, and the view is derived from the present
snapshot on demand.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from paxmanifest.core.dates import parse_iso_date
from paxmanifest.core.logging import get_logger
from paxmanifest.core.schema import (
    DateField,
    ExtractedFields,
    FilterCriteria,
    ManifestSnapshot,
    PassengerRecord,
    RecordStatus,
    SortConfig,
)
from paxmanifest.history.hash import compute_snapshot_hash
from paxmanifest.history.store import DEFAULT_MAX_DEPTH, HistoryStore
from paxmanifest.io.export import (
    DEFAULT_EXPORT_FORMAT,
    ExportTable,
    build_export_table,
    default_export_filename,
    write_export,
)
from paxmanifest.manifest.mutations import (
    add_record,
    clear_records,
    delete_record,
    find_record,
    update_record,
)
from paxmanifest.manifest.view import apply_view, toggle_sort
from paxmanifest.pipelines.ingest import (
    BatchIngestionPipeline,
    DocumentSource,
    IngestProgress,
    ProgressCallback,
)
from paxmanifest.pipelines.retry import RetryPolicy
from paxmanifest.recognition.base import Recognizer

logger = get_logger(__name__)


@dataclass(frozen=True)
class ManifestStats:
    """Record counts for the present snapshot."""

    total: int
    completed: int
    processing: int
    errors: int
    duplicates: int


class ManifestSession:
    """
    Editable passenger manifest with undo/redo.

    Example::

        session = ManifestSession(recognizer)
        await session.ingest(["scan1.jpg", "scan2.jpg"])
        session.edit(session.records[0].id, "first_name", "ana")
        session.undo()
    """

    def __init__(
        self,
        recognizer: Recognizer,
        *,
        history_depth: int = DEFAULT_MAX_DEPTH,
        retry_policy: RetryPolicy | None = None,
        on_progress: ProgressCallback | None = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize an empty session.

        Args:
            recognizer: Recognition service collaborator.
            history_depth: Maximum number of undo steps.
            retry_policy: Retry policy for recognizer calls.
            on_progress: Batch progress callback.
            today: Provides the reference date for age derivation.
        """
        empty: ManifestSnapshot = ()
        self.history: HistoryStore[ManifestSnapshot] = HistoryStore(
            present=empty, max_depth=history_depth
        )
        self.today = today
        self.pipeline = BatchIngestionPipeline(
            self.history,
            recognizer,
            retry_policy=retry_policy,
            on_progress=on_progress,
            today=today,
        )
        self.sort = SortConfig()
        self.filters = FilterCriteria()

    # State

    @property
    def records(self) -> ManifestSnapshot:
        """Present snapshot in insertion order."""
        return self.history.present

    @property
    def progress(self) -> IngestProgress:
        return self.pipeline.progress

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def fingerprint(self) -> str:
        """Content hash of the present snapshot."""
        return compute_snapshot_hash(self.records)

    @property
    def stats(self) -> ManifestStats:
        records = self.records
        return ManifestStats(
            total=len(records),
            completed=sum(r.status == RecordStatus.COMPLETED for r in records),
            processing=sum(
                r.status in (RecordStatus.PROCESSING, RecordStatus.PENDING) for r in records
            ),
            errors=sum(r.status == RecordStatus.ERROR for r in records),
            duplicates=sum(r.is_duplicate for r in records),
        )

    def get(self, record_id: str) -> PassengerRecord | None:
        return find_record(self.records, record_id)

    # Mutations

    async def ingest(self, files: Iterable[DocumentSource]) -> IngestProgress:
        """Ingest documents; see BatchIngestionPipeline.ingest."""
        return await self.pipeline.ingest(files)

    def edit(self, record_id: str, field: str, value: Any) -> bool:
        """
        Edit one field of a record.

        Returns:
            True if the manifest changed.
        """
        return self.history.commit(
            update_record(self.records, record_id, field, value, self.today())
        )

    def delete(self, record_id: str) -> bool:
        """Delete a record. Returns True if the manifest changed."""
        return self.history.commit(delete_record(self.records, record_id))

    def clear(self) -> bool:
        """Remove all records. Returns True if the manifest changed."""
        changed = self.history.commit(clear_records(self.records))
        if changed:
            logger.info("Manifest cleared")
        return changed

    def add_manual(self, fields: ExtractedFields | Mapping[str, Any]) -> PassengerRecord:
        """Add a completed record typed in by the user and return it."""
        self.history.commit(add_record(self.records, fields, self.today()))
        return self.records[0]

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    # View

    def sort_by(self, key: str) -> SortConfig:
        """Pick a sort column; picking the active one flips the order."""
        self.sort = toggle_sort(self.sort, key)
        return self.sort

    def set_filters(
        self,
        field: DateField | str | None = None,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> FilterCriteria:
        """
        Set the date-range filter.

        Date bounds accept ``date`` objects or YYYY-MM-DD strings; empty
        strings clear a bound.
        """
        self.filters = FilterCriteria(
            field=DateField(field) if field else self.filters.field,
            start_date=parse_iso_date(start_date),
            end_date=parse_iso_date(end_date),
        )
        return self.filters

    def clear_filters(self) -> FilterCriteria:
        self.filters = FilterCriteria(field=self.filters.field)
        return self.filters

    def view(self) -> list[PassengerRecord]:
        """Present snapshot, filtered and sorted for display."""
        return apply_view(self.records, self.sort, self.filters)

    # Export

    def export_table(self) -> ExportTable:
        """Export table for the current view."""
        return build_export_table(self.view())

    def export(
        self, path: str | Path | None = None, *, format: str | None = None
    ) -> Path:
        """
        Write the current view to disk.

        Args:
            path: Output file or directory. A directory, or no path at all,
                gets the dated default name (Manifest_DD-MM-YYYY.<format>).
            format: Export format, inferred from the file name when omitted.

        Returns:
            The path written.
        """
        if path is None or Path(path).is_dir():
            name = default_export_filename(self.today(), format or DEFAULT_EXPORT_FORMAT)
            path = Path(path or ".") / name
        return write_export(self.export_table(), path, format=format)
