"""
Batch ingestion pipeline.

Turns a selection of document files into manifest records: one processing
placeholder per file is committed up front, then files are sent to the
recognizer strictly one at a time and each placeholder is resolved to
completed or error as its result arrives.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Union

from paxmanifest.core.logging import get_logger
from paxmanifest.core.schema import ExtractedFields, ManifestSnapshot
from paxmanifest.history.store import HistoryStore
from paxmanifest.manifest.mutations import (
    complete_record,
    fail_record,
    find_record,
    make_placeholder,
    prepend_placeholders,
)
from paxmanifest.pipelines.retry import RetryExecutor, RetryPolicy
from paxmanifest.recognition.base import DocumentFile, Recognizer

logger = get_logger(__name__)

DocumentSource = Union[DocumentFile, str, Path]


class ProcessingStatus(str, Enum):
    """Pipeline-level status."""

    IDLE = "idle"
    PROCESSING = "processing"


@dataclass(frozen=True)
class IngestProgress:
    """Progress of the running (or last) batch."""

    status: ProcessingStatus = ProcessingStatus.IDLE
    processed_count: int = 0
    total_count: int = 0
    started_at: float | None = None
    updated_at: float | None = None

    @property
    def percent(self) -> int:
        """Completion percentage, rounded."""
        if self.total_count == 0:
            return 0
        return round(self.processed_count / self.total_count * 100)

    @property
    def elapsed_seconds(self) -> float:
        if self.started_at is None or self.updated_at is None:
            return 0.0
        return self.updated_at - self.started_at

    @property
    def estimated_remaining_seconds(self) -> float | None:
        """Average time per processed file times the files left."""
        if self.processed_count == 0:
            return None
        per_file = self.elapsed_seconds / self.processed_count
        return per_file * (self.total_count - self.processed_count)


ProgressCallback = Callable[[IngestProgress], None]


def source_name(source: DocumentSource) -> str:
    """File name shown on the placeholder."""
    if isinstance(source, DocumentFile):
        return source.name
    return Path(source).name


def load_document(source: DocumentSource) -> DocumentFile:
    """Materialize a document, reading it from disk if given a path."""
    if isinstance(source, DocumentFile):
        return source
    return DocumentFile.from_path(source)


class BatchIngestionPipeline:
    """
    Sequential document ingestion into a history-backed manifest.

    At most one recognizer call is in flight at any time. A batch started
    while another is running gets its placeholders immediately and waits
    for the running batch before its files are processed.
    """

    def __init__(
        self,
        history: HistoryStore[ManifestSnapshot],
        recognizer: Recognizer,
        *,
        retry_policy: RetryPolicy | None = None,
        on_progress: ProgressCallback | None = None,
        today: Callable[[], date] = date.today,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the pipeline.

        Args:
            history: History store holding the manifest.
            recognizer: Recognition service collaborator.
            retry_policy: Retry policy for recognizer calls (default: no retry).
            on_progress: Called after the batch is queued and after every file.
            today: Provides the reference date for age derivation.
            clock: Monotonic clock used for progress timing.
        """
        self.history = history
        self.recognizer = recognizer
        self.executor = RetryExecutor(retry_policy)
        self.on_progress = on_progress
        self.today = today
        self.clock = clock
        self._progress = IngestProgress()
        self._lock = asyncio.Lock()

    @property
    def progress(self) -> IngestProgress:
        return self._progress

    @property
    def is_busy(self) -> bool:
        return self._progress.status == ProcessingStatus.PROCESSING

    def _emit(self, **changes: object) -> None:
        self._progress = replace(self._progress, updated_at=self.clock(), **changes)
        if self.on_progress is not None:
            self.on_progress(self._progress)

    def _queue(self, count: int) -> None:
        if self.is_busy:
            self._emit(total_count=self._progress.total_count + count)
        else:
            now = self.clock()
            self._progress = IngestProgress(
                status=ProcessingStatus.PROCESSING,
                total_count=count,
                started_at=now,
                updated_at=now,
            )
            self._emit()

    async def ingest(self, files: Iterable[DocumentSource]) -> IngestProgress:
        """
        Ingest a batch of documents.

        Args:
            files: Documents or paths. An empty selection is ignored.

        Returns:
            Progress after the batch finished.
        """
        sources = list(files)
        if not sources:
            return self._progress

        placeholders = [make_placeholder(source_name(s)) for s in sources]
        self.history.commit(prepend_placeholders(self.history.present, placeholders))
        self._queue(len(sources))
        logger.info("Queued %d document(s) for extraction", len(sources))

        async with self._lock:
            for source, placeholder in zip(sources, placeholders):
                await self._process_one(source, placeholder.id)

                processed = self._progress.processed_count + 1
                if processed >= self._progress.total_count:
                    self._emit(processed_count=processed, status=ProcessingStatus.IDLE)
                    logger.info("Extraction finished: %d document(s)", processed)
                else:
                    self._emit(processed_count=processed)

        return self._progress

    async def _process_one(self, source: DocumentSource, record_id: str) -> None:
        name = source_name(source)
        try:
            document = load_document(source)
            fields, context = await self.executor.execute(
                self.recognizer.extract, document, label=name
            )
            if not isinstance(fields, ExtractedFields):
                fields = ExtractedFields.model_validate(fields)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.warning("Extraction failed for %s: %s", name, message)
            self._land(fail_record(self.history.present, record_id, message), record_id)
            return

        logger.debug("Extracted %s in %d attempt(s)", name, context.attempt_count)
        self._land(
            complete_record(self.history.present, record_id, fields, self.today()),
            record_id,
        )

    def _land(self, next_snapshot: ManifestSnapshot, record_id: str) -> None:
        """Apply a per-file result inside the batch's history entry."""
        if self.history.commit(next_snapshot, amend=True):
            return

        # Placeholder is not in the present; a redo must not bring it back unresolved
        if any(find_record(s, record_id) for s in self.history.future):
            self.history.discard_future()
            logger.debug("Dropped result for %s and discarded redo stack", record_id)
