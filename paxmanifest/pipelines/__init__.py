"""Ingestion pipeline and retry policy."""

from paxmanifest.pipelines.ingest import (
    BatchIngestionPipeline,
    DocumentSource,
    IngestProgress,
    ProcessingStatus,
)
from paxmanifest.pipelines.retry import (
    ErrorCategory,
    RetryExecutor,
    RetryPolicy,
    categorize_error,
)

__all__ = [
    "BatchIngestionPipeline",
    "DocumentSource",
    "IngestProgress",
    "ProcessingStatus",
    "ErrorCategory",
    "RetryExecutor",
    "RetryPolicy",
    "categorize_error",
]
