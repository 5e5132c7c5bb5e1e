"""History system: snapshot undo/redo and snapshot fingerprints."""

from paxmanifest.history.store import DEFAULT_MAX_DEPTH, HistoryState, HistoryStore
from paxmanifest.history.hash import compute_record_hash, compute_snapshot_hash

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "HistoryState",
    "HistoryStore",
    "compute_record_hash",
    "compute_snapshot_hash",
]
