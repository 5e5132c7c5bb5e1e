"""
Snapshot-based undo/redo history.

The store is the single writer of manifest state. Every change is a whole
new snapshot handed to ``commit``; there is no in-place mutation API, which
is what keeps undo and redo exact.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from paxmanifest.core.logging import get_logger

logger = get_logger(__name__)

S = TypeVar("S")

DEFAULT_MAX_DEPTH = 50


@dataclass(frozen=True)
class HistoryState(Generic[S]):
    """Read-only view of the history stacks."""

    past: tuple[S, ...]
    present: S
    future: tuple[S, ...]


@dataclass
class HistoryStore(Generic[S]):
    """
    Undo/redo container over immutable snapshots.

    ``past`` is ordered oldest first and capped at ``max_depth`` entries;
    ``future`` is ordered next-to-redo first.
    """

    present: S
    max_depth: int = DEFAULT_MAX_DEPTH
    _past: list[S] = field(default_factory=list, init=False, repr=False)
    _future: list[S] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate depth."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")

    @property
    def past(self) -> tuple[S, ...]:
        """Snapshots available for undo, oldest first."""
        return tuple(self._past)

    @property
    def future(self) -> tuple[S, ...]:
        """Snapshots available for redo, next first."""
        return tuple(self._future)

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def state(self) -> HistoryState[S]:
        """Frozen copy of the current stacks."""
        return HistoryState(past=self.past, present=self.present, future=self.future)

    def _push_past(self, snapshot: S) -> None:
        self._past.append(snapshot)
        overflow = len(self._past) - self.max_depth
        if overflow > 0:
            del self._past[:overflow]

    def commit(self, next_snapshot: S, *, amend: bool = False) -> bool:
        """
        Make ``next_snapshot`` the present state.

        Args:
            next_snapshot: The complete next snapshot.
            amend: Replace the present without recording a history entry.
                The redo stack is still cleared: its snapshots predate the
                amended change.

        Returns:
            False if ``next_snapshot`` is the present object itself (no-op),
            True otherwise.
        """
        if next_snapshot is self.present:
            return False

        if not amend:
            self._push_past(self.present)
        self._future.clear()

        self.present = next_snapshot
        return True

    def discard_future(self) -> bool:
        """
        Drop the redo stack without changing the present.

        Returns:
            True if there was anything to drop.
        """
        if not self._future:
            return False
        self._future.clear()
        logger.debug("Redo stack discarded")
        return True

    def undo(self) -> bool:
        """
        Step back one snapshot.

        Returns:
            True if a snapshot was restored, False when there is nothing to undo.
        """
        if not self._past:
            return False

        previous = self._past.pop()
        self._future.insert(0, self.present)
        self.present = previous
        logger.debug("Undo: %d past, %d future", len(self._past), len(self._future))
        return True

    def redo(self) -> bool:
        """
        Step forward one snapshot.

        Returns:
            True if a snapshot was restored, False when there is nothing to redo.
        """
        if not self._future:
            return False

        following = self._future.pop(0)
        self._push_past(self.present)
        self.present = following
        logger.debug("Redo: %d past, %d future", len(self._past), len(self._future))
        return True
