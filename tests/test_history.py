"""Tests for the undo/redo history store."""

import pytest

from paxmanifest.history import HistoryStore, compute_snapshot_hash

from conftest import make_record


class TestHistoryStore:
    """Tests for commit/undo/redo."""

    def test_initial_state(self):
        """A fresh store has nothing to undo or redo."""
        store = HistoryStore(present=())
        assert store.present == ()
        assert not store.can_undo
        assert not store.can_redo

    def test_commit_pushes_past(self):
        """Commit should move present to past."""
        store = HistoryStore(present=())
        a = (make_record("px_a"),)
        assert store.commit(a) is True
        assert store.present is a
        assert store.past == ((),)

    def test_undo_redo_exact(self):
        """Undo then redo returns the identical snapshot objects."""
        s0, s1, s2 = (), (make_record("px_a"),), (make_record("px_b"),)
        store = HistoryStore(present=s0)
        store.commit(s1)
        store.commit(s2)

        assert store.undo()
        assert store.present is s1
        assert store.undo()
        assert store.present is s0
        assert store.redo()
        assert store.present is s1
        assert store.redo()
        assert store.present is s2

    def test_commit_clears_future(self):
        """A new commit after undo discards the redo stack."""
        store = HistoryStore(present=())
        store.commit((make_record("px_a"),))
        store.undo()
        assert store.can_redo
        store.commit((make_record("px_b"),))
        assert not store.can_redo

    def test_undo_empty_is_noop(self):
        """Undo with empty past returns False and keeps state."""
        s0 = ()
        store = HistoryStore(present=s0)
        assert store.undo() is False
        assert store.present is s0

    def test_redo_empty_is_noop(self):
        """Redo with empty future returns False."""
        store = HistoryStore(present=())
        assert store.redo() is False

    def test_identity_commit_is_noop(self):
        """Committing the present object creates no entry."""
        s0 = (make_record("px_a"),)
        store = HistoryStore(present=s0)
        assert store.commit(s0) is False
        assert not store.can_undo

    def test_depth_cap_evicts_oldest(self):
        """51 commits keep 50 past entries, dropping the very first."""
        snapshots = [(make_record(f"px_{i}"),) for i in range(52)]
        store = HistoryStore(present=snapshots[0])
        for snap in snapshots[1:]:
            store.commit(snap)

        assert len(store.past) == 50
        assert store.past[0] is snapshots[1]
        assert store.past[-1] is snapshots[50]

    def test_custom_depth(self):
        """Smaller caps are honored."""
        store = HistoryStore(present=0, max_depth=2)
        for i in range(1, 5):
            store.commit(i)
        assert store.past == (2, 3)

    def test_invalid_depth(self):
        """Depth below one is rejected."""
        with pytest.raises(ValueError, match="max_depth"):
            HistoryStore(present=(), max_depth=0)

    def test_amend_replaces_present_only(self):
        """Amend swaps the present without a new history entry."""
        s0, s1, s2 = (), (make_record("px_a"),), (make_record("px_b"),)
        store = HistoryStore(present=s0)
        store.commit(s1)
        store.commit(s2, amend=True)

        assert store.present is s2
        assert store.past == (s0,)
        assert store.undo()
        assert store.present is s0

    def test_amend_clears_future(self):
        """Amend drops redo snapshots that predate it."""
        store = HistoryStore(present=())
        store.commit((make_record("px_a"),))
        store.undo()
        store.commit((make_record("px_b"),), amend=True)
        assert not store.can_redo
        assert store.redo() is False
        assert store.past == ()

    def test_discard_future(self):
        """Discarding the redo stack leaves present and past alone."""
        s0, s1 = (), (make_record("px_a"),)
        store = HistoryStore(present=s0)
        store.commit(s1)
        store.undo()

        assert store.discard_future() is True
        assert store.present is s0
        assert not store.can_redo
        assert store.discard_future() is False

    def test_state_is_frozen_copy(self):
        """State exposes tuples that do not track later commits."""
        store = HistoryStore(present=())
        state = store.state
        store.commit((make_record("px_a"),))
        assert state.past == ()
        assert state.present == ()


class TestSnapshotHash:
    """Tests for snapshot fingerprints."""

    def test_equal_content_equal_hash(self):
        """Equal snapshots hash equally."""
        a = (make_record("px_a", first_name="ANA"),)
        b = (make_record("px_a", first_name="ana"),)
        assert compute_snapshot_hash(a) == compute_snapshot_hash(b)

    def test_order_matters(self):
        """Record order is part of the fingerprint."""
        a, b = make_record("px_a"), make_record("px_b")
        assert compute_snapshot_hash((a, b)) != compute_snapshot_hash((b, a))
