"""Tests for duplicate detection."""

from paxmanifest.core.duplicates import is_duplicate, refresh_duplicate_flags
from paxmanifest.core.schema import RecordStatus

from conftest import make_record


class TestIsDuplicate:
    """Tests for the duplicate rule."""

    def test_same_passport(self):
        """Matching passport numbers flag a duplicate."""
        a = make_record("px_a", passport_number="X123")
        b = make_record("px_b", passport_number=" x123 ")
        assert is_duplicate(b, b.id, (a, b))

    def test_same_full_name(self):
        """Matching first and last names flag a duplicate."""
        a = make_record("px_a", first_name="ANA", last_name="LOPEZ", passport_number="1")
        b = make_record("px_b", first_name="ana ", last_name=" lopez", passport_number="2")
        assert is_duplicate(b, b.id, (a, b))

    def test_partial_name_match_is_not_duplicate(self):
        """Only one matching name is not enough."""
        a = make_record("px_a", first_name="ANA", last_name="LOPEZ")
        b = make_record("px_b", first_name="ANA", last_name="RUIZ")
        assert not is_duplicate(b, b.id, (a, b))

    def test_excludes_self(self):
        """A record never matches itself."""
        a = make_record("px_a", passport_number="X123")
        assert not is_duplicate(a, a.id, (a,))

    def test_only_completed_targets(self):
        """Processing and error records are never match targets."""
        candidate = make_record("px_c", passport_number="X123")
        others = (
            make_record("px_p", passport_number="X123", status=RecordStatus.PROCESSING),
            make_record("px_e", passport_number="X123", status=RecordStatus.ERROR),
            make_record("px_q", passport_number="X123", status=RecordStatus.PENDING),
        )
        assert not is_duplicate(candidate, candidate.id, others + (candidate,))

    def test_candidate_without_identity(self):
        """No passport and incomplete names short-circuits to False."""
        a = make_record("px_a", first_name="ANA")
        b = make_record("px_b", first_name="ANA")
        assert not is_duplicate(b, b.id, (a, b))

    def test_symmetric(self):
        """If A flags B, B flags A."""
        a = make_record("px_a", first_name="ANA", last_name="LOPEZ", passport_number="1")
        b = make_record("px_b", first_name="BEN", last_name="ORTIZ", passport_number="1")
        snapshot = (a, b)
        assert is_duplicate(a, a.id, snapshot) == is_duplicate(b, b.id, snapshot) is True


class TestRefreshDuplicateFlags:
    """Tests for snapshot-wide flag recomputation."""

    def test_flags_both_sides(self):
        """Both records of a pair should be flagged."""
        snapshot = (
            make_record("px_a", passport_number="X1"),
            make_record("px_b", passport_number="X1"),
            make_record("px_c", passport_number="X2"),
        )
        refreshed = refresh_duplicate_flags(snapshot)
        assert [r.is_duplicate for r in refreshed] == [True, True, False]

    def test_clears_stale_flags(self):
        """Flags should drop when the sibling disappears."""
        snapshot = (make_record("px_a", passport_number="X1", is_duplicate=True),)
        refreshed = refresh_duplicate_flags(snapshot)
        assert refreshed[0].is_duplicate is False

    def test_non_completed_never_flagged(self):
        """Non-completed records are always unflagged."""
        snapshot = (
            make_record("px_a", passport_number="X1"),
            make_record("px_b", passport_number="X1", status=RecordStatus.ERROR, is_duplicate=True),
        )
        refreshed = refresh_duplicate_flags(snapshot)
        assert refreshed[1].is_duplicate is False
        assert refreshed[0].is_duplicate is False

    def test_unchanged_returns_same_tuple(self):
        """No flag change should return the input object."""
        snapshot = (make_record("px_a", passport_number="X1"),)
        assert refresh_duplicate_flags(snapshot) is snapshot
