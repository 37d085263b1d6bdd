"""Tests for the completion view."""

import pytest

from src.identity.completion import CompletionTracker
from src.identity.reconciler import reconcile
from src.identity.schemas import RosterEntry


class TestCompletionTracker:
    """Tests for CompletionTracker."""

    def test_starts_all_pending(self, roster: tuple[RosterEntry, ...]):
        """Every roster entry starts not completed."""
        tracker = CompletionTracker(roster)

        assert tracker.as_dict() == {e.name: False for e in roster}

    def test_mark_completed_reports_change(self, roster: tuple[RosterEntry, ...]):
        """First mark returns True, repeat returns False."""
        tracker = CompletionTracker(roster)

        assert tracker.mark_completed(roster[0]) is True
        assert tracker.mark_completed(roster[0]) is False
        assert tracker.is_completed(roster[0].name) is True

    def test_mark_unknown_entry_raises(self, roster: tuple[RosterEntry, ...]):
        """Entries outside the roster are rejected."""
        tracker = CompletionTracker(roster)

        with pytest.raises(KeyError):
            tracker.mark_completed(RosterEntry(name="Stranger"))

    def test_from_matches_folds_in_order(self, roster: tuple[RosterEntry, ...]):
        """Only matched results flip entries."""
        matches = [reconcile(n, roster) for n in ["budi santoso", "nobody"]]

        tracker = CompletionTracker.from_matches(roster, matches)

        assert tracker.completed_entries() == [roster[0]]

    def test_excluded_entries_hidden_by_default(self, roster: tuple[RosterEntry, ...]):
        """Excluded entries are left out of pending/completed listings."""
        tracker = CompletionTracker(roster)

        pending = tracker.pending_entries()
        everyone = tracker.pending_entries(include_excluded=True)

        assert all(not e.is_excluded for e in pending)
        assert len(everyone) == len(roster)
        assert len(pending) == len(roster) - 1
