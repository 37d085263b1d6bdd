"""Per-entry completion status derived from reconciliation results."""

from collections.abc import Iterable, Sequence

from src.identity.schemas import MatchResult, RosterEntry


class CompletionTracker:
    """Map of roster name -> completed flag.

    Kept apart from the roster itself so reference data stays immutable.
    Marking is idempotent.
    """

    def __init__(self, roster: Sequence[RosterEntry]):
        self._roster = tuple(roster)
        self._completed: dict[str, bool] = {entry.name: False for entry in roster}

    @classmethod
    def from_matches(
        cls,
        roster: Sequence[RosterEntry],
        matches: Iterable[MatchResult],
    ) -> "CompletionTracker":
        """Build the view by folding match results in order."""
        tracker = cls(roster)
        for match in matches:
            if match.matched_entry is not None:
                tracker.mark_completed(match.matched_entry)
        return tracker

    def mark_completed(self, entry: RosterEntry) -> bool:
        """Flag an entry as completed.

        Returns:
            True if the flag changed, False if it was already set
        """
        if entry.name not in self._completed:
            raise KeyError(f"Not on roster: {entry.name}")
        if self._completed[entry.name]:
            return False
        self._completed[entry.name] = True
        return True

    def is_completed(self, name: str) -> bool:
        return self._completed.get(name, False)

    def as_dict(self) -> dict[str, bool]:
        return dict(self._completed)

    def completed_entries(self, include_excluded: bool = False) -> list[RosterEntry]:
        return [
            e
            for e in self._roster
            if self._completed[e.name] and (include_excluded or not e.is_excluded)
        ]

    def pending_entries(self, include_excluded: bool = False) -> list[RosterEntry]:
        return [
            e
            for e in self._roster
            if not self._completed[e.name] and (include_excluded or not e.is_excluded)
        ]
