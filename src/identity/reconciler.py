"""Roster reconciliation for free-text participant names.

Resolution pipeline (in order):
1. Exact match (case-insensitive, O(n) string comparison)
2. Similarity match (best score above ACCEPTANCE_THRESHOLD, first in
   roster order on ties)

Anything else is reported as "no match" with confidence 0.0.
"""

from collections.abc import Iterable, Sequence

import structlog

from src.identity.completion import CompletionTracker
from src.identity.schemas import MatchResult, RosterEntry
from src.identity.similarity import name_similarity

logger = structlog.get_logger()

ACCEPTANCE_THRESHOLD = 0.3


def find_exact_match(
    submitted_name: str,
    roster: Sequence[RosterEntry],
) -> RosterEntry | None:
    """Check for exact name match (case-insensitive).

    Args:
        submitted_name: Name to match
        roster: Roster entries to search

    Returns:
        Matched entry or None
    """
    normalized = submitted_name.lower()
    for entry in roster:
        if entry.key == normalized:
            return entry
    return None


def reconcile(
    submitted_name: str,
    roster: Sequence[RosterEntry],
    threshold: float = ACCEPTANCE_THRESHOLD,
) -> MatchResult:
    """Map a submitted name to the best roster entry.

    Args:
        submitted_name: Name as typed by the participant
        roster: Class roster, in its stored order
        threshold: Scores must be strictly greater than this to match

    Returns:
        MatchResult with the matched entry, or without one if nothing
        cleared the threshold
    """
    exact = find_exact_match(submitted_name, roster)
    if exact:
        return MatchResult(
            submitted_name=submitted_name,
            matched_entry=exact,
            confidence=1.0,
        )

    best_entry: RosterEntry | None = None
    best_score = 0.0
    for entry in roster:
        score = name_similarity(entry.name, submitted_name)
        # Strict comparison keeps the earliest entry on ties
        if score > best_score:
            best_entry, best_score = entry, score

    if best_entry is not None and best_score > threshold:
        return MatchResult(
            submitted_name=submitted_name,
            matched_entry=best_entry,
            confidence=best_score,
        )

    return MatchResult(
        submitted_name=submitted_name,
        matched_entry=None,
        confidence=0.0,
        best_rejected_score=best_score,
    )


class RosterReconciler:
    """Reconciles batches of submitted names against a fixed roster.

    The roster is read-only and may be shared. The completion view is
    owned by this reconciler and only written here, one submission at a
    time in the order given.
    """

    def __init__(
        self,
        roster: Sequence[RosterEntry],
        threshold: float = ACCEPTANCE_THRESHOLD,
    ):
        """Initialize reconciler.

        Args:
            roster: Class roster (immutable)
            threshold: Acceptance threshold for similarity matches
        """
        self._roster = tuple(roster)
        self._threshold = threshold
        self._completion = CompletionTracker(self._roster)

    @property
    def roster(self) -> tuple[RosterEntry, ...]:
        return self._roster

    @property
    def completion(self) -> CompletionTracker:
        return self._completion

    def reconcile(self, submitted_name: str) -> MatchResult:
        """Reconcile one name and fold it into the completion view."""
        result = reconcile(submitted_name, self._roster, self._threshold)
        if result.matched_entry is not None:
            self._completion.mark_completed(result.matched_entry)
        else:
            logger.info(
                "No roster match",
                submitted_name=submitted_name,
                best_rejected_score=round(result.best_rejected_score, 3),
            )
        return result

    def reconcile_all(self, names: Iterable[str]) -> list[MatchResult]:
        """Reconcile multiple names sequentially.

        Args:
            names: Submitted names in submission order

        Returns:
            List of match results in the same order as names
        """
        return [self.reconcile(name) for name in names]
