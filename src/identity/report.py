"""Reconciliation report over stored quiz results.

Builds the observer view: every stored result with its roster match and
confidence band, plus which roster entries have and have not completed
the quiz.
"""

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.identity.confidence import confidence_band
from src.identity.reconciler import ACCEPTANCE_THRESHOLD, RosterReconciler
from src.identity.schemas import ConfidenceBand, MatchResult, RosterEntry
from src.quiz.schemas import StoredResult


class ScoreBand(str, Enum):
    """Coarse grade for a total score out of 30."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


def score_band(total_score: int) -> ScoreBand:
    """Grade a total score: >= 21 good, >= 15 fair, else poor."""
    if total_score >= 21:
        return ScoreBand.GOOD
    if total_score >= 15:
        return ScoreBand.FAIR
    return ScoreBand.POOR


def format_elapsed(seconds: int) -> str:
    """Format elapsed time as e.g. '12m 5s'."""
    return f"{seconds // 60}m {seconds % 60}s"


class ReconciledSubmission(BaseModel):
    """A stored result paired with its roster match."""

    model_config = ConfigDict(frozen=True)

    result: StoredResult
    match: MatchResult
    band: ConfidenceBand
    score_band: ScoreBand
    elapsed_display: str


class ReconciliationReport(BaseModel):
    """Observer view over all submissions."""

    submissions: list[ReconciledSubmission] = Field(
        description="Submissions in submission order"
    )
    completion: dict[str, bool] = Field(description="Roster name -> completed")
    completed: list[RosterEntry] = Field(description="Roster entries that finished")
    pending: list[RosterEntry] = Field(description="Roster entries still to finish")
    unmatched_count: int = Field(description="Submissions with no roster match")


def build_reconciliation_report(
    results: Sequence[StoredResult],
    roster: Sequence[RosterEntry],
    threshold: float = ACCEPTANCE_THRESHOLD,
) -> ReconciliationReport:
    """Reconcile stored results against the roster.

    Results are processed oldest first regardless of the order the store
    returned them in, so the completion view is deterministic.

    Args:
        results: Stored results (any order)
        roster: Class roster
        threshold: Acceptance threshold for similarity matches

    Returns:
        ReconciliationReport; excluded roster entries are left out of the
        completed/pending lists but still appear in the completion map
    """
    ordered = sorted(
        results, key=lambda r: (r.created_at, r.id if r.id is not None else 0)
    )
    reconciler = RosterReconciler(roster, threshold=threshold)

    submissions = []
    for result in ordered:
        match = reconciler.reconcile(result.user_name)
        submissions.append(
            ReconciledSubmission(
                result=result,
                match=match,
                band=confidence_band(match.confidence),
                score_band=score_band(result.total_score),
                elapsed_display=format_elapsed(result.time_elapsed_seconds),
            )
        )

    completion = reconciler.completion
    return ReconciliationReport(
        submissions=submissions,
        completion=completion.as_dict(),
        completed=completion.completed_entries(),
        pending=completion.pending_entries(),
        unmatched_count=sum(1 for s in submissions if not s.match.is_match),
    )
