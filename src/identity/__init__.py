"""Identity reconciliation for matching typed names to the class roster.

This module provides:
- name_similarity: 0-1 closeness score between two names
- reconcile / RosterReconciler: exact -> similarity resolution with a
  strict acceptance threshold
- CompletionTracker: per-entry completion view built from matches
- confidence_band: display label for a confidence score
- build_reconciliation_report: observer view over stored results
"""

from src.identity.completion import CompletionTracker
from src.identity.confidence import confidence_band
from src.identity.reconciler import (
    ACCEPTANCE_THRESHOLD,
    RosterReconciler,
    find_exact_match,
    reconcile,
)
from src.identity.report import (
    ReconciledSubmission,
    ReconciliationReport,
    build_reconciliation_report,
)
from src.identity.schemas import ConfidenceBand, MatchResult, RosterEntry
from src.identity.similarity import name_similarity

__all__ = [
    "ACCEPTANCE_THRESHOLD",
    "CompletionTracker",
    "ConfidenceBand",
    "MatchResult",
    "ReconciledSubmission",
    "ReconciliationReport",
    "RosterEntry",
    "RosterReconciler",
    "build_reconciliation_report",
    "confidence_band",
    "find_exact_match",
    "name_similarity",
    "reconcile",
]
