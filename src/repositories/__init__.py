"""Repository layer for data persistence.

Provides the result store used as the quiz session's result sink and as
the source for the reconciliation report.
"""

from src.repositories.results_repo import ResultSink, ResultSinkError, ResultsRepository

__all__ = [
    "ResultSink",
    "ResultSinkError",
    "ResultsRepository",
]
