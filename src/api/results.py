"""Results API endpoints.

Lists stored results, reconciles them against the class roster, and
reviews them against the answer key.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.identity.report import ReconciliationReport, build_reconciliation_report
from src.identity.schemas import RosterEntry
from src.quiz.review import ResultReview, build_result_review
from src.quiz.schemas import Question, StoredResult
from src.repositories.results_repo import ResultsRepository

router = APIRouter(prefix="/results", tags=["results"])


def get_results_repo(request: Request) -> ResultsRepository:
    """Dependency to get ResultsRepository from app state."""
    repo = getattr(request.app.state, "results_repo", None)
    if repo is None:
        raise HTTPException(status_code=503, detail="Result store not available")
    return repo


def get_roster(request: Request) -> tuple[RosterEntry, ...]:
    """Dependency to get the loaded roster from app state."""
    roster = getattr(request.app.state, "roster", None)
    if roster is None:
        raise HTTPException(status_code=503, detail="Roster not loaded")
    return roster


def get_questions(request: Request) -> tuple[Question, ...]:
    """Dependency to get the question bank from the configured quiz session."""
    session = getattr(request.app.state, "quiz_session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Question bank not loaded")
    return session.questions


@router.get("/", response_model=list[StoredResult])
async def list_results(
    repo: ResultsRepository = Depends(get_results_repo),
) -> list[StoredResult]:
    """List stored results, newest first."""
    return await repo.list_results()


@router.get("/reconciliation", response_model=ReconciliationReport)
async def reconciliation_report(
    repo: ResultsRepository = Depends(get_results_repo),
    roster: tuple[RosterEntry, ...] = Depends(get_roster),
) -> ReconciliationReport:
    """Match every submitted name to the roster and report completion."""
    results = await repo.list_results()
    return build_reconciliation_report(results, roster)


@router.get("/answer-key", response_model=list[Question])
async def answer_key(
    questions: tuple[Question, ...] = Depends(get_questions),
) -> list[Question]:
    """List every question with its correct answer and explanation."""
    return list(questions)


@router.get("/{result_id}/review", response_model=ResultReview)
async def review_result(
    result_id: int,
    repo: ResultsRepository = Depends(get_results_repo),
    questions: tuple[Question, ...] = Depends(get_questions),
) -> ResultReview:
    """Review one stored result against the answer key."""
    result = await repo.get_result(result_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Result {result_id} not found")
    return build_result_review(questions, result)
