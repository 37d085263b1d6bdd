"""Quiz session API endpoints.

Exposes the single in-process quiz session: start, answer, navigate,
submit, retry storing the result, and reset for a retake.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from src.quiz.review import ResultReview, build_result_review
from src.quiz.schemas import QuizResult, SessionSnapshot
from src.quiz.session import QuizSession, QuizValidationError
from src.quiz.timer import format_clock

router = APIRouter(prefix="/quiz", tags=["quiz"])


class StartRequest(BaseModel):
    """Request to start the quiz."""

    user_name: str = Field(description="Participant's name as typed")


class AnswerRequest(BaseModel):
    """Request to record an answer. value null clears it."""

    value: str | None = Field(default=None, description="Selected option")


class AnswerResponse(BaseModel):
    """Response after recording an answer."""

    question_id: int
    recorded: bool = Field(description="False if the session was not in progress")


class StateResponse(BaseModel):
    """Current session state."""

    session: SessionSnapshot
    clock: str = Field(description="Remaining time as m:ss")


class SubmitResponse(BaseModel):
    """Response after submitting."""

    result: QuizResult
    persisted: bool = Field(description="True if the result store accepted it")
    persistence_error: str | None = Field(
        default=None, description="Why storing failed; retry via /quiz/retry"
    )


def get_quiz_session(request: Request) -> QuizSession:
    """Dependency to get the QuizSession from app state."""
    session = getattr(request.app.state, "quiz_session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Quiz is not configured")
    return session


def _state(session: QuizSession) -> StateResponse:
    return StateResponse(
        session=session.snapshot(),
        clock=format_clock(session.time_remaining),
    )


@router.get("/state", response_model=StateResponse)
async def get_state(
    session: QuizSession = Depends(get_quiz_session),
) -> StateResponse:
    """Return the current session state."""
    return _state(session)


@router.post("/start", response_model=StateResponse)
async def start_quiz(
    request: StartRequest,
    session: QuizSession = Depends(get_quiz_session),
) -> StateResponse:
    """Start the quiz. Blank names are rejected with 422."""
    try:
        await session.start(request.user_name)
    except QuizValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _state(session)


@router.put("/answers/{question_id}", response_model=AnswerResponse)
async def record_answer(
    question_id: int,
    request: AnswerRequest,
    session: QuizSession = Depends(get_quiz_session),
) -> AnswerResponse:
    """Record or overwrite the answer for one question."""
    try:
        recorded = session.record_answer(question_id, request.value)
    except QuizValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return AnswerResponse(question_id=question_id, recorded=recorded)


@router.post("/questions/{question_id}", response_model=StateResponse)
async def go_to_question(
    question_id: int,
    session: QuizSession = Depends(get_quiz_session),
) -> StateResponse:
    """Move to a question."""
    try:
        session.go_to_question(question_id)
    except QuizValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _state(session)


@router.post("/submit", response_model=SubmitResponse)
async def submit_quiz(
    session: QuizSession = Depends(get_quiz_session),
) -> SubmitResponse:
    """Submit the quiz. Submitting again returns the same result."""
    try:
        result = await session.submit()
    except QuizValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return SubmitResponse(
        result=result,
        persisted=session.stored_result is not None,
        persistence_error=session.persistence_error,
    )


@router.post("/retry", response_model=SubmitResponse)
async def retry_persist(
    session: QuizSession = Depends(get_quiz_session),
) -> SubmitResponse:
    """Retry storing the result after a failure."""
    try:
        persisted = await session.retry_persist()
    except QuizValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    result = session.result
    if result is None:
        raise HTTPException(status_code=409, detail="Session has no result")
    return SubmitResponse(
        result=result,
        persisted=persisted,
        persistence_error=session.persistence_error,
    )


@router.get("/review", response_model=ResultReview)
async def review_result(
    session: QuizSession = Depends(get_quiz_session),
) -> ResultReview:
    """Review the completed quiz: answer key, explanations, and section scores."""
    if session.result is None:
        raise HTTPException(status_code=422, detail="The quiz has not been completed")
    return build_result_review(session.questions, session.result)


@router.post("/reset", response_model=StateResponse)
async def reset_quiz(
    session: QuizSession = Depends(get_quiz_session),
) -> StateResponse:
    """Discard the session for a retake."""
    await session.reset()
    return _state(session)
