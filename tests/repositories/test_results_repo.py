"""Tests for ResultsRepository."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.db.turso import TursoClient
from src.quiz.schemas import Answer, QuizResult
from src.repositories.results_repo import ResultSinkError, ResultsRepository


def _result(user_name: str = "Budi Santoso", total: int = 20) -> QuizResult:
    return QuizResult(
        user_name=user_name,
        total_score=total,
        structure_score=12,
        written_score=total - 12,
        time_elapsed_seconds=900,
        answers=(
            Answer(question_id=1, value="B"),
            Answer(question_id=2, value=None),
        ),
    )


@pytest.mark.asyncio
async def test_initialize_creates_table(db_client: TursoClient):
    """Initialize should create quiz_results table."""
    repo = ResultsRepository(db_client)
    await repo.initialize()

    result = await db_client.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='quiz_results'"
    )
    assert len(result.rows) == 1


@pytest.mark.asyncio
async def test_initialize_is_idempotent(results_repo: ResultsRepository):
    """Running initialize twice is safe."""
    await results_repo.initialize()


@pytest.mark.asyncio
async def test_persist_and_list(results_repo: ResultsRepository):
    """Should store a result and read it back."""
    stored = await results_repo.persist(_result())

    assert stored.id is not None
    assert stored.user_name == "Budi Santoso"

    listed = await results_repo.list_results()

    assert len(listed) == 1
    assert listed[0].id == stored.id
    assert listed[0].total_score == 20
    assert listed[0].structure_score == 12
    assert listed[0].written_score == 8
    assert listed[0].time_elapsed_seconds == 900
    assert listed[0].answers == (
        Answer(question_id=1, value="B"),
        Answer(question_id=2, value=None),
    )
    assert listed[0].created_at == stored.created_at


@pytest.mark.asyncio
async def test_list_newest_first(results_repo: ResultsRepository):
    """Listing returns the most recent result first."""
    await results_repo.persist(_result("First"))
    await results_repo.persist(_result("Second"))

    listed = await results_repo.list_results()

    assert [r.user_name for r in listed] == ["Second", "First"]


@pytest.mark.asyncio
async def test_list_empty(results_repo: ResultsRepository):
    """Empty store lists nothing."""
    assert await results_repo.list_results() == []


@pytest.mark.asyncio
async def test_persist_failure_raises_sink_error():
    """Database errors surface as ResultSinkError."""
    db = MagicMock(spec=TursoClient)
    db.execute = AsyncMock(side_effect=RuntimeError("disk I/O error"))
    repo = ResultsRepository(db)

    with pytest.raises(ResultSinkError, match="disk I/O error"):
        await repo.persist(_result())


@pytest.mark.asyncio
async def test_persist_without_connection_raises_sink_error():
    """Using an unconnected client is a storage failure."""
    repo = ResultsRepository(TursoClient(url="file:unused.db"))

    with pytest.raises(ResultSinkError):
        await repo.persist(_result())


@pytest.mark.asyncio
async def test_get_result(results_repo: ResultsRepository):
    """Fetches one stored result by id."""
    stored = await results_repo.persist(_result())

    fetched = await results_repo.get_result(stored.id)

    assert fetched == stored


@pytest.mark.asyncio
async def test_get_result_missing(results_repo: ResultsRepository):
    """Unknown ids return None."""
    assert await results_repo.get_result(999) is None
