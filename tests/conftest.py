"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from src.db.turso import TursoClient
from src.events.bus import EventBus
from src.identity.schemas import RosterEntry
from src.main import app
from src.quiz.question_bank import build_question_bank
from src.quiz.schemas import Question
from src.quiz.session import QuizSession
from src.quiz.timer import ManualTickScheduler
from src.repositories.results_repo import ResultsRepository

# Structure answers for 1-15, Written Expression for 16-30
ANSWER_KEY = {i: "ABCD"[i % 4] for i in range(1, 31)}


@pytest.fixture
def roster() -> tuple[RosterEntry, ...]:
    """Small class roster for testing."""
    return (
        RosterEntry(name="BUDI SANTOSO"),
        RosterEntry(name="AISYAH ALISSYA RAHMAH"),
        RosterEntry(name="ANRI RACHMAN"),
        RosterEntry(name="KEYLA PUTRI AZZAHRA"),
        RosterEntry(name="RAYHAN MUAMMAR KHADAFI", is_admin=True, is_excluded=True),
    )


@pytest.fixture
def questions() -> tuple[Question, ...]:
    """Full 30-question bank."""
    return build_question_bank(ANSWER_KEY)


@pytest.fixture
async def db_client(tmp_path: Path) -> AsyncIterator[TursoClient]:
    """Create a temp file database client for testing."""
    db_path = tmp_path / "test_results.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
async def results_repo(db_client: TursoClient) -> ResultsRepository:
    """ResultsRepository with initialized table."""
    repo = ResultsRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
async def client(
    db_client: TursoClient,
    results_repo: ResultsRepository,
    roster: tuple[RosterEntry, ...],
    questions: tuple[Question, ...],
) -> AsyncIterator[AsyncClient]:
    """Create async test client for FastAPI app with database and session."""
    tick_scheduler = ManualTickScheduler()

    app.state.db = db_client
    app.state.results_repo = results_repo
    app.state.roster = roster
    app.state.tick_scheduler = tick_scheduler
    app.state.quiz_session = QuizSession(
        questions=questions,
        scheduler=tick_scheduler,
        result_sink=results_repo,
        event_bus=EventBus(),
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    del app.state.db
    del app.state.results_repo
    del app.state.roster
    del app.state.tick_scheduler
    del app.state.quiz_session
