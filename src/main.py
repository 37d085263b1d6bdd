"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from src.adapters.roster_adapter import RosterAdapter
from src.api.router import api_router
from src.config import settings
from src.db.turso import TursoClient
from src.events.bus import EventBus
from src.events.types import (
    QuizSubmitted,
    ResultPersistFailed,
    TimeWarningRaised,
)
from src.quiz.question_bank import load_answer_key
from src.quiz.session import QuizSession
from src.quiz.timer import APSchedulerTickScheduler
from src.repositories.results_repo import ResultsRepository

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)
event_logger = structlog.get_logger("quiz.events")


async def _log_event(event) -> None:
    event_logger.info("Quiz event", **event.to_log_dict())


def _initialize_quiz_session(app: FastAPI, results_repo: ResultsRepository) -> None:
    """Create the quiz session if an answer key is configured.

    The session gets its own APScheduler instance for countdown ticks and
    an event bus that logs warnings and submission outcomes.
    """
    if not settings.answer_key_path:
        logger.warning("ANSWER_KEY_PATH not set; quiz endpoints disabled")
        return

    questions = load_answer_key(settings.answer_key_path)

    event_bus = EventBus()
    for event_type in (TimeWarningRaised, QuizSubmitted, ResultPersistFailed):
        event_bus.subscribe(event_type, _log_event)

    tick_scheduler = APSchedulerTickScheduler(AsyncIOScheduler(timezone=UTC))
    app.state.tick_scheduler = tick_scheduler
    app.state.event_bus = event_bus
    app.state.quiz_session = QuizSession(
        questions=questions,
        scheduler=tick_scheduler,
        result_sink=results_repo,
        event_bus=event_bus,
    )
    logger.info(f"Quiz session initialized with {len(questions)} questions")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Connect to the result store
    - Load the roster (read-only for the process lifetime)
    - Create the quiz session

    Shutdown:
    - Stop the tick scheduler
    - Close database connection
    """
    logger.info(f"Starting {settings.app_name}...")

    db = TursoClient()
    await db.connect()
    app.state.db = db

    results_repo = ResultsRepository(db)
    await results_repo.initialize()
    app.state.results_repo = results_repo
    logger.info("Result store initialized")

    if settings.roster_spreadsheet_id:
        adapter = RosterAdapter(credentials_path=settings.google_sheets_credentials)
        app.state.roster = adapter.load_roster_from_sheet(
            settings.roster_spreadsheet_id, settings.roster_sheet_name
        )
        logger.info(f"Roster loaded: {len(app.state.roster)} entries")
    elif settings.roster_path:
        app.state.roster = RosterAdapter(settings.roster_path).load_roster()
        logger.info(f"Roster loaded: {len(app.state.roster)} entries")
    else:
        logger.warning("No roster configured; reconciliation disabled")

    _initialize_quiz_session(app, results_repo)

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    tick_scheduler = getattr(app.state, "tick_scheduler", None)
    if tick_scheduler is not None:
        tick_scheduler.shutdown()
    await db.close()
    logger.info("Database connection closed")


app = FastAPI(
    title=settings.app_name,
    description="Timed quiz administration with roster reconciliation",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
