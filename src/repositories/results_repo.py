"""Repository for persisting completed quiz results.

Implements the ResultSink contract on SQLite (via TursoClient). Each
completed session is stored once; listing returns newest first.
"""

import json
from datetime import UTC, datetime
from typing import Protocol

from src.db.turso import TursoClient
from src.quiz.schemas import Answer, QuizResult, StoredResult

_COLUMNS = (
    "id, user_name, total_score, structure_score, written_score, "
    "time_elapsed_seconds, answers, created_at"
)


class ResultSinkError(Exception):
    """Raised when a result could not be stored."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ResultSink(Protocol):
    """External store for completed quiz results."""

    async def persist(self, result: QuizResult) -> StoredResult: ...

    async def list_results(self) -> list[StoredResult]: ...


class ResultsRepository:
    """Repository for persisting quiz results.

    Uses SQLite (via TursoClient) for persistence. Answers are stored
    as a JSON array alongside the scores.
    """

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create results table if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS quiz_results (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_name TEXT NOT NULL,
                total_score INTEGER NOT NULL,
                structure_score INTEGER NOT NULL,
                written_score INTEGER NOT NULL,
                time_elapsed_seconds INTEGER NOT NULL,
                answers TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_results_created
            ON quiz_results(created_at)
            """,
            ]
        )

    async def persist(self, result: QuizResult) -> StoredResult:
        """Store a completed result.

        Args:
            result: Result to store

        Returns:
            StoredResult with id and created_at

        Raises:
            ResultSinkError: If the insert fails
        """
        created_at = datetime.now(UTC)
        answers_json = json.dumps(
            [answer.model_dump() for answer in result.answers]
        )
        try:
            rs = await self._db.execute(
                """
                INSERT INTO quiz_results
                    (user_name, total_score, structure_score, written_score,
                     time_elapsed_seconds, answers, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    result.user_name,
                    result.total_score,
                    result.structure_score,
                    result.written_score,
                    result.time_elapsed_seconds,
                    answers_json,
                    created_at.isoformat(),
                ],
            )
        except Exception as e:
            raise ResultSinkError(f"Failed to store result: {e}") from e

        return StoredResult(
            **result.model_dump(),
            id=rs.last_insert_rowid,
            created_at=created_at,
        )

    async def get_result(self, result_id: int) -> StoredResult | None:
        """Get one stored result.

        Args:
            result_id: Row id returned by persist

        Returns:
            StoredResult or None if not found
        """
        rs = await self._db.execute(
            f"SELECT {_COLUMNS} FROM quiz_results WHERE id = ?",
            [result_id],
        )
        if rs.rows:
            return _row_to_result(rs.rows[0])
        return None

    async def list_results(self) -> list[StoredResult]:
        """Get all stored results, newest first.

        Returns:
            List of StoredResult
        """
        rs = await self._db.execute(
            f"SELECT {_COLUMNS} FROM quiz_results ORDER BY created_at DESC, id DESC"
        )
        return [_row_to_result(row) for row in rs.rows]


def _row_to_result(row) -> StoredResult:
    return StoredResult(
        id=row[0],
        user_name=row[1],
        total_score=row[2],
        structure_score=row[3],
        written_score=row[4],
        time_elapsed_seconds=row[5],
        answers=tuple(Answer(**a) for a in json.loads(row[6])),
        created_at=datetime.fromisoformat(row[7]),
    )
