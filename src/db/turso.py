"""Turso/libSQL database client wrapper used by the result store."""

import logging
from typing import Any

from libsql_client import Client, ResultSet, create_client

from src.config import settings

logger = logging.getLogger(__name__)


class TursoClient:
    """Wrapper for Turso/libSQL async client.

    Supports both cloud Turso (with auth token) and local SQLite files.
    """

    def __init__(
        self,
        url: str | None = None,
        auth_token: str | None = None,
    ):
        """Initialize client with connection parameters.

        Args:
            url: Database URL. Defaults to settings or local quiz results file.
            auth_token: Auth token for Turso cloud. Defaults to settings.
        """
        self.url = url or settings.database_url or "file:quiz_results.db"
        self.auth_token = auth_token or settings.database_auth_token
        self._client: Client | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Establish database connection."""
        if self._client is not None:
            return

        if self.auth_token and self.url.startswith("libsql://"):
            self._client = create_client(url=self.url, auth_token=self.auth_token)
        else:
            self._client = create_client(url=self.url)

        logger.info(f"Connected to result store: {self.url}")

    def _require_client(self) -> Client:
        if not self._client:
            msg = "Not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._client

    async def execute(
        self,
        sql: str,
        params: list[Any] | None = None,
    ) -> ResultSet:
        """Execute a SQL statement.

        Args:
            sql: SQL query with ? placeholders
            params: Query parameters

        Returns:
            ResultSet with rows and metadata
        """
        return await self._require_client().execute(sql, params or [])

    async def execute_batch(self, statements: list[str]) -> None:
        """Execute multiple SQL statements in a batch."""
        await self._require_client().batch(statements)

    async def close(self) -> None:
        """Close the database connection."""
        if self._client:
            await self._client.close()
            self._client = None
            logger.info("Result store connection closed")

    async def is_healthy(self) -> bool:
        """Check if database connection is healthy."""
        if not self._client:
            return False
        try:
            result = await self._client.execute("SELECT 1")
        except Exception as e:
            logger.warning(f"Health check query failed: {e}")
            return False
        return len(result.rows) == 1
