"""Adapter for loading the class roster.

The roster lives in a Google Sheet (read with gspread and a service
account) or, for offline runs, in a local JSON or CSV file.
"""

import csv
import json
import os
from pathlib import Path

import gspread
import structlog
from google.oauth2.service_account import Credentials

from src.identity.schemas import RosterEntry

logger = structlog.get_logger()


class RosterAdapter:
    """Adapter for loading the class roster.

    Expected columns:
    - Required: Name
    - Optional: Admin, Excluded (true/yes/1/y for True)
    """

    SCOPES = [
        "https://www.googleapis.com/auth/spreadsheets.readonly",
        "https://www.googleapis.com/auth/drive.readonly",
    ]

    def __init__(
        self,
        roster_path: str | Path | None = None,
        credentials_path: str | None = None,
    ):
        """Initialize with the roster location.

        Args:
            roster_path: Path to a .json or .csv roster file
            credentials_path: Path to service account JSON for Sheets.
                             Falls back to GOOGLE_SHEETS_CREDENTIALS env var.
        """
        self._roster_path = Path(roster_path) if roster_path else None
        self._credentials_path = credentials_path or os.environ.get(
            "GOOGLE_SHEETS_CREDENTIALS"
        )
        self._client: gspread.Client | None = None

    def _get_client(self) -> gspread.Client:
        """Get or create authenticated gspread client.

        Raises:
            ValueError: If no credentials path configured
        """
        if self._client is None:
            if not self._credentials_path:
                raise ValueError(
                    "No credentials. Set GOOGLE_SHEETS_CREDENTIALS env var "
                    "or pass credentials_path to constructor."
                )
            creds = Credentials.from_service_account_file(
                self._credentials_path,
                scopes=self.SCOPES,
            )
            self._client = gspread.authorize(creds)
        return self._client

    def load_roster_from_sheet(
        self, spreadsheet_id: str, sheet_name: str = "Roster"
    ) -> tuple[RosterEntry, ...]:
        """Load the roster from a Google Sheet, preserving row order.

        Args:
            spreadsheet_id: Google Sheets ID (from URL)
            sheet_name: Name of worksheet (default: "Roster")

        Returns:
            Tuple of RosterEntry objects

        Raises:
            ValueError: If the Name column is missing or names repeat
        """
        client = self._get_client()
        worksheet = client.open_by_key(spreadsheet_id).worksheet(sheet_name)

        # Header row becomes the keys
        records = worksheet.get_all_records()
        if not records:
            return ()

        if "Name" not in records[0]:
            raise ValueError(
                "Roster sheet must have a 'Name' column. "
                f"Found columns: {list(records[0].keys())}"
            )
        return self.parse_rows(records)

    def load_roster(self, path: str | Path | None = None) -> tuple[RosterEntry, ...]:
        """Load the roster from a file, preserving file order.

        Args:
            path: Roster file. Falls back to the constructor path.

        Returns:
            Tuple of RosterEntry objects

        Raises:
            ValueError: If no path is configured, the format is unknown,
                or two entries share a name (case-insensitive)
        """
        roster_path = Path(path) if path else self._roster_path
        if roster_path is None:
            raise ValueError("No roster file configured. Set ROSTER_PATH.")

        rows = self._read_rows(roster_path)
        return self.parse_rows(rows)

    def parse_rows(self, rows: list[dict]) -> tuple[RosterEntry, ...]:
        """Parse raw rows into roster entries (best effort per row)."""
        entries: list[RosterEntry] = []
        seen: set[str] = set()
        for row in rows:
            try:
                entry = RosterEntry.from_row(row)
            except Exception as e:
                logger.warning("Skipping malformed roster row", row=row, error=str(e))
                continue
            if entry.key in seen:
                raise ValueError(f"Duplicate roster name: {entry.name}")
            seen.add(entry.key)
            entries.append(entry)

        logger.info("Roster loaded", entries=len(entries))
        return tuple(entries)

    def _read_rows(self, path: Path) -> list[dict]:
        suffix = path.suffix.lower()
        if suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError("Roster JSON must be an array of objects")
            return [row if isinstance(row, dict) else {"Name": row} for row in data]
        if suffix == ".csv":
            with path.open(newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                if reader.fieldnames is None or "Name" not in reader.fieldnames:
                    raise ValueError(
                        "Roster CSV must have a 'Name' column. "
                        f"Found columns: {reader.fieldnames}"
                    )
                return list(reader)
        raise ValueError(f"Unsupported roster format: {path.suffix}")
