"""Identity reconciliation schemas.

Defines data models for roster entries and match results.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

_TRUTHY = {"true", "yes", "y", "1"}


def _parse_flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


class RosterEntry(BaseModel):
    """Person on the class roster.

    The roster is loaded once at startup and never mutated. Name is the
    unique key; comparisons against it are case-insensitive.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, description="Full name as stored")
    is_admin: bool = Field(default=False, description="Quiz administrator")
    is_excluded: bool = Field(
        default=False, description="Not expected to take the quiz"
    )

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.name.lower()

    @classmethod
    def from_row(cls, row: dict) -> "RosterEntry":
        """Parse from a roster file row.

        Expected columns: Name, Admin (optional), Excluded (optional).
        Lower-case and snake_case keys are accepted as well.

        Args:
            row: Dictionary of column name -> value

        Returns:
            RosterEntry parsed from row data
        """
        name = row.get("Name", row.get("name"))
        return cls(
            name=name,
            is_admin=_parse_flag(row.get("Admin", row.get("is_admin"))),
            is_excluded=_parse_flag(row.get("Excluded", row.get("is_excluded"))),
        )


class ConfidenceBand(str, Enum):
    """Human-readable label for a match confidence."""

    VERY_HIGH = "Very High"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    VERY_LOW = "Very Low"


class MatchResult(BaseModel):
    """Result of reconciling one submitted name against the roster.

    A missing matched_entry is the defined "no match" state, not an error.
    best_rejected_score carries the highest sub-threshold score for
    diagnostics and is never treated as a match.
    """

    model_config = ConfigDict(frozen=True)

    submitted_name: str = Field(description="Name as typed by the participant")
    matched_entry: RosterEntry | None = Field(
        default=None, description="Roster entry the name resolved to"
    )
    confidence: float = Field(ge=0.0, le=1.0, description="Match confidence (0-1)")
    best_rejected_score: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Best score that did not clear the acceptance threshold",
    )

    @property
    def is_match(self) -> bool:
        return self.matched_entry is not None

    @property
    def matched_name(self) -> str | None:
        return self.matched_entry.name if self.matched_entry else None
