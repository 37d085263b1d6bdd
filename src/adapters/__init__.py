"""Adapters for external data sources.

- RosterAdapter: Load the class roster from a JSON or CSV file
"""

from src.adapters.roster_adapter import RosterAdapter

__all__ = [
    "RosterAdapter",
]
