"""Input adapters that normalize raw roster data."""

from .roster import RosterRow, canonical_position, load_roster_csv

__all__ = ["RosterRow", "canonical_position", "load_roster_csv"]
