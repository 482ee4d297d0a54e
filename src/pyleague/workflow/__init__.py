"""League workflow orchestration."""

from .service import AttendanceSummary, LeagueService, TeamGenerationResult

__all__ = ["AttendanceSummary", "LeagueService", "TeamGenerationResult"]
