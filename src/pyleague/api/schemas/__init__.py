"""Pydantic models for API I/O."""

from .game import (
    AttendanceListResponse,
    AttendanceRequest,
    AttendanceResponse,
    FinalizeRequest,
    GameCreateRequest,
    GameResponse,
    StatisticRequest,
    StatisticResponse,
    TeamGenerationResponse,
    TeamPlayerResponse,
    TeamResponse,
)
from .ranking import RankingEntryResponse, RankingResponse, ScoringRuleBody, ScoringRulesPayload

__all__ = [
    "AttendanceListResponse",
    "AttendanceRequest",
    "AttendanceResponse",
    "FinalizeRequest",
    "GameCreateRequest",
    "GameResponse",
    "StatisticRequest",
    "StatisticResponse",
    "TeamGenerationResponse",
    "TeamPlayerResponse",
    "TeamResponse",
    "RankingEntryResponse",
    "RankingResponse",
    "ScoringRuleBody",
    "ScoringRulesPayload",
]
