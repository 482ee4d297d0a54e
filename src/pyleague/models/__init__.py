"""Canonical league models."""

from .game import (
    TEAM_SLOTS,
    AttendanceRecord,
    AttendanceStatus,
    GameSession,
    GameStatus,
    TeamAssignment,
    TeamSlot,
)
from .player import Player, Position, PositionGroup, Role
from .statistic import PlayerRanking, ScoringRule, StatCategory, StatisticRecord

__all__ = [
    "TEAM_SLOTS",
    "AttendanceRecord",
    "AttendanceStatus",
    "GameSession",
    "GameStatus",
    "TeamAssignment",
    "TeamSlot",
    "Player",
    "Position",
    "PositionGroup",
    "Role",
    "PlayerRanking",
    "ScoringRule",
    "StatCategory",
    "StatisticRecord",
]
