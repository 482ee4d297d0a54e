"""Statistic, scoring rule and derived ranking models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class StatCategory(str, Enum):
    GOAL = "goal"
    ASSIST = "assist"
    WIN = "win"
    PARTICIPATION = "participation"


class StatisticRecord(BaseModel):
    """Raw count recorded for one player in one game.

    ``category`` is kept as a plain string so that records carrying a category
    the league does not know about still load; the aggregator ignores them.
    """

    stat_id: Optional[str] = None
    game_id: str
    player_id: str
    category: str
    count: int = 1

    model_config = ConfigDict(frozen=True)


class ScoringRule(BaseModel):
    category: StatCategory
    weight: float = Field(..., ge=0.0)

    model_config = ConfigDict(frozen=True)


class PlayerRanking(BaseModel):
    player_id: str
    name: str
    photo_url: Optional[str] = None
    points: float = 0.0
    goals: int = 0
    assists: int = 0
    wins: int = 0
    participations: int = 0

    model_config = ConfigDict(frozen=True)
