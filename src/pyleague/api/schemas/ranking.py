from __future__ import annotations

import datetime
from typing import List

from pydantic import BaseModel, Field

from pyleague.models import StatCategory


class RankingEntryResponse(BaseModel):
    rank: int
    player_id: str
    name: str
    photo_url: str | None = None
    points: float
    goals: int
    assists: int
    wins: int
    participations: int


class RankingResponse(BaseModel):
    period: str
    label: str
    start: datetime.date | None = None
    end: datetime.date | None = None
    rankings: List[RankingEntryResponse]


class ScoringRuleBody(BaseModel):
    category: StatCategory
    weight: float = Field(..., ge=0.0)


class ScoringRulesPayload(BaseModel):
    rules: List[ScoringRuleBody]
