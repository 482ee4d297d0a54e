from __future__ import annotations

import datetime
from typing import List, Literal

from pydantic import BaseModel, Field

from pyleague.models import AttendanceStatus, StatCategory, TeamSlot


class GameCreateRequest(BaseModel):
    date: datetime.date


class TeamPlayerResponse(BaseModel):
    player_id: str
    name: str | None = None
    position: str | None = None
    rating: float | None = None


class TeamResponse(BaseModel):
    slot: TeamSlot
    rating_total: float
    players: List[TeamPlayerResponse]


class GameResponse(BaseModel):
    game_id: str
    date: datetime.date
    status: Literal["pending", "finalized"]
    teams: List[TeamResponse]


class TeamGenerationResponse(BaseModel):
    game: GameResponse
    skipped_player_ids: List[str] = Field(default_factory=list)


class AttendanceRequest(BaseModel):
    player_id: str = Field(..., min_length=1)
    status: AttendanceStatus = AttendanceStatus.CONFIRMED


class AttendanceResponse(BaseModel):
    player_id: str
    game_date: datetime.date
    status: AttendanceStatus


class AttendanceListResponse(BaseModel):
    game_date: datetime.date
    confirmed_players: int
    confirmed_goalkeepers: int
    queued: int
    withdrawn: int
    records: List[AttendanceResponse]


class StatisticRequest(BaseModel):
    player_ids: List[str] = Field(..., min_length=1)
    category: StatCategory
    count: int = Field(default=1, ge=1)


class StatisticResponse(BaseModel):
    stat_id: str | None
    game_id: str
    player_id: str
    category: str
    count: int


class FinalizeRequest(BaseModel):
    winning_team: TeamSlot
