"""Game session, attendance and team assignment models."""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from pyleague.exceptions import GameStateError


class GameStatus(str, Enum):
    PENDING = "pending"
    FINALIZED = "finalized"


class TeamSlot(str, Enum):
    TEAM_1 = "team_1"
    TEAM_2 = "team_2"
    TEAM_3 = "team_3"


TEAM_SLOTS: tuple[TeamSlot, ...] = (TeamSlot.TEAM_1, TeamSlot.TEAM_2, TeamSlot.TEAM_3)


class TeamAssignment(BaseModel):
    """Player identifiers per team slot, in the order they were drafted."""

    team_1: List[str] = Field(default_factory=list)
    team_2: List[str] = Field(default_factory=list)
    team_3: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_lists(cls, teams: Sequence[Sequence[str]]) -> "TeamAssignment":
        if len(teams) != len(TEAM_SLOTS):
            raise ValueError(f"expected {len(TEAM_SLOTS)} teams, got {len(teams)}")
        return cls(**{slot.value: list(ids) for slot, ids in zip(TEAM_SLOTS, teams)})

    def team(self, slot: TeamSlot | str) -> List[str]:
        return getattr(self, TeamSlot(slot).value)

    def iter_teams(self) -> Iterator[tuple[TeamSlot, List[str]]]:
        for slot in TEAM_SLOTS:
            yield slot, self.team(slot)

    def player_ids(self) -> List[str]:
        return [player_id for _, ids in self.iter_teams() for player_id in ids]

    def slot_of(self, player_id: str) -> Optional[TeamSlot]:
        for slot, ids in self.iter_teams():
            if player_id in ids:
                return slot
        return None

    @property
    def is_empty(self) -> bool:
        return not any(ids for _, ids in self.iter_teams())

    def as_dict(self) -> Dict[str, List[str]]:
        return {slot.value: list(ids) for slot, ids in self.iter_teams()}


class GameSession(BaseModel):
    game_id: str = Field(..., min_length=1)
    date: datetime.date
    status: GameStatus = GameStatus.PENDING
    teams: TeamAssignment = Field(default_factory=TeamAssignment)

    model_config = ConfigDict(frozen=True)

    @property
    def is_finalized(self) -> bool:
        return self.status is GameStatus.FINALIZED

    def with_teams(self, teams: TeamAssignment) -> "GameSession":
        if self.is_finalized:
            raise GameStateError(f"Game {self.game_id} is finalized; teams can no longer change")
        return self.model_copy(update={"teams": teams})

    def finalized(self) -> "GameSession":
        if self.is_finalized:
            raise GameStateError(f"Game {self.game_id} is already finalized")
        return self.model_copy(update={"status": GameStatus.FINALIZED})


class AttendanceStatus(str, Enum):
    CONFIRMED = "confirmed"
    QUEUED = "queued"
    WITHDRAWN = "withdrawn"


class AttendanceRecord(BaseModel):
    player_id: str = Field(..., min_length=1)
    game_date: datetime.date
    status: AttendanceStatus

    model_config = ConfigDict(frozen=True)
