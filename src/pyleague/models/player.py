"""Canonical player models shared across balancing, ranking and storage layers."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PositionGroup(str, Enum):
    GOALKEEPER = "goalkeeper"
    DEFENSIVE = "defensive"
    MIDFIELD = "midfield"
    FORWARD = "forward"


class Position(str, Enum):
    GOALKEEPER = "goalkeeper"
    CENTER_BACK = "center_back"
    FULLBACK = "fullback"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"

    @property
    def group(self) -> PositionGroup:
        return _POSITION_GROUPS[self]


_POSITION_GROUPS = {
    Position.GOALKEEPER: PositionGroup.GOALKEEPER,
    Position.CENTER_BACK: PositionGroup.DEFENSIVE,
    Position.FULLBACK: PositionGroup.DEFENSIVE,
    Position.MIDFIELDER: PositionGroup.MIDFIELD,
    Position.FORWARD: PositionGroup.FORWARD,
}


class Role(str, Enum):
    ADMIN = "admin"
    PLAYER = "player"


class Player(BaseModel):
    """League participant as seen by the balancer and the leaderboards."""

    player_id: str = Field(..., min_length=1)
    name: str
    position: Position
    rating: float = Field(..., ge=1.0, le=10.0)
    active: bool = True
    role: Role = Role.PLAYER
    email: Optional[str] = None
    photo_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_goalkeeper(self) -> bool:
        return self.position is Position.GOALKEEPER
