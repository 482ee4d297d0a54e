"""Helpers to load roster CSVs and emit canonical player records."""

from __future__ import annotations

import csv
import logging
import re
import unicodedata
from pathlib import Path
from typing import List, Mapping, Optional

from pydantic import BaseModel

from pyleague.models import Player, Position, Role


logger = logging.getLogger(__name__)

DEFAULT_ROSTER_MAPPING = {
    "player_id": "id",
    "name": "name",
    "position": "position",
    "rating": "rating",
    "active": "active",
    "role": "role",
    "email": "email",
    "photo_url": "photo_url",
}

POSITION_ALIAS_GROUPS: dict[Position, list[str]] = {
    Position.GOALKEEPER: ["GOALKEEPER", "GK", "KEEPER", "GOLEIRO", "GOL"],
    Position.CENTER_BACK: ["CENTER_BACK", "CENTER BACK", "CB", "DEFENDER", "DEF", "ZAGUEIRO", "ZAG"],
    Position.FULLBACK: ["FULLBACK", "FULL BACK", "FB", "LB", "RB", "WINGBACK", "LATERAL", "LAT"],
    Position.MIDFIELDER: ["MIDFIELDER", "MIDFIELD", "MID", "MF", "CM", "MEIO-CAMPO", "MEIO CAMPO", "MEIA", "VOLANTE"],
    Position.FORWARD: ["FORWARD", "FW", "ST", "STRIKER", "ATTACKER", "ATACANTE", "ATA", "CENTROAVANTE"],
}


def _position_token(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^A-Z0-9]", "", ascii_only.upper())


def _build_alias_lookup() -> dict[str, Position]:
    lookup: dict[str, Position] = {}
    for position, variants in POSITION_ALIAS_GROUPS.items():
        for variant in variants:
            key = _position_token(variant)
            if key:
                lookup.setdefault(key, position)
    return lookup


POSITION_ALIAS_LOOKUP = _build_alias_lookup()


def canonical_position(raw: str) -> Position:
    token = _position_token(raw)
    if token not in POSITION_ALIAS_LOOKUP:
        raise ValueError(f"position '{raw}' is not recognised")
    return POSITION_ALIAS_LOOKUP[token]


def _parse_rating(raw: str) -> float:
    text = raw.strip().replace(",", ".")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"rating '{raw}' is not numeric") from None


def _parse_flag(value: Optional[str], *, default: bool) -> bool:
    if value is None:
        return default
    text = value.strip().lower()
    if not text:
        return default
    if text in {"1", "true", "t", "yes", "y", "sim", "s"}:
        return True
    if text in {"0", "false", "f", "no", "n", "nao", "não"}:
        return False
    return default


def _parse_role(value: Optional[str]) -> Role:
    text = (value or "").strip().lower()
    if text in {"admin", "administrator"}:
        return Role.ADMIN
    return Role.PLAYER


class RosterRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_position: str
    raw_rating: str
    raw_active: Optional[str] = None
    raw_role: Optional[str] = None
    raw_email: Optional[str] = None
    raw_photo_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(key: str, *, default: Optional[str] = None) -> Optional[str]:
            column = mapping.get(key)
            if column is None:
                return default
            value = row.get(column)
            if value is None:
                return default
            value = value.strip()
            return value or default

        return cls(
            raw_id=extract("player_id"),
            raw_name=extract("name", default="") or "",
            raw_position=extract("position", default="") or "",
            raw_rating=extract("rating", default="0") or "0",
            raw_active=extract("active"),
            raw_role=extract("role"),
            raw_email=extract("email"),
            raw_photo_url=extract("photo_url"),
        )

    def to_player(self) -> Player:
        return Player(
            player_id=self.raw_id or self.raw_name,
            name=self.raw_name,
            position=canonical_position(self.raw_position),
            rating=_parse_rating(self.raw_rating),
            active=_parse_flag(self.raw_active, default=True),
            role=_parse_role(self.raw_role),
            email=self.raw_email,
            photo_url=self.raw_photo_url,
        )


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[Player]:
    """Read a roster CSV; rows whose position or rating cannot be parsed raise ``ValueError``."""

    mapping = {**DEFAULT_ROSTER_MAPPING, **(mapping or {})}
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [RosterRow.from_mapping(row, mapping) for row in reader]

    players: List[Player] = []
    for line_number, row in enumerate(rows, start=2):
        try:
            players.append(row.to_player())
        except ValueError as exc:
            raise ValueError(f"{path.name} line {line_number}: {exc}") from exc
    logger.info("Loaded %d players from %s", len(players), path)
    return players
