"""League rules and scoring defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Mapping, Optional, Tuple

from pyleague.models import TEAM_SLOTS, ScoringRule, StatCategory, TeamSlot


logger = logging.getLogger(__name__)

_MIN_PLAYERS_ENV = "PYLEAGUE_MIN_PLAYERS"
_BALANCE_SEED_ENV = "PYLEAGUE_BALANCE_SEED"


@dataclass(frozen=True)
class LeagueRules:
    team_slots: Tuple[TeamSlot, ...]
    min_confirmed_players: int
    max_confirmed_players: int
    max_confirmed_goalkeepers: int


_DEFAULT_RULES = LeagueRules(
    team_slots=TEAM_SLOTS,
    min_confirmed_players=6,
    max_confirmed_players=18,
    max_confirmed_goalkeepers=3,
)

DEFAULT_SCORING_WEIGHTS: Mapping[StatCategory, float] = {
    StatCategory.GOAL: 3.0,
    StatCategory.ASSIST: 1.0,
    StatCategory.WIN: 2.0,
    StatCategory.PARTICIPATION: 1.0,
}


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def get_rules() -> LeagueRules:
    """Return the active league rules, honouring environment overrides."""

    min_players = _env_int(_MIN_PLAYERS_ENV, _DEFAULT_RULES.min_confirmed_players, min_value=0)
    if min_players == _DEFAULT_RULES.min_confirmed_players:
        return _DEFAULT_RULES
    return replace(_DEFAULT_RULES, min_confirmed_players=min_players)


def balance_seed() -> Optional[int]:
    """Seed for reproducible team draws; ``None`` unless explicitly configured."""

    raw = os.getenv(_BALANCE_SEED_ENV)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; drawing unseeded", _BALANCE_SEED_ENV, raw)
        return None


def default_scoring_rules() -> list[ScoringRule]:
    return [ScoringRule(category=category, weight=weight) for category, weight in DEFAULT_SCORING_WEIGHTS.items()]


def weights_from_rules(rules: Iterable[ScoringRule]) -> Dict[str, float]:
    """Collapse scoring rules into a category -> weight mapping; later rules win."""

    return {StatCategory(rule.category).value: rule.weight for rule in rules}
