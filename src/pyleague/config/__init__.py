"""Configuration helpers for league and scoring rules."""

from .league import (
    DEFAULT_SCORING_WEIGHTS,
    LeagueRules,
    balance_seed,
    default_scoring_rules,
    get_rules,
    weights_from_rules,
)

__all__ = [
    "DEFAULT_SCORING_WEIGHTS",
    "LeagueRules",
    "balance_seed",
    "default_scoring_rules",
    "get_rules",
    "weights_from_rules",
]
