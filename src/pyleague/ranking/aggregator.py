"""Weighted leaderboard aggregation over raw statistic records."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from pyleague.models import GameSession, Player, PlayerRanking, StatCategory, StatisticRecord

from .windows import DateWindow


logger = logging.getLogger(__name__)


@dataclass
class _Tally:
    goals: int = 0
    assists: int = 0
    wins: int = 0
    participations: int = 0


_CATEGORY_FIELDS: Mapping[str, str] = {
    StatCategory.GOAL.value: "goals",
    StatCategory.ASSIST.value: "assists",
    StatCategory.WIN.value: "wins",
    StatCategory.PARTICIPATION.value: "participations",
}


def _category_key(category: object) -> str:
    if isinstance(category, StatCategory):
        return category.value
    return str(category)


def weight_for(rules: Mapping[object, float], category: StatCategory) -> float:
    """Weight configured for ``category``, or 0 when the rules omit it."""

    if category in rules:
        return rules[category]
    return rules.get(category.value, 0.0)


def _as_day(value: datetime.date | datetime.datetime) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def by_date_window(
    statistics: Iterable[StatisticRecord],
    start: datetime.date | datetime.datetime,
    end: datetime.date | datetime.datetime,
    sessions: Iterable[GameSession],
) -> List[StatisticRecord]:
    """Keep statistics whose game falls within ``[start, end]``, both ends inclusive.

    Statistics pointing at a game missing from ``sessions`` are dropped.
    """

    if statistics is None or sessions is None:
        raise TypeError("statistics and sessions must be collections, not None")

    start_day = _as_day(start)
    end_day = _as_day(end)
    game_dates: Dict[str, datetime.date] = {session.game_id: session.date for session in sessions}

    kept: List[StatisticRecord] = []
    for record in statistics:
        game_date = game_dates.get(record.game_id)
        if game_date is None:
            continue
        if start_day <= game_date <= end_day:
            kept.append(record)
    return kept


def aggregate(
    statistics: Iterable[StatisticRecord],
    rules: Mapping[object, float],
    roster: Sequence[Player],
) -> List[PlayerRanking]:
    """Build the leaderboard for ``roster``, highest points first.

    Every roster player appears, even without statistics. Records for players
    outside the roster and records with unknown categories are ignored. Ties
    keep roster order.
    """

    if statistics is None or rules is None or roster is None:
        raise TypeError("statistics, rules and roster must be provided")

    tallies: Dict[str, _Tally] = {player.player_id: _Tally() for player in roster}

    skipped = 0
    for record in statistics:
        tally = tallies.get(record.player_id)
        if tally is None:
            skipped += 1
            continue
        field = _CATEGORY_FIELDS.get(_category_key(record.category))
        if field is None:
            skipped += 1
            continue
        setattr(tally, field, getattr(tally, field) + record.count)
    if skipped:
        logger.debug("Ignored %d statistic records outside the roster or category set", skipped)

    goal_weight = weight_for(rules, StatCategory.GOAL)
    assist_weight = weight_for(rules, StatCategory.ASSIST)
    win_weight = weight_for(rules, StatCategory.WIN)
    participation_weight = weight_for(rules, StatCategory.PARTICIPATION)

    rankings: List[PlayerRanking] = []
    for player in roster:
        tally = tallies[player.player_id]
        points = (
            tally.goals * goal_weight
            + tally.assists * assist_weight
            + tally.wins * win_weight
            + tally.participations * participation_weight
        )
        rankings.append(
            PlayerRanking(
                player_id=player.player_id,
                name=player.name,
                photo_url=player.photo_url,
                points=points,
                goals=tally.goals,
                assists=tally.assists,
                wins=tally.wins,
                participations=tally.participations,
            )
        )

    # sorted() is stable, so equal points keep roster order
    return sorted(rankings, key=lambda ranking: ranking.points, reverse=True)


def leaderboard(
    statistics: Sequence[StatisticRecord],
    rules: Mapping[object, float],
    roster: Sequence[Player],
    sessions: Sequence[GameSession],
    window: Optional[DateWindow] = None,
) -> List[PlayerRanking]:
    """Aggregate ``statistics`` after restricting them to ``window`` when given."""

    if window is not None and not window.is_unbounded:
        statistics = by_date_window(
            statistics,
            window.start or datetime.date.min,
            window.end or datetime.date.max,
            sessions,
        )
    return aggregate(statistics, rules, roster)


__all__ = ["aggregate", "by_date_window", "leaderboard", "weight_for"]
