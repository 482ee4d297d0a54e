"""Greedy three-way team balancing by position group and skill rating."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from pyleague.config import balance_seed
from pyleague.models import TEAM_SLOTS, Player, PositionGroup, TeamAssignment


logger = logging.getLogger(__name__)

_GROUP_ORDER: Tuple[PositionGroup, ...] = (
    PositionGroup.DEFENSIVE,
    PositionGroup.MIDFIELD,
    PositionGroup.FORWARD,
)
_TEAM_COUNT = len(TEAM_SLOTS)


@dataclass(frozen=True)
class BalanceReport:
    assignment: TeamAssignment
    ratings: Tuple[float, float, float]
    surplus_goalkeepers: int

    @property
    def spread(self) -> float:
        return max(self.ratings) - min(self.ratings)


def _default_rng() -> random.Random:
    seed = balance_seed()
    if seed is not None:
        logger.info("Balancing with fixed seed %d", seed)
    return random.Random(seed)


def _group_players(players: Sequence[Player]) -> Dict[PositionGroup, List[Player]]:
    groups: Dict[PositionGroup, List[Player]] = {group: [] for group in PositionGroup}
    for player in players:
        groups[player.position.group].append(player)
    return groups


def _lowest_team_index(totals: Sequence[float]) -> int:
    # index() returns the first minimum, so ties go to the lowest slot
    return list(totals).index(min(totals))


def balance_with_report(
    players: Sequence[Player],
    *,
    rng: Optional[random.Random] = None,
) -> BalanceReport:
    """Partition ``players`` into three teams and report each team's rating total.

    Each position group is shuffled independently. Up to three goalkeepers are
    placed one per team in slot order; every other player, including any
    goalkeeper beyond the third, joins whichever team has the lowest running
    rating total at that moment.
    """

    if players is None:
        raise TypeError("players must be a sequence, not None")

    rng = rng or _default_rng()
    groups = _group_players(players)
    for members in groups.values():
        rng.shuffle(members)

    teams: List[List[str]] = [[] for _ in range(_TEAM_COUNT)]
    totals: List[float] = [0.0] * _TEAM_COUNT

    goalkeepers = groups[PositionGroup.GOALKEEPER]
    for index, keeper in enumerate(goalkeepers[:_TEAM_COUNT]):
        teams[index].append(keeper.player_id)
        totals[index] += keeper.rating

    surplus = goalkeepers[_TEAM_COUNT:]
    if surplus:
        logger.debug("Distributing %d surplus goalkeepers by rating", len(surplus))

    queue: List[Player] = list(surplus)
    for group in _GROUP_ORDER:
        queue.extend(groups[group])

    for player in queue:
        index = _lowest_team_index(totals)
        teams[index].append(player.player_id)
        totals[index] += player.rating

    assignment = TeamAssignment.from_lists(teams)
    return BalanceReport(
        assignment=assignment,
        ratings=(totals[0], totals[1], totals[2]),
        surplus_goalkeepers=len(surplus),
    )


def balance(players: Sequence[Player], *, rng: Optional[random.Random] = None) -> TeamAssignment:
    """Return a three-team assignment for the confirmed ``players``."""

    return balance_with_report(players, rng=rng).assignment


def team_ratings(assignment: TeamAssignment, players: Sequence[Player]) -> Tuple[float, float, float]:
    """Sum player ratings per slot; identifiers missing from ``players`` count as zero."""

    by_id: Mapping[str, Player] = {player.player_id: player for player in players}
    totals = []
    for _, ids in assignment.iter_teams():
        totals.append(sum(by_id[player_id].rating for player_id in ids if player_id in by_id))
    return totals[0], totals[1], totals[2]


__all__ = ["BalanceReport", "balance", "balance_with_report", "team_ratings"]
