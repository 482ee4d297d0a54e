"""Orchestration of league operations around the pure balancing and ranking core."""

from __future__ import annotations

import datetime
import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from pyleague.balancer import balance_with_report
from pyleague.config import LeagueRules, get_rules, weights_from_rules
from pyleague.exceptions import (
    GameNotFoundError,
    GameStateError,
    InsufficientPlayersError,
    InvalidStatisticError,
    PlayerNotFoundError,
)
from pyleague.models import (
    AttendanceRecord,
    AttendanceStatus,
    GameSession,
    Player,
    PlayerRanking,
    StatCategory,
    StatisticRecord,
    TeamSlot,
)
from pyleague.persistence import LeagueStore
from pyleague.ranking import DateWindow, leaderboard


logger = logging.getLogger(__name__)

SATURDAY = 5


@dataclass(frozen=True)
class AttendanceSummary:
    game_date: datetime.date
    confirmed_players: int
    confirmed_goalkeepers: int
    queued: int
    withdrawn: int

    @property
    def confirmed_total(self) -> int:
        return self.confirmed_players + self.confirmed_goalkeepers


@dataclass(frozen=True)
class TeamGenerationResult:
    game: GameSession
    ratings: tuple[float, float, float]
    skipped_player_ids: tuple[str, ...]


class LeagueService:
    """Sequences store reads, core computations and a single write per operation."""

    def __init__(self, store: LeagueStore, rules: Optional[LeagueRules] = None):
        self.store = store
        self.rules = rules or get_rules()

    def _game_or_raise(self, game_id: str) -> GameSession:
        game = self.store.get_game(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    def _player_or_raise(self, player_id: str) -> Player:
        player = self.store.get_player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    def confirm_attendance(
        self,
        player_id: str,
        game_date: datetime.date,
        status: AttendanceStatus = AttendanceStatus.CONFIRMED,
    ) -> AttendanceRecord:
        """Record a player's attendance, queueing them once the squad is full."""

        player = self._player_or_raise(player_id)
        status = AttendanceStatus(status)
        if status is AttendanceStatus.CONFIRMED:
            current = self.store.get_attendance(player_id, game_date)
            already_confirmed = current is not None and current.status is AttendanceStatus.CONFIRMED
            if not already_confirmed and self._squad_full(game_date, player):
                logger.info("Squad full for %s; queueing %s", game_date, player_id)
                status = AttendanceStatus.QUEUED
        return self.store.set_attendance(player_id, game_date, status)

    def _squad_full(self, game_date: datetime.date, player: Player) -> bool:
        summary = self.attendance_summary(game_date)
        if player.is_goalkeeper:
            return summary.confirmed_goalkeepers >= self.rules.max_confirmed_goalkeepers
        return summary.confirmed_players >= self.rules.max_confirmed_players

    def attendance_summary(self, game_date: datetime.date) -> AttendanceSummary:
        records = self.store.list_attendance(game_date)
        confirmed_players = confirmed_goalkeepers = queued = withdrawn = 0
        for record in records:
            if record.status is AttendanceStatus.QUEUED:
                queued += 1
            elif record.status is AttendanceStatus.WITHDRAWN:
                withdrawn += 1
            else:
                player = self.store.get_player(record.player_id)
                if player is None:
                    continue
                if player.is_goalkeeper:
                    confirmed_goalkeepers += 1
                else:
                    confirmed_players += 1
        return AttendanceSummary(
            game_date=game_date,
            confirmed_players=confirmed_players,
            confirmed_goalkeepers=confirmed_goalkeepers,
            queued=queued,
            withdrawn=withdrawn,
        )

    def confirmed_players(self, game_date: datetime.date) -> tuple[List[Player], List[str]]:
        """Players confirmed for ``game_date`` plus identifiers that no longer resolve."""

        players: List[Player] = []
        skipped: List[str] = []
        for record in self.store.list_attendance(game_date, status=AttendanceStatus.CONFIRMED):
            player = self.store.get_player(record.player_id)
            if player is None:
                skipped.append(record.player_id)
                continue
            players.append(player)
        if skipped:
            logger.warning("Skipping %d confirmed ids without a player record: %s", len(skipped), skipped)
        return players, skipped

    def generate_teams(
        self,
        game_id: str,
        *,
        rng: Optional[random.Random] = None,
    ) -> TeamGenerationResult:
        game = self._game_or_raise(game_id)
        if game.is_finalized:
            raise GameStateError(f"Game {game_id} is finalized; teams can no longer change")

        players, skipped = self.confirmed_players(game.date)
        if len(players) < self.rules.min_confirmed_players:
            raise InsufficientPlayersError(len(players), self.rules.min_confirmed_players)

        report = balance_with_report(players, rng=rng)
        updated = self.store.update_game(game.with_teams(report.assignment))
        logger.info(
            "Formed teams for game %s from %d players (ratings %s)",
            game_id,
            len(players),
            ", ".join(f"{rating:.1f}" for rating in report.ratings),
        )
        return TeamGenerationResult(game=updated, ratings=report.ratings, skipped_player_ids=tuple(skipped))

    def record_statistic(
        self,
        game_id: str,
        player_ids: Iterable[str],
        category: StatCategory | str,
        count: int = 1,
    ) -> List[StatisticRecord]:
        try:
            category = StatCategory(category)
        except ValueError:
            raise InvalidStatisticError(f"Unknown statistic category {category!r}") from None
        game = self._game_or_raise(game_id)
        if game.is_finalized:
            raise GameStateError(f"Game {game_id} is finalized; statistics can no longer change")

        player_ids = list(player_ids)
        for player_id in player_ids:
            self._player_or_raise(player_id)
            if not game.teams.is_empty and game.teams.slot_of(player_id) is None:
                raise InvalidStatisticError(f"Player {player_id!r} is not on a team for game {game_id}")
        records = [
            StatisticRecord(game_id=game.game_id, player_id=player_id, category=category.value, count=count)
            for player_id in player_ids
        ]
        return self.store.add_statistics(records)

    def finalize_game(self, game_id: str, winning_slot: TeamSlot | str) -> GameSession:
        """Close the game, crediting a win to the winning team and a participation to everyone."""

        game = self._game_or_raise(game_id)
        if game.teams.is_empty:
            raise GameStateError(f"Game {game_id} has no teams assigned")
        finalized = game.finalized()
        winning_slot = TeamSlot(winning_slot)

        records = [
            StatisticRecord(game_id=game_id, player_id=player_id, category=StatCategory.WIN.value)
            for player_id in game.teams.team(winning_slot)
        ]
        records.extend(
            StatisticRecord(game_id=game_id, player_id=player_id, category=StatCategory.PARTICIPATION.value)
            for player_id in game.teams.player_ids()
        )

        updated = self.store.update_game(finalized)
        self.store.add_statistics(records)
        logger.info("Finalized game %s; %s won", game_id, winning_slot.value)
        return updated

    def next_game(self, today: datetime.date, *, create: bool = True) -> Optional[GameSession]:
        """The first game on or after ``today``; schedules one for the coming Saturday if none exists."""

        game = self.store.next_game(today)
        if game is not None or not create:
            return game
        saturday = today + datetime.timedelta(days=(SATURDAY - today.weekday()) % 7)
        game = self.store.create_game(saturday)
        logger.info("Scheduled game %s for %s", game.game_id, saturday)
        return game

    def rankings(self, window: Optional[DateWindow] = None) -> List[PlayerRanking]:
        statistics = self.store.list_statistics()
        weights = weights_from_rules(self.store.ensure_default_scoring_rules())
        roster = self.store.list_players()
        sessions = self.store.list_games()
        return leaderboard(statistics, weights, roster, sessions, window=window)


__all__ = ["AttendanceSummary", "LeagueService", "TeamGenerationResult"]
