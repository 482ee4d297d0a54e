import datetime
import random
from dataclasses import replace

import pytest

from pyleague.config import get_rules
from pyleague.exceptions import (
    GameNotFoundError,
    GameStateError,
    InsufficientPlayersError,
    InvalidStatisticError,
    PlayerNotFoundError,
)
from pyleague.models import AttendanceStatus, GameStatus, Player, ScoringRule, TeamSlot
from pyleague.ranking import month_window
from pyleague.workflow import LeagueService


GAME_DATE = datetime.date(2024, 6, 1)


@pytest.fixture
def service(store, squad) -> LeagueService:
    for player in squad:
        store.save_player(player)
    return LeagueService(store)


def _confirm_all(service: LeagueService, players: list[Player], game_date=GAME_DATE) -> None:
    for player in players:
        service.confirm_attendance(player.player_id, game_date)


def test_generate_teams_persists_assignment(service, store, squad):
    game = store.create_game(GAME_DATE)
    _confirm_all(service, squad)

    result = service.generate_teams(game.game_id, rng=random.Random(4))

    stored = store.get_game(game.game_id)
    assert stored.teams == result.game.teams
    assert sorted(stored.teams.player_ids()) == sorted(player.player_id for player in squad)
    assert stored.teams.slot_of("B") != stored.teams.slot_of("E")
    assert sum(result.ratings) == pytest.approx(sum(player.rating for player in squad))


def test_generate_teams_only_uses_confirmed_players(service, store, squad):
    game = store.create_game(GAME_DATE)
    _confirm_all(service, squad)
    service.confirm_attendance("G", GAME_DATE, AttendanceStatus.WITHDRAWN)

    result = service.generate_teams(game.game_id, rng=random.Random(1))

    assert "G" not in result.game.teams.player_ids()
    assert len(result.game.teams.player_ids()) == 6


def test_generate_teams_requires_minimum_squad(service, store, squad):
    game = store.create_game(GAME_DATE)
    _confirm_all(service, squad[:5])

    with pytest.raises(InsufficientPlayersError) as excinfo:
        service.generate_teams(game.game_id)

    assert excinfo.value.confirmed == 5
    assert store.get_game(game.game_id).teams.is_empty


def test_generate_teams_skips_unknown_confirmed_ids(service, store, squad):
    game = store.create_game(GAME_DATE)
    _confirm_all(service, squad)
    store.set_attendance("ghost", GAME_DATE, AttendanceStatus.CONFIRMED)

    result = service.generate_teams(game.game_id, rng=random.Random(2))

    assert result.skipped_player_ids == ("ghost",)
    assert "ghost" not in result.game.teams.player_ids()


def test_generate_teams_unknown_game(service):
    with pytest.raises(GameNotFoundError):
        service.generate_teams("nope")


def test_regenerate_allowed_while_pending_but_not_after_finalize(service, store, squad):
    game = store.create_game(GAME_DATE)
    _confirm_all(service, squad)
    service.generate_teams(game.game_id, rng=random.Random(1))
    service.generate_teams(game.game_id, rng=random.Random(2))

    service.finalize_game(game.game_id, TeamSlot.TEAM_1)

    with pytest.raises(GameStateError):
        service.generate_teams(game.game_id)


def test_confirm_attendance_unknown_player(service):
    with pytest.raises(PlayerNotFoundError):
        service.confirm_attendance("nobody", GAME_DATE)


def test_confirm_attendance_queues_when_squad_full(store, squad):
    for player in squad:
        store.save_player(player)
    rules = replace(get_rules(), max_confirmed_players=2, max_confirmed_goalkeepers=1)
    service = LeagueService(store, rules=rules)

    assert service.confirm_attendance("A", GAME_DATE).status is AttendanceStatus.CONFIRMED
    assert service.confirm_attendance("C", GAME_DATE).status is AttendanceStatus.CONFIRMED
    assert service.confirm_attendance("D", GAME_DATE).status is AttendanceStatus.QUEUED
    assert service.confirm_attendance("B", GAME_DATE).status is AttendanceStatus.CONFIRMED
    assert service.confirm_attendance("E", GAME_DATE).status is AttendanceStatus.QUEUED
    # re-confirming an already confirmed player keeps their place
    assert service.confirm_attendance("A", GAME_DATE).status is AttendanceStatus.CONFIRMED

    summary = service.attendance_summary(GAME_DATE)
    assert summary.confirmed_players == 2
    assert summary.confirmed_goalkeepers == 1
    assert summary.queued == 2
    assert summary.confirmed_total == 3


def test_finalize_records_wins_and_participations(service, store, squad):
    game = store.create_game(GAME_DATE)
    _confirm_all(service, squad)
    teams = service.generate_teams(game.game_id, rng=random.Random(8)).game.teams

    finalized = service.finalize_game(game.game_id, "team_2")

    assert finalized.status is GameStatus.FINALIZED
    stats = store.list_statistics(game_id=game.game_id)
    wins = sorted(record.player_id for record in stats if record.category == "win")
    participations = sorted(record.player_id for record in stats if record.category == "participation")
    assert wins == sorted(teams.team_2)
    assert participations == sorted(teams.player_ids())

    with pytest.raises(GameStateError):
        service.finalize_game(game.game_id, "team_1")


def test_finalize_without_teams_is_rejected(service, store):
    game = store.create_game(GAME_DATE)

    with pytest.raises(GameStateError):
        service.finalize_game(game.game_id, "team_1")


def test_record_statistic_validates_category(service, store):
    game = store.create_game(GAME_DATE)

    records = service.record_statistic(game.game_id, ["A", "C"], "goal")
    assert [record.player_id for record in records] == ["A", "C"]
    assert all(record.stat_id for record in records)

    with pytest.raises(InvalidStatisticError):
        service.record_statistic(game.game_id, ["A"], "own_goal")
    with pytest.raises(GameNotFoundError):
        service.record_statistic("missing", ["A"], "goal")


def test_rankings_with_window(service, store, squad):
    june = store.create_game(GAME_DATE)
    july = store.create_game(datetime.date(2024, 7, 6))
    service.record_statistic(june.game_id, ["C"], "goal", count=2)
    service.record_statistic(july.game_id, ["A"], "goal", count=3)
    store.set_scoring_rule(ScoringRule(category="goal", weight=4))

    all_time = service.rankings()
    june_only = service.rankings(month_window(2024, 6))

    assert len(all_time) == len(squad)
    assert [ranking.player_id for ranking in all_time[:2]] == ["A", "C"]
    assert all_time[0].points == pytest.approx(12)
    assert june_only[0].player_id == "C"
    assert june_only[0].points == pytest.approx(8)
    assert next(r for r in june_only if r.player_id == "A").points == 0


def test_record_statistic_rejected_after_finalize(service, store, squad):
    game = store.create_game(GAME_DATE)
    _confirm_all(service, squad)
    service.generate_teams(game.game_id, rng=random.Random(3))
    service.finalize_game(game.game_id, TeamSlot.TEAM_1)
    before = len(store.list_statistics(game_id=game.game_id))

    with pytest.raises(GameStateError):
        service.record_statistic(game.game_id, ["A"], "goal", count=5)

    assert len(store.list_statistics(game_id=game.game_id)) == before


def test_record_statistic_requires_known_drafted_players(service, store, squad):
    store.save_player(Player(player_id="H", name="Hugo", position="forward", rating=7))
    game = store.create_game(GAME_DATE)
    _confirm_all(service, squad)
    service.generate_teams(game.game_id, rng=random.Random(3))

    with pytest.raises(PlayerNotFoundError):
        service.record_statistic(game.game_id, ["A", "ghost"], "goal")
    with pytest.raises(InvalidStatisticError):
        service.record_statistic(game.game_id, ["H"], "goal")

    assert store.list_statistics(game_id=game.game_id) == []


def test_next_game_schedules_coming_saturday(service, store):
    wednesday = datetime.date(2024, 6, 5)

    assert service.next_game(wednesday, create=False) is None

    scheduled = service.next_game(wednesday)
    assert scheduled.date == datetime.date(2024, 6, 8)
    assert service.next_game(wednesday).game_id == scheduled.game_id
    assert len(store.list_games()) == 1


def test_next_game_on_saturday_uses_same_day(service):
    assert service.next_game(GAME_DATE).date == GAME_DATE


def test_attendance_summary_ignores_unknown_players(store, squad):
    for player in squad:
        store.save_player(player)
    rules = replace(get_rules(), max_confirmed_players=1)
    service = LeagueService(store, rules=rules)
    store.set_attendance("ghost", GAME_DATE, AttendanceStatus.CONFIRMED)

    assert service.attendance_summary(GAME_DATE).confirmed_players == 0
    assert service.confirm_attendance("A", GAME_DATE).status is AttendanceStatus.CONFIRMED
