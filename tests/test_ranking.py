import datetime

import pytest

from pyleague.models import GameSession, Player, StatCategory, StatisticRecord
from pyleague.ranking import aggregate, by_date_window, leaderboard, month_window, weight_for


RULES = {"goal": 3, "assist": 1, "win": 2, "participation": 1}


def _player(player_id: str, name: str | None = None) -> Player:
    return Player(player_id=player_id, name=name or player_id.upper(), position="forward", rating=5)


def _stat(player_id: str, category: str, count: int = 1, game_id: str = "g1") -> StatisticRecord:
    return StatisticRecord(game_id=game_id, player_id=player_id, category=category, count=count)


def test_empty_statistics_list_every_player_in_roster_order():
    roster = [_player("a"), _player("b"), _player("c")]

    rankings = aggregate([], RULES, roster)

    assert [ranking.player_id for ranking in rankings] == ["a", "b", "c"]
    assert all(ranking.points == 0 for ranking in rankings)


def test_weighted_points():
    roster = [_player("a")]
    stats = [
        _stat("a", "goal", 2),
        _stat("a", "assist"),
        _stat("a", "participation"),
        _stat("a", "participation", 2),
    ]

    [ranking] = aggregate(stats, RULES, roster)

    assert ranking.goals == 2
    assert ranking.assists == 1
    assert ranking.wins == 0
    assert ranking.participations == 3
    assert ranking.points == pytest.approx(10)


def test_unknown_player_and_category_are_ignored():
    roster = [_player("a")]
    stats = [_stat("ghost", "goal", 5), _stat("a", "yellow_card", 4), _stat("a", "goal")]

    rankings = aggregate(stats, RULES, roster)

    assert [ranking.player_id for ranking in rankings] == ["a"]
    assert rankings[0].points == pytest.approx(3)


def test_missing_rule_weight_counts_as_zero():
    roster = [_player("a")]

    [ranking] = aggregate([_stat("a", "win", 3), _stat("a", "goal")], {"goal": 3}, roster)

    assert ranking.wins == 3
    assert ranking.points == pytest.approx(3)


def test_enum_keyed_rules_and_fractional_weights():
    rules = {StatCategory.GOAL: 1.5, StatCategory.ASSIST: 0.5}

    assert weight_for(rules, StatCategory.GOAL) == 1.5
    assert weight_for(rules, StatCategory.WIN) == 0

    [ranking] = aggregate([_stat("a", "goal", 2), _stat("a", "assist")], rules, [_player("a")])
    assert ranking.points == pytest.approx(3.5)


def test_sort_descending_and_ties_keep_roster_order():
    roster = [_player("a"), _player("b"), _player("c"), _player("d")]
    stats = [_stat("c", "goal"), _stat("b", "win"), _stat("d", "win")]

    rankings = aggregate(stats, RULES, roster)

    assert [ranking.player_id for ranking in rankings] == ["c", "b", "d", "a"]


def test_negative_counts_propagate():
    [ranking] = aggregate([_stat("a", "goal", 2), _stat("a", "goal", -1)], RULES, [_player("a")])

    assert ranking.goals == 1
    assert ranking.points == pytest.approx(3)


def test_photo_url_is_carried():
    player = Player(player_id="a", name="A", position="forward", rating=5, photo_url="http://img/a.png")

    [ranking] = aggregate([], RULES, [player])

    assert ranking.photo_url == "http://img/a.png"


def test_none_collections_are_rejected():
    with pytest.raises(TypeError):
        aggregate(None, RULES, [])  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        aggregate([], RULES, None)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        by_date_window(None, datetime.date(2024, 1, 1), datetime.date(2024, 1, 31), [])  # type: ignore[arg-type]


def _sessions() -> list[GameSession]:
    return [
        GameSession(game_id="before", date=datetime.date(2024, 2, 29)),
        GameSession(game_id="first", date=datetime.date(2024, 3, 1)),
        GameSession(game_id="last", date=datetime.date(2024, 3, 31)),
        GameSession(game_id="after", date=datetime.date(2024, 4, 1)),
    ]


def test_date_window_is_inclusive_on_both_ends():
    stats = [_stat("a", "goal", game_id=game_id) for game_id in ("before", "first", "last", "after")]

    kept = by_date_window(stats, datetime.date(2024, 3, 1), datetime.date(2024, 3, 31), _sessions())

    assert [record.game_id for record in kept] == ["first", "last"]


def test_date_window_drops_unknown_sessions():
    stats = [_stat("a", "goal", game_id="missing"), _stat("a", "goal", game_id="first")]

    kept = by_date_window(stats, datetime.date(2024, 1, 1), datetime.date(2024, 12, 31), _sessions())

    assert [record.game_id for record in kept] == ["first"]


def test_date_window_accepts_datetimes():
    stats = [_stat("a", "goal", game_id="last")]

    kept = by_date_window(
        stats,
        datetime.datetime(2024, 3, 1, 0, 0),
        datetime.datetime(2024, 3, 31, 23, 59, 59),
        _sessions(),
    )

    assert len(kept) == 1


def test_leaderboard_applies_window():
    roster = [_player("a"), _player("b")]
    stats = [
        _stat("a", "goal", 3, game_id="before"),
        _stat("b", "goal", 1, game_id="first"),
    ]

    monthly = leaderboard(stats, RULES, roster, _sessions(), window=month_window(2024, 3))
    all_time = leaderboard(stats, RULES, roster, _sessions())

    assert [ranking.player_id for ranking in monthly] == ["b", "a"]
    assert monthly[1].points == 0
    assert [ranking.player_id for ranking in all_time] == ["a", "b"]
