import csv
import datetime
import json
from pathlib import Path

from pyleague.cli import main
from pyleague.models import Player
from pyleague.persistence import LeagueStore
from pyleague.workflow import LeagueService


def _write_roster(path: Path) -> None:
    path.write_text(
        "id,name,position,rating\n"
        "1,Ana,Meio-campo,8\n"
        "2,Bia,Goleiro,3\n"
        "3,Caio,Atacante,6\n"
        "4,Duda,Zagueiro,9\n"
        "5,Edu,Goleiro,2\n"
        "6,Fabi,Meio-campo,5\n",
        encoding="utf-8",
    )


def test_teams_command_writes_csv(tmp_path: Path, capsys):
    roster = tmp_path / "roster.csv"
    output = tmp_path / "teams.csv"
    _write_roster(roster)

    main(["teams", str(roster), "--seed", "3", "--output", str(output)])

    printed = capsys.readouterr().out
    assert "team_1" in printed and "team_3" in printed
    with output.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert sorted(row["player_id"] for row in rows) == ["1", "2", "3", "4", "5", "6"]
    keepers = {row["team"] for row in rows if row["position"] == "goalkeeper"}
    assert len(keepers) == 2


def test_rankings_command_uses_scoring_profile(tmp_path: Path, capsys):
    db = tmp_path / "league.sqlite"
    store = LeagueStore(db)
    store.save_player(Player(player_id="a", name="Ana", position="forward", rating=7))
    store.save_player(Player(player_id="b", name="Bia", position="forward", rating=7))
    game = store.create_game(datetime.date(2024, 3, 2))
    LeagueService(store).record_statistic(game.game_id, ["b"], "assist", count=2)
    scoring = tmp_path / "scoring.json"
    scoring.write_text(json.dumps({"weights": {"assist": 2.5}}), encoding="utf-8")

    main(["rankings", "--db", str(db), "--scoring", str(scoring), "--period", "year", "--year", "2024"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Rankings (2024)"
    assert "Bia" in lines[2]
    assert "5" in lines[2]


def test_rankings_db_flag_wins_over_env(tmp_path: Path, monkeypatch, capsys):
    db = tmp_path / "league.sqlite"
    store = LeagueStore(db)
    store.save_player(Player(player_id="a", name="Ana", position="forward", rating=7))
    monkeypatch.setenv("PYLEAGUE_DB_PATH", str(tmp_path / "other.sqlite"))

    main(["rankings", "--db", str(db)])

    lines = capsys.readouterr().out.splitlines()
    assert "Ana" in lines[2]
    assert not (tmp_path / "other.sqlite").exists()
