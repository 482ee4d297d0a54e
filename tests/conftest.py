from pathlib import Path

import pytest

from pyleague.models import Player
from pyleague.persistence import LeagueStore


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv("PYLEAGUE_DB_PATH", raising=False)
    monkeypatch.delenv("PYLEAGUE_MIN_PLAYERS", raising=False)
    monkeypatch.delenv("PYLEAGUE_BALANCE_SEED", raising=False)


@pytest.fixture
def store(tmp_path: Path) -> LeagueStore:
    return LeagueStore(tmp_path / "league.sqlite")


@pytest.fixture
def squad() -> list[Player]:
    return [
        Player(player_id="A", name="Ana", position="midfielder", rating=8),
        Player(player_id="B", name="Bia", position="goalkeeper", rating=3),
        Player(player_id="C", name="Caio", position="forward", rating=6),
        Player(player_id="D", name="Duda", position="center_back", rating=9),
        Player(player_id="E", name="Edu", position="goalkeeper", rating=2),
        Player(player_id="F", name="Fabi", position="midfielder", rating=5),
        Player(player_id="G", name="Gui", position="fullback", rating=4),
    ]
