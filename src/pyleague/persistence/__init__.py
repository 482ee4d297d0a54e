"""Persistence layer for players, games, attendance, statistics and scoring rules."""

from __future__ import annotations

import datetime
import json
import os
import sqlite3
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional
from uuid import uuid4

from pyleague.config import default_scoring_rules
from pyleague.models import (
    AttendanceRecord,
    AttendanceStatus,
    GameSession,
    GameStatus,
    Player,
    ScoringRule,
    StatCategory,
    StatisticRecord,
    TeamAssignment,
)


class LeagueStore:
    """Simple SQLite-backed store for league entities."""

    def __init__(self, db_path: Path | str, *, honor_env: bool = True):
        self._use_uri = False
        env_db = os.getenv("PYLEAGUE_DB_PATH") if honor_env else None
        if env_db:
            if env_db.startswith("file:"):
                self.db_path = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        elif isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(self.db_path)
            except sqlite3.OperationalError:
                fallback_dir = Path(tempfile.gettempdir()) / "pyleague-runtime"
                fallback_dir.mkdir(parents=True, exist_ok=True)
                fallback = fallback_dir / "pyleague.sqlite"
                conn = sqlite3.connect(fallback)
                self.db_path = fallback
                self._create_schema(conn)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                position TEXT NOT NULL,
                rating REAL NOT NULL,
                active INTEGER NOT NULL DEFAULT 1,
                role TEXT NOT NULL,
                email TEXT,
                photo_url TEXT
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS games (
                id TEXT PRIMARY KEY,
                game_date TEXT NOT NULL,
                status TEXT NOT NULL,
                teams_json TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS attendance (
                player_id TEXT NOT NULL,
                game_date TEXT NOT NULL,
                status TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (player_id, game_date)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS statistics (
                id TEXT PRIMARY KEY,
                game_id TEXT NOT NULL,
                player_id TEXT NOT NULL,
                category TEXT NOT NULL,
                count INTEGER NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS scoring_rules (
                category TEXT PRIMARY KEY,
                weight REAL NOT NULL
            )
            """
        )
        conn.commit()

    # players

    def save_player(self, player: Player) -> Player:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO players (id, name, position, rating, active, role, email, photo_url)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    position = excluded.position,
                    rating = excluded.rating,
                    active = excluded.active,
                    role = excluded.role,
                    email = excluded.email,
                    photo_url = excluded.photo_url
                """,
                (
                    player.player_id,
                    player.name,
                    player.position.value,
                    player.rating,
                    int(player.active),
                    player.role.value,
                    player.email,
                    player.photo_url,
                ),
            )
            conn.commit()
        return player

    def get_player(self, player_id: str) -> Optional[Player]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_player(row)

    def list_players(self, *, active: Optional[bool] = None) -> List[Player]:
        with self._connect() as conn:
            if active is None:
                rows = conn.execute("SELECT * FROM players ORDER BY rowid").fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM players WHERE active = ? ORDER BY rowid",
                    (int(active),),
                ).fetchall()
        return [self._row_to_player(row) for row in rows]

    def delete_player(self, player_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
            conn.commit()
        return cursor.rowcount > 0

    # games

    def create_game(self, game_date: datetime.date, *, game_id: Optional[str] = None) -> GameSession:
        game = GameSession(game_id=game_id or uuid4().hex, date=game_date)
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO games (id, game_date, status, teams_json) VALUES (?, ?, ?, ?)",
                (game.game_id, game.date.isoformat(), game.status.value, json.dumps(game.teams.as_dict())),
            )
            conn.commit()
        return game

    def get_game(self, game_id: str) -> Optional[GameSession]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM games WHERE id = ?", (game_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_game(row)

    def list_games(self, limit: Optional[int] = None) -> List[GameSession]:
        query = "SELECT * FROM games ORDER BY game_date DESC"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_game(row) for row in rows]

    def games_between(self, start: datetime.date, end: datetime.date) -> List[GameSession]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM games WHERE game_date BETWEEN ? AND ? ORDER BY game_date",
                (start.isoformat(), end.isoformat()),
            ).fetchall()
        return [self._row_to_game(row) for row in rows]

    def next_game(self, today: datetime.date) -> Optional[GameSession]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM games WHERE game_date >= ? ORDER BY game_date ASC LIMIT 1",
                (today.isoformat(),),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_game(row)

    def update_game(self, game: GameSession) -> GameSession:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE games SET game_date = ?, status = ?, teams_json = ? WHERE id = ?",
                (game.date.isoformat(), game.status.value, json.dumps(game.teams.as_dict()), game.game_id),
            )
            conn.commit()
        if cursor.rowcount == 0:
            raise KeyError(f"Game {game.game_id} not found")
        return game

    # attendance

    def set_attendance(
        self,
        player_id: str,
        game_date: datetime.date,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        record = AttendanceRecord(player_id=player_id, game_date=game_date, status=status)
        now = datetime.datetime.now(datetime.timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO attendance (player_id, game_date, status, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(player_id, game_date) DO UPDATE SET
                    status = excluded.status,
                    updated_at = excluded.updated_at
                """,
                (player_id, game_date.isoformat(), record.status.value, now),
            )
            conn.commit()
        return record

    def get_attendance(self, player_id: str, game_date: datetime.date) -> Optional[AttendanceRecord]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM attendance WHERE player_id = ? AND game_date = ?",
                (player_id, game_date.isoformat()),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_attendance(row)

    def list_attendance(
        self,
        game_date: datetime.date,
        *,
        status: Optional[AttendanceStatus] = None,
    ) -> List[AttendanceRecord]:
        query = "SELECT * FROM attendance WHERE game_date = ?"
        params: list = [game_date.isoformat()]
        if status is not None:
            query += " AND status = ?"
            params.append(AttendanceStatus(status).value)
        query += " ORDER BY rowid"
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_attendance(row) for row in rows]

    # statistics

    def add_statistic(self, record: StatisticRecord) -> StatisticRecord:
        stored = record if record.stat_id else record.model_copy(update={"stat_id": uuid4().hex})
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO statistics (id, game_id, player_id, category, count, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    stored.stat_id,
                    stored.game_id,
                    stored.player_id,
                    str(stored.category),
                    stored.count,
                    datetime.datetime.now(datetime.timezone.utc).isoformat(),
                ),
            )
            conn.commit()
        return stored

    def add_statistics(self, records: Iterable[StatisticRecord]) -> List[StatisticRecord]:
        return [self.add_statistic(record) for record in records]

    def list_statistics(self, *, game_id: Optional[str] = None) -> List[StatisticRecord]:
        with self._connect() as conn:
            if game_id is None:
                rows = conn.execute("SELECT * FROM statistics ORDER BY rowid").fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM statistics WHERE game_id = ? ORDER BY rowid",
                    (game_id,),
                ).fetchall()
        return [
            StatisticRecord(
                stat_id=row["id"],
                game_id=row["game_id"],
                player_id=row["player_id"],
                category=row["category"],
                count=row["count"],
            )
            for row in rows
        ]

    # scoring rules

    def list_scoring_rules(self) -> List[ScoringRule]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM scoring_rules ORDER BY rowid").fetchall()
        rules: List[ScoringRule] = []
        known = {category.value for category in StatCategory}
        for row in rows:
            if row["category"] not in known:
                continue
            rules.append(ScoringRule(category=StatCategory(row["category"]), weight=row["weight"]))
        return rules

    def set_scoring_rule(self, rule: ScoringRule) -> ScoringRule:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO scoring_rules (category, weight) VALUES (?, ?)
                ON CONFLICT(category) DO UPDATE SET weight = excluded.weight
                """,
                (StatCategory(rule.category).value, rule.weight),
            )
            conn.commit()
        return rule

    def ensure_default_scoring_rules(self) -> List[ScoringRule]:
        """Seed the default weights when no rule has been stored yet."""

        existing = self.list_scoring_rules()
        if existing:
            return existing
        for rule in default_scoring_rules():
            self.set_scoring_rule(rule)
        return self.list_scoring_rules()

    # row mapping

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        return Player(
            player_id=row["id"],
            name=row["name"],
            position=row["position"],
            rating=row["rating"],
            active=bool(row["active"]),
            role=row["role"],
            email=row["email"],
            photo_url=row["photo_url"],
        )

    @staticmethod
    def _row_to_game(row: sqlite3.Row) -> GameSession:
        teams = json.loads(row["teams_json"] or "{}")
        return GameSession(
            game_id=row["id"],
            date=datetime.date.fromisoformat(row["game_date"]),
            status=GameStatus(row["status"]),
            teams=TeamAssignment(**teams),
        )

    @staticmethod
    def _row_to_attendance(row: sqlite3.Row) -> AttendanceRecord:
        return AttendanceRecord(
            player_id=row["player_id"],
            game_date=datetime.date.fromisoformat(row["game_date"]),
            status=AttendanceStatus(row["status"]),
        )


__all__ = ["LeagueStore"]
