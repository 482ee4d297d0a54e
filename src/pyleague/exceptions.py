"""Errors raised by the league workflow layer."""

from __future__ import annotations


class LeagueError(Exception):
    """Base class for workflow errors surfaced to callers."""


class GameNotFoundError(LeagueError, KeyError):
    def __init__(self, game_id: str):
        super().__init__(f"Game {game_id!r} not found")
        self.game_id = game_id

    def __str__(self) -> str:
        return self.args[0]


class PlayerNotFoundError(LeagueError, KeyError):
    def __init__(self, player_id: str):
        super().__init__(f"Player {player_id!r} not found")
        self.player_id = player_id

    def __str__(self) -> str:
        return self.args[0]


class GameStateError(LeagueError):
    """Raised when an operation does not fit the game's lifecycle status."""


class InsufficientPlayersError(LeagueError):
    def __init__(self, confirmed: int, required: int):
        super().__init__(
            f"At least {required} confirmed players are required to form teams, got {confirmed}"
        )
        self.confirmed = confirmed
        self.required = required


class InvalidStatisticError(LeagueError, ValueError):
    """Raised when a statistic category is not one the league records."""


__all__ = [
    "LeagueError",
    "GameNotFoundError",
    "PlayerNotFoundError",
    "GameStateError",
    "InsufficientPlayersError",
    "InvalidStatisticError",
]
