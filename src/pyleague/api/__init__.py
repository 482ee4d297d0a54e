"""REST API for the pyleague manager."""

from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import Literal, Mapping, Optional

from fastapi import FastAPI, HTTPException, Query

from pyleague.api.schemas import (
    AttendanceListResponse,
    AttendanceRequest,
    AttendanceResponse,
    FinalizeRequest,
    GameCreateRequest,
    GameResponse,
    RankingEntryResponse,
    RankingResponse,
    ScoringRuleBody,
    ScoringRulesPayload,
    StatisticRequest,
    StatisticResponse,
    TeamGenerationResponse,
    TeamPlayerResponse,
    TeamResponse,
)
from pyleague.exceptions import (
    GameNotFoundError,
    GameStateError,
    InsufficientPlayersError,
    InvalidStatisticError,
    LeagueError,
    PlayerNotFoundError,
)
from pyleague.models import GameSession, Player, ScoringRule
from pyleague.persistence import LeagueStore
from pyleague.ranking import resolve_window
from pyleague.workflow import LeagueService


logger = logging.getLogger(__name__)


def _status_for(exc: LeagueError) -> int:
    if isinstance(exc, (GameNotFoundError, PlayerNotFoundError)):
        return 404
    if isinstance(exc, GameStateError):
        return 409
    if isinstance(exc, (InsufficientPlayersError, InvalidStatisticError)):
        return 422
    return 400


def _raise_http(exc: LeagueError) -> None:
    raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc


def _game_to_response(game: GameSession, players: Mapping[str, Player]) -> GameResponse:
    teams = []
    for slot, ids in game.teams.iter_teams():
        members = []
        total = 0.0
        for player_id in ids:
            player = players.get(player_id)
            if player is None:
                members.append(TeamPlayerResponse(player_id=player_id))
                continue
            total += player.rating
            members.append(
                TeamPlayerResponse(
                    player_id=player_id,
                    name=player.name,
                    position=player.position.value,
                    rating=player.rating,
                )
            )
        teams.append(TeamResponse(slot=slot, rating_total=total, players=members))
    return GameResponse(game_id=game.game_id, date=game.date, status=game.status.value, teams=teams)


def create_app(store: Optional[LeagueStore] = None) -> FastAPI:
    app = FastAPI(title="pyleague")
    store = store or LeagueStore(Path(__file__).resolve().parent.parent / "pyleague.sqlite")
    service = LeagueService(store)
    app.state.league_store = store
    app.state.league_service = service

    def roster_lookup() -> dict[str, Player]:
        return {player.player_id: player for player in store.list_players()}

    def game_or_404(game_id: str) -> GameSession:
        game = store.get_game(game_id)
        if game is None:
            raise HTTPException(status_code=404, detail="Game not found")
        return game

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=list[Player])
    async def list_players(active: Optional[bool] = None):
        return store.list_players(active=active)

    @app.post("/players", response_model=Player)
    async def save_player(player: Player):
        return store.save_player(player)

    @app.get("/players/{player_id}", response_model=Player)
    async def get_player(player_id: str):
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return player

    @app.delete("/players/{player_id}")
    async def delete_player(player_id: str) -> dict[str, str]:
        if not store.delete_player(player_id):
            raise HTTPException(status_code=404, detail="Player not found")
        logger.info("Deleted player %s", player_id)
        return {"status": "deleted", "player_id": player_id}

    @app.get("/games", response_model=list[GameResponse])
    async def list_games(limit: int = 50):
        players = roster_lookup()
        return [_game_to_response(game, players) for game in store.list_games(limit=limit)]

    @app.post("/games", response_model=GameResponse)
    async def create_game(body: GameCreateRequest):
        game = store.create_game(body.date)
        return _game_to_response(game, {})

    @app.get("/games/next", response_model=GameResponse)
    async def next_game(create: bool = True):
        game = service.next_game(datetime.date.today(), create=create)
        if game is None:
            raise HTTPException(status_code=404, detail="No upcoming game")
        return _game_to_response(game, roster_lookup())

    @app.get("/games/{game_id}", response_model=GameResponse)
    async def get_game(game_id: str):
        return _game_to_response(game_or_404(game_id), roster_lookup())

    @app.post("/games/{game_id}/attendance", response_model=AttendanceResponse)
    async def set_attendance(game_id: str, body: AttendanceRequest):
        game = game_or_404(game_id)
        try:
            record = service.confirm_attendance(body.player_id, game.date, body.status)
        except LeagueError as exc:
            _raise_http(exc)
        return AttendanceResponse(**record.model_dump())

    @app.get("/games/{game_id}/attendance", response_model=AttendanceListResponse)
    async def list_attendance(game_id: str):
        game = game_or_404(game_id)
        summary = service.attendance_summary(game.date)
        records = [AttendanceResponse(**record.model_dump()) for record in store.list_attendance(game.date)]
        return AttendanceListResponse(
            game_date=game.date,
            confirmed_players=summary.confirmed_players,
            confirmed_goalkeepers=summary.confirmed_goalkeepers,
            queued=summary.queued,
            withdrawn=summary.withdrawn,
            records=records,
        )

    @app.post("/games/{game_id}/teams", response_model=TeamGenerationResponse)
    async def generate_teams(game_id: str):
        try:
            result = service.generate_teams(game_id)
        except LeagueError as exc:
            _raise_http(exc)
        return TeamGenerationResponse(
            game=_game_to_response(result.game, roster_lookup()),
            skipped_player_ids=list(result.skipped_player_ids),
        )

    @app.post("/games/{game_id}/statistics", response_model=list[StatisticResponse])
    async def add_statistics(game_id: str, body: StatisticRequest):
        try:
            records = service.record_statistic(game_id, body.player_ids, body.category, body.count)
        except LeagueError as exc:
            _raise_http(exc)
        return [StatisticResponse(**record.model_dump()) for record in records]

    @app.get("/games/{game_id}/statistics", response_model=list[StatisticResponse])
    async def list_statistics(game_id: str):
        game_or_404(game_id)
        return [StatisticResponse(**record.model_dump()) for record in store.list_statistics(game_id=game_id)]

    @app.post("/games/{game_id}/finalize", response_model=GameResponse)
    async def finalize_game(game_id: str, body: FinalizeRequest):
        try:
            game = service.finalize_game(game_id, body.winning_team)
        except LeagueError as exc:
            _raise_http(exc)
        return _game_to_response(game, roster_lookup())

    @app.get("/scoring-rules", response_model=ScoringRulesPayload)
    async def get_scoring_rules():
        rules = store.ensure_default_scoring_rules()
        return ScoringRulesPayload(
            rules=[ScoringRuleBody(category=rule.category, weight=rule.weight) for rule in rules]
        )

    @app.put("/scoring-rules", response_model=ScoringRulesPayload)
    async def update_scoring_rules(payload: ScoringRulesPayload):
        store.ensure_default_scoring_rules()
        for body in payload.rules:
            store.set_scoring_rule(ScoringRule(category=body.category, weight=body.weight))
        logger.info("Updated %d scoring rules", len(payload.rules))
        rules = store.list_scoring_rules()
        return ScoringRulesPayload(
            rules=[ScoringRuleBody(category=rule.category, weight=rule.weight) for rule in rules]
        )

    @app.get("/rankings", response_model=RankingResponse)
    async def rankings(
        period: Literal["all", "month", "year"] = "all",
        year: Optional[int] = Query(None, ge=1900, le=9999),
        month: Optional[int] = Query(None, ge=1, le=12),
    ):
        window = resolve_window(period, today=datetime.date.today(), year=year, month=month)
        ranked = service.rankings(window)
        return RankingResponse(
            period=period,
            label=window.label,
            start=window.start,
            end=window.end,
            rankings=[
                RankingEntryResponse(rank=index, **ranking.model_dump())
                for index, ranking in enumerate(ranked, start=1)
            ],
        )

    return app


__all__ = ["create_app"]
