"""REST API for the league engine."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, HTTPException, Query, Request

from pyleague.api.schemas import (
    AggregateResponse,
    LeadersResponse,
    MoveRequest,
    RatingResponse,
    RecordSetsRequest,
    RecordSetsResponse,
    StandingsRowResponse,
    TradeRequest,
    VodLinkRequest,
)
from pyleague.config import LeagueRules
from pyleague.errors import InvariantViolation, LeagueError, MalformedInput, NotFound, PartialFailure
from pyleague.league import LeagueService
from pyleague.models import Game, Player, SetScore, Team, Trade
from pyleague.persistence import RecordStore, Store
from pyleague.stats import GameAggregate, PlayerRating, TopPerformers


T = TypeVar("T")

ERROR_STATUS: dict[type[LeagueError], int] = {
    NotFound: 404,
    InvariantViolation: 409,
    MalformedInput: 400,
    PartialFailure: 500,
}


def error_status(exc: LeagueError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status
    return 500


def _call(action: Callable[[], T]) -> T:
    try:
        return action()
    except LeagueError as exc:
        raise HTTPException(status_code=error_status(exc), detail=exc.to_dict()) from exc


def aggregate_to_response(aggregate: GameAggregate) -> AggregateResponse:
    return AggregateResponse(
        points_for=aggregate.points_for,
        points_against=aggregate.points_against,
        result=aggregate.result,
        set_results=list(aggregate.set_results),
        sets_won=aggregate.sets_won,
        sets_lost=aggregate.sets_lost,
        sets_tied=aggregate.sets_tied,
    )


def rating_to_response(rating: PlayerRating) -> RatingResponse:
    return RatingResponse(**asdict(rating))


def leaders_to_response(leaders: TopPerformers) -> LeadersResponse:
    return LeadersResponse(
        league_average=leaders.league_average,
        top_plus_minus=[rating_to_response(item) for item in leaders.top_plus_minus],
        top_average=[rating_to_response(item) for item in leaders.top_average],
        top_weighted=[rating_to_response(item) for item in leaders.top_weighted],
    )


def create_app(store: Store | None = None, rules: LeagueRules | None = None) -> FastAPI:
    app = FastAPI(title="pyleague")
    if store is None:
        store = RecordStore(Path(__file__).resolve().parent.parent / "pyleague.sqlite")
    app.state.store = store
    app.state.league = LeagueService(store, rules)

    def league(request: Request) -> LeagueService:
        return request.app.state.league

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/teams", response_model=list[Team])
    async def list_teams(request: Request):
        return league(request).get_teams()

    @app.get("/teams/{team_id}/players", response_model=list[Player])
    async def team_players(team_id: str, request: Request):
        service = league(request)
        return _call(lambda: service.get_players_by_team(team_id))

    @app.get("/teams/{team_id}/trades", response_model=list[Trade])
    async def team_trades(team_id: str, request: Request):
        service = league(request)
        return _call(lambda: service.team_trade_history(team_id))

    @app.get("/players/free-agents", response_model=list[Player])
    async def free_agents(request: Request):
        return league(request).get_free_agents()

    @app.get("/players/{player_id}/rating", response_model=RatingResponse)
    async def player_rating(player_id: str, request: Request):
        service = league(request)
        return rating_to_response(_call(lambda: service.player_rating(player_id)))

    @app.get("/standings", response_model=list[StandingsRowResponse])
    async def standings(request: Request):
        return [StandingsRowResponse(**asdict(row)) for row in league(request).standings()]

    @app.get("/leaders", response_model=LeadersResponse)
    async def leaders(request: Request, limit: int | None = Query(default=None, ge=1, le=50)):
        return leaders_to_response(league(request).get_top_performers(limit))

    @app.get("/trades", response_model=list[Trade])
    async def trades(request: Request):
        return league(request).trade_history()

    @app.post("/trades", response_model=Trade, status_code=201)
    async def record_trade(payload: TradeRequest, request: Request):
        service = league(request)
        return _call(
            lambda: service.record_trade(payload.date, payload.description, payload.players_traded)
        )

    @app.post("/moves")
    async def move_player(payload: MoveRequest, request: Request) -> dict[str, Any]:
        service = league(request)
        if payload.record_trade:
            trade = _call(
                lambda: service.announce_trade(
                    payload.player_id,
                    payload.from_team_id,
                    payload.to_team_id,
                    description=payload.description,
                )
            )
            player = _call(lambda: service.ledger.get_player(payload.player_id))
            return {"player": player.model_dump(mode="json"), "trade": trade.model_dump(mode="json")}
        player = _call(
            lambda: service.move_player(payload.player_id, payload.from_team_id, payload.to_team_id)
        )
        return {"player": player.model_dump(mode="json"), "trade": None}

    @app.get("/games/{game_id}")
    async def get_game(game_id: str, request: Request) -> dict[str, Any]:
        service = league(request)
        game: Game = _call(lambda: service.get_game(game_id))
        return {
            "game": game.model_dump(mode="json"),
            "aggregate": aggregate_to_response(service.aggregate_game(list(game.sets))).model_dump(),
        }

    @app.post("/games/{game_id}/sets", response_model=RecordSetsResponse, status_code=201)
    async def record_sets(game_id: str, payload: RecordSetsRequest, request: Request):
        service = league(request)
        recorded = _call(
            lambda: service.record_sets(
                game_id,
                [item.model_dump(exclude_none=True) for item in payload.sets],
                payload.subbed_player_ids,
            )
        )
        return RecordSetsResponse(
            game=recorded.game,
            aggregate=aggregate_to_response(recorded.aggregate),
            credited_player_ids=list(recorded.credited_player_ids),
        )

    @app.post("/games/{game_id}/vod", response_model=SetScore)
    async def set_vod(game_id: str, payload: VodLinkRequest, request: Request):
        service = league(request)
        return _call(lambda: service.set_vod_link(game_id, payload.set_no, payload.url))

    return app
