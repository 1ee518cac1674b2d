from __future__ import annotations

import datetime as dt
from typing import List, Literal

from pydantic import BaseModel, Field

from pyleague.models import Game, TradeEntry


class MoveRequest(BaseModel):
    player_id: str
    from_team_id: str | None = None
    to_team_id: str | None = None
    record_trade: bool = False
    description: str | None = None


class TradeRequest(BaseModel):
    date: dt.date | None = None
    description: str = ""
    players_traded: List[TradeEntry] = Field(default_factory=list)


class SetPayload(BaseModel):
    set_no: int | None = None
    points_for: int | str
    points_against: int | str
    vod_link: str | None = None


class RecordSetsRequest(BaseModel):
    sets: List[SetPayload]
    subbed_player_ids: List[str] = Field(default_factory=list)


class VodLinkRequest(BaseModel):
    set_no: int
    url: str


class AggregateResponse(BaseModel):
    points_for: int
    points_against: int
    result: Literal["W", "L", "T"]
    set_results: List[Literal["W", "L", "T"]]
    sets_won: int
    sets_lost: int
    sets_tied: int


class RecordSetsResponse(BaseModel):
    game: Game
    aggregate: AggregateResponse
    credited_player_ids: List[str]


class StandingsRowResponse(BaseModel):
    rank: int
    team_id: str
    name: str
    color: str
    captain: str
    wins: int
    losses: int
    ties: int
    points_for: int
    points_against: int
    point_differential: int
    win_percentage: float
    streak: int


class RatingResponse(BaseModel):
    player_id: str
    name: str
    team_id: str | None
    games_played: int
    plus_minus: int
    per_game: float | None
    weighted: float


class LeadersResponse(BaseModel):
    league_average: float
    top_plus_minus: List[RatingResponse]
    top_average: List[RatingResponse]
    top_weighted: List[RatingResponse]
