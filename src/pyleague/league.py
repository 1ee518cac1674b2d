"""Entry point the presentation layer talks to.

``LeagueService`` bundles a store handle with the season rules and funnels
every mutation through the roster ledger, the trade recorder or set entry.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Sequence, Union

from pyleague.config import LeagueRules, get_rules
from pyleague.models import Game, Player, SetScore, Team, Trade, TradeEntry
from pyleague.persistence import Store
from pyleague.roster import RosterLedger
from pyleague.stats import (
    GameAggregate,
    PlayerRating,
    RecordedSets,
    StandingsRow,
    TopPerformers,
    aggregate_game,
    all_games,
    league_average_per_game,
    load_game,
    overall_rating,
    rank,
    rate_player,
    rate_players,
    record_sets,
    set_vod_link,
    sort_by_skill,
    top_performers,
    weighted_average,
)
from pyleague.stats.aggregate import SetInput
from pyleague.trades import TradeRecorder
from pyleague.trades.recorder import EntryInput


class LeagueService:
    def __init__(self, store: Store, rules: Optional[LeagueRules] = None):
        self.store = store
        self.rules = rules or get_rules()
        self.ledger = RosterLedger(store)
        self.trades = TradeRecorder(store)

    # Roster

    def move_player(self, player_id: str, from_team_id: Optional[str], to_team_id: Optional[str]) -> Player:
        return self.ledger.move_player(player_id, from_team_id, to_team_id)

    def get_players_by_team(self, team_id: str) -> List[Player]:
        return self.ledger.players_by_team(team_id)

    def get_free_agents(self) -> List[Player]:
        return self.ledger.free_agents()

    def get_teams(self) -> List[Team]:
        return self.ledger.teams()

    def get_players(self, sort_key: Optional[str] = None) -> List[Player]:
        players = self.ledger.players()
        if not sort_key:
            return players
        return sort_by_skill(
            players,
            sort_key,
            scale=self.rules.overall_rating_scale,
            cap=self.rules.overall_rating_cap,
            skills=self.rules.skill_keys,
        )

    def verify_rosters(self) -> List[str]:
        return self.ledger.verify()

    # Trades

    def record_trade(
        self,
        date: Union[dt.date, str, None],
        description: str,
        entries: Iterable[EntryInput],
    ) -> Trade:
        return self.trades.record_trade(date, description, entries)

    def announce_trade(
        self,
        player_id: str,
        from_team_id: Optional[str],
        to_team_id: Optional[str],
        description: Optional[str] = None,
        date: Union[dt.date, str, None] = None,
    ) -> Trade:
        """Move a player and log the move as a one-entry trade."""

        player = self.move_player(player_id, from_team_id, to_team_id)
        from_name = self._team_label(from_team_id)
        to_name = self._team_label(to_team_id)
        entry = TradeEntry(player_id=player.id, from_team=from_name, to_team=to_name)
        return self.record_trade(
            date,
            description or f"{player.name} traded from {from_name} to {to_name}",
            [entry],
        )

    def trade_history(self) -> List[Trade]:
        return self.trades.history()

    def team_trade_history(self, team_id: str) -> List[Trade]:
        team = self.ledger.get_team(team_id)
        return self.trades.team_history(team.name)

    # Games and stats

    def get_game(self, game_id: str) -> Game:
        return load_game(self.store, game_id)

    def aggregate_game(self, sets: Union[str, Sequence[SetInput]]) -> GameAggregate:
        """Aggregate a stored game by id, or a list of raw sets."""

        if isinstance(sets, str):
            return aggregate_game(load_game(self.store, sets).sets)
        return aggregate_game(sets)

    def record_sets(
        self,
        game_id: str,
        sets: Sequence[SetInput],
        subbed_player_ids: Iterable[str] = (),
    ) -> RecordedSets:
        return record_sets(self.store, game_id, sets, subbed_player_ids)

    def set_vod_link(self, game_id: str, set_no: int, url: str) -> SetScore:
        return set_vod_link(self.store, game_id, set_no, url)

    def rank(self, teams: Optional[Sequence[Team]] = None) -> List[StandingsRow]:
        return rank(teams if teams is not None else self.get_teams(), all_games(self.store))

    standings = rank

    def league_average(self) -> float:
        return league_average_per_game(self.ledger.players())

    def weighted_average(self, player_id: str) -> float:
        player = self.ledger.get_player(player_id)
        return weighted_average(player, self.league_average(), self.rules.prior_games)

    def player_rating(self, player_id: str) -> PlayerRating:
        player = self.ledger.get_player(player_id)
        return rate_player(player, self.league_average(), self.rules.prior_games)

    def overall_rating(self, player_id: str) -> int:
        player = self.ledger.get_player(player_id)
        return overall_rating(
            player,
            self.rules.overall_rating_scale,
            self.rules.overall_rating_cap,
            self.rules.skill_keys,
        )

    def player_ratings(self) -> List[PlayerRating]:
        return rate_players(self.ledger.players(), self.rules.prior_games)

    def get_top_performers(self, limit: Optional[int] = None) -> TopPerformers:
        return top_performers(
            self.ledger.players(),
            limit=limit or self.rules.leaders_limit,
            prior=self.rules.prior_games,
        )

    def _team_label(self, team_id: Optional[str]) -> str:
        if not team_id:
            return self.rules.free_agency_label
        return self.ledger.get_team(team_id).name
