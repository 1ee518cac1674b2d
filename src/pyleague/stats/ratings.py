"""Player plus-minus metrics.

Three per-player figures are exposed side by side because different views
use different ones:

* raw plus-minus, the cumulative point differential;
* per-game average, undefined before a player has played;
* weighted average, a shrinkage estimate that blends ``prior`` phantom
  league-average games into the player's record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from pyleague.config import DEFAULT_PRIOR_GAMES, OVERALL_RATING_KEY
from pyleague.errors import MalformedInput
from pyleague.models import Player


@dataclass(frozen=True)
class PlayerRating:
    player_id: str
    name: str
    team_id: Optional[str]
    games_played: int
    plus_minus: int
    per_game: Optional[float]
    weighted: float


@dataclass(frozen=True)
class TopPerformers:
    top_plus_minus: List[PlayerRating]
    top_average: List[PlayerRating]
    top_weighted: List[PlayerRating]
    league_average: float


def raw_plus_minus(player: Player) -> int:
    return player.plus_minus


def per_game_average(player: Player) -> Optional[float]:
    if player.games_played <= 0:
        return None
    return player.plus_minus / player.games_played


def league_average_per_game(players: Iterable[Player]) -> float:
    """Plus-minus per game across everyone who has played; 0.0 when nobody has."""

    total_plus_minus = 0
    total_games = 0
    for player in players:
        if player.games_played > 0:
            total_plus_minus += player.plus_minus
            total_games += player.games_played
    if total_games == 0:
        return 0.0
    return total_plus_minus / total_games


def weighted_average(
    player: Player,
    league_average: float,
    prior: float = DEFAULT_PRIOR_GAMES,
) -> float:
    if prior < 0:
        raise ValueError("prior must be non-negative")
    # No games: exactly the league average, with no arithmetic on it.
    if player.games_played == 0:
        return float(league_average)
    denominator = player.games_played + prior
    return (player.plus_minus + prior * league_average) / denominator


def rate_player(player: Player, league_average: float, prior: float = DEFAULT_PRIOR_GAMES) -> PlayerRating:
    return PlayerRating(
        player_id=player.id,
        name=player.name,
        team_id=player.team_id,
        games_played=player.games_played,
        plus_minus=raw_plus_minus(player),
        per_game=per_game_average(player),
        weighted=weighted_average(player, league_average, prior),
    )


def rate_players(players: Sequence[Player], prior: float = DEFAULT_PRIOR_GAMES) -> List[PlayerRating]:
    league_average = league_average_per_game(players)
    return [rate_player(player, league_average, prior) for player in players]


def top_performers(
    players: Sequence[Player],
    limit: int = 5,
    prior: float = DEFAULT_PRIOR_GAMES,
    include_hidden: bool = False,
) -> TopPerformers:
    """Leader boards; players who hide their stats are left out unless asked.

    The league average always includes every player so hiding stats does not
    move anyone else's weighted figure.
    """

    league_average = league_average_per_game(players)
    ratings = [
        rate_player(player, league_average, prior)
        for player in players
        if include_hidden or player.show_stats
    ]
    return TopPerformers(
        top_plus_minus=sorted(ratings, key=lambda r: -r.plus_minus)[:limit],
        top_average=sorted(ratings, key=lambda r: -(r.per_game or 0.0))[:limit],
        top_weighted=sorted(ratings, key=lambda r: -r.weighted)[:limit],
        league_average=league_average,
    )


def overall_rating(
    player: Player,
    scale: int = 2,
    cap: int = 100,
    skills: Optional[Sequence[str]] = None,
) -> int:
    """Scaled, capped sum of skill ratings; ``skills`` limits which ones count."""

    if skills is None:
        total = sum(player.stats.values())
    else:
        total = sum(player.stats.get(skill, 0) for skill in skills)
    return min(total * scale, cap)


def sort_by_skill(
    players: Iterable[Player],
    key: str = OVERALL_RATING_KEY,
    *,
    scale: int = 2,
    cap: int = 100,
    skills: Optional[Sequence[str]] = None,
) -> List[Player]:
    """Highest first; players without a rating for ``key`` sort last.

    When ``skills`` is given, ``key`` must be one of them or the overall
    rating.
    """

    if key == OVERALL_RATING_KEY:
        return sorted(players, key=lambda player: -overall_rating(player, scale, cap, skills))
    if skills is not None and key not in skills:
        raise MalformedInput(f"unknown skill {key!r}")
    return sorted(players, key=lambda player: -player.stats.get(key, 0))
