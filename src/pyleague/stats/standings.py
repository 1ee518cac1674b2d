"""League table ordering."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from pyleague.models import Game, Team

from .aggregate import TeamRecord, fold_team_games, win_streak


@dataclass(frozen=True)
class StandingsRow:
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


def win_percentage(wins: int, losses: int, ties: int = 0) -> float:
    played = wins + losses + ties
    if played <= 0:
        return 0.0
    return wins / played


def standings_key(record: TeamRecord) -> tuple[int, int, int]:
    return (-record.wins, -record.point_differential, -record.points_for)


def rank(teams: Sequence[Team], games: Iterable[Game]) -> List[StandingsRow]:
    """Order teams by set-count wins, then point differential, then points for.

    Wins are recomputed from the games; the persisted ``wins`` field on a
    team may lag behind its sets and is ignored here. Teams tied on every key
    keep their input order.
    """

    games_by_team: Dict[str, List[Game]] = defaultdict(list)
    for game in games:
        games_by_team[game.team_id].append(game)

    records = [(team, fold_team_games(games_by_team.get(team.id, []), mode="sets")) for team in teams]
    ordered = sorted(records, key=lambda item: standings_key(item[1]))

    return [
        StandingsRow(
            rank=position,
            team_id=team.id,
            name=team.name,
            color=team.color,
            captain=team.captain,
            wins=record.wins,
            losses=record.losses,
            ties=record.ties,
            points_for=record.points_for,
            points_against=record.points_against,
            point_differential=record.point_differential,
            win_percentage=win_percentage(record.wins, record.losses, record.ties),
            streak=win_streak(games_by_team.get(team.id, [])),
        )
        for position, (team, record) in enumerate(ordered, start=1)
    ]
