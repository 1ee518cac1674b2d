"""Fold per-set scorelines into game results and team records.

Two conventions coexist and are kept apart:

* match level (``mode="points"``): a game is won when the summed points of
  all its sets exceed the opponent's;
* set count (``mode="sets"``): a game is won when more of its sets were won
  than lost. League standings use this one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, Mapping, Sequence, Tuple, Union

from pydantic import ValidationError

from pyleague.errors import MalformedInput
from pyleague.models import Game, SetScore


Result = Literal["W", "L", "T"]
AggregationMode = Literal["points", "sets"]

SetInput = Union[SetScore, Mapping[str, object]]


@dataclass(frozen=True)
class GameAggregate:
    points_for: int
    points_against: int
    result: Result
    set_results: Tuple[Result, ...]
    sets_won: int
    sets_lost: int
    sets_tied: int

    @property
    def set_count_result(self) -> Result:
        return compare_scores(self.sets_won, self.sets_lost)


@dataclass(frozen=True)
class TeamRecord:
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0
    games: int = 0

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against


def compare_scores(ours: int, theirs: int) -> Result:
    if ours > theirs:
        return "W"
    if ours < theirs:
        return "L"
    return "T"


def coerce_sets(sets: Iterable[SetInput]) -> List[SetScore]:
    """Validate raw set input; raises ``MalformedInput`` on bad scores or numbering."""

    parsed: List[SetScore] = []
    for index, raw in enumerate(sets):
        if isinstance(raw, SetScore):
            parsed.append(raw)
            continue
        try:
            parsed.append(SetScore.model_validate(raw))
        except ValidationError as exc:
            error = exc.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise MalformedInput(f"set #{index + 1}: {field}: {error['msg']}") from exc

    seen: set[int] = set()
    for score in parsed:
        if score.set_no is None:
            continue
        if score.set_no in seen:
            raise MalformedInput(f"set number {score.set_no} appears more than once")
        seen.add(score.set_no)
    return parsed


def order_sets(sets: Iterable[SetScore]) -> List[SetScore]:
    """Sort by ``set_no`` ascending; unnumbered sets go last in input order."""

    return sorted(sets, key=lambda score: (score.set_no is None, score.set_no or 0))


def set_result(score: SetScore) -> Result:
    return compare_scores(score.points_for, score.points_against)


def aggregate_game(sets: Sequence[SetInput]) -> GameAggregate:
    ordered = order_sets(coerce_sets(sets))
    points_for = sum(score.points_for for score in ordered)
    points_against = sum(score.points_against for score in ordered)
    results = tuple(set_result(score) for score in ordered)
    return GameAggregate(
        points_for=points_for,
        points_against=points_against,
        result=compare_scores(points_for, points_against),
        set_results=results,
        sets_won=results.count("W"),
        sets_lost=results.count("L"),
        sets_tied=results.count("T"),
    )


def set_count_result(sets: Sequence[SetInput]) -> Result:
    return aggregate_game(sets).set_count_result


def fold_team_games(games: Iterable[Game], mode: AggregationMode = "points") -> TeamRecord:
    """Recompute a team's record from its games; games without sets are skipped."""

    if mode not in ("points", "sets"):
        raise ValueError(f"Unknown aggregation mode {mode!r}")
    wins = losses = ties = points_for = points_against = played = 0
    for game in games:
        if not game.sets:
            continue
        aggregate = aggregate_game(game.sets)
        outcome = aggregate.result if mode == "points" else aggregate.set_count_result
        if outcome == "W":
            wins += 1
        elif outcome == "L":
            losses += 1
        else:
            ties += 1
        points_for += aggregate.points_for
        points_against += aggregate.points_against
        played += 1
    return TeamRecord(
        wins=wins,
        losses=losses,
        ties=ties,
        points_for=points_for,
        points_against=points_against,
        games=played,
    )


def win_streak(games: Iterable[Game]) -> int:
    """Consecutive set wins counted back from the most recent set."""

    timeline: List[SetScore] = []
    for game in sorted(games, key=lambda item: item.sort_key):
        timeline.extend(order_sets(game.sets))
    streak = 0
    for score in reversed(timeline):
        if set_result(score) != "W":
            break
        streak += 1
    return streak
