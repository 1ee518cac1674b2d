"""Recording set results against the store.

A batch of sets is one logical update made of ordered steps: insert the
sets, credit every rostered player who was not subbed out, then rewrite the
team's persisted totals from a full refold of its games.
"""

from __future__ import annotations

import logging
import re
import urllib.parse
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from pyleague.errors import MalformedInput, NotFound
from pyleague.models import Game, Player, SetScore, Team
from pyleague.persistence import Store
from pyleague.steps import StepRunner

from .aggregate import GameAggregate, SetInput, TeamRecord, aggregate_game, coerce_sets, fold_team_games


logger = logging.getLogger(__name__)

_YOUTUBE_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtube\.com|youtu\.be)/", re.IGNORECASE)


@dataclass(frozen=True)
class RecordedSets:
    game: Game
    aggregate: GameAggregate
    credited_player_ids: Tuple[str, ...]
    team_record: TeamRecord


def _set_order(record: dict) -> tuple[bool, int]:
    set_no = record.get("set_no")
    return (set_no is None, set_no or 0)


def _attach_sets(record: dict, rows: List[dict]) -> Game:
    """Sets from the ``sets`` collection plus any stored inline on the game.

    An inline set whose number also has a collection row is superseded by it.
    """

    numbered = {row.get("set_no") for row in rows if row.get("set_no") is not None}
    inline = [item for item in record.get("sets") or [] if item.get("set_no") not in numbered]
    sets = [*rows, *inline]
    return Game.from_record(record, sets=sorted(sets, key=_set_order))


def load_game(store: Store, game_id: str) -> Game:
    record = store.get_by_id("games", game_id)
    if record is None:
        raise NotFound("games", game_id)
    return _attach_sets(record, store.list("sets", game_id=game_id))


def _games_with_sets(store: Store, **filters: str) -> List[Game]:
    sets_by_game: dict[str, list[dict]] = {}
    for record in store.list("sets"):
        sets_by_game.setdefault(str(record.get("game_id")), []).append(record)
    return [
        _attach_sets(record, sets_by_game.get(record["id"], []))
        for record in store.list("games", **filters)
    ]


def team_games(store: Store, team_id: str) -> List[Game]:
    return _games_with_sets(store, team_id=team_id)


def all_games(store: Store) -> List[Game]:
    return _games_with_sets(store)


def next_set_number(store: Store, game_id: str) -> int:
    numbers = [score.set_no for score in load_game(store, game_id).sets if score.set_no]
    return max(numbers, default=0) + 1


def refresh_team_totals(store: Store, team_id: str) -> TeamRecord:
    """Overwrite a team's stored totals with a match-level fold of its games."""

    record = fold_team_games(team_games(store, team_id), mode="points")
    store.update(
        "teams",
        team_id,
        {
            "wins": record.wins,
            "losses": record.losses,
            "ties": record.ties,
            "points_for": record.points_for,
            "points_against": record.points_against,
        },
    )
    return record


def record_sets(
    store: Store,
    game_id: str,
    sets: Sequence[SetInput],
    subbed_player_ids: Iterable[str] = (),
) -> RecordedSets:
    parsed = coerce_sets(sets)
    if not parsed:
        raise MalformedInput("no sets to record")

    game_record = store.get_by_id("games", game_id)
    if game_record is None:
        raise NotFound("games", game_id)
    team_id = game_record["team_id"]
    team_record = store.get_by_id("teams", team_id)
    if team_record is None:
        raise NotFound("teams", team_id)
    team = Team.from_record(team_record)

    existing = {score.set_no for score in load_game(store, game_id).sets}
    next_no = next_set_number(store, game_id)
    numbered: List[SetScore] = []
    for score in parsed:
        if score.set_no is None:
            while next_no in existing or any(s.set_no == next_no for s in parsed):
                next_no += 1
            score = score.model_copy(update={"set_no": next_no})
            next_no += 1
        elif score.set_no in existing:
            raise MalformedInput(f"set {score.set_no} is already recorded for game {game_id}")
        numbered.append(score.model_copy(update={"game_id": game_id}))

    subbed = set(subbed_player_ids)
    unknown = subbed.difference(team.player_ids)
    if unknown:
        raise MalformedInput(f"subbed player(s) not on team {team.id}: {', '.join(sorted(unknown))}")

    credited: List[Player] = []
    for player_id in team.player_ids:
        if player_id in subbed:
            continue
        player_record = store.get_by_id("players", player_id)
        if player_record is None:
            raise NotFound("players", player_id)
        credited.append(Player.from_record(player_record))

    differential = sum(score.differential for score in numbered)
    runner = StepRunner(f"record sets for game {game_id}")
    for score in numbered:
        runner.run(f"insert set {score.set_no}", lambda score=score: store.insert("sets", score.to_record()))
    for player in credited:
        fields = {
            "plus_minus": player.plus_minus + differential,
            "games_played": player.games_played + len(numbered),
        }
        runner.run(
            f"update player {player.id}",
            lambda player=player, fields=fields: store.update("players", player.id, fields),
        )
    totals = runner.run(f"refresh team {team.id} totals", lambda: refresh_team_totals(store, team.id))

    game = load_game(store, game_id)
    logger.info(
        "Recorded %d set(s) for game %s; credited %d player(s) with %+d",
        len(numbered),
        game_id,
        len(credited),
        differential,
    )
    return RecordedSets(
        game=game,
        aggregate=aggregate_game(game.sets),
        credited_player_ids=tuple(player.id for player in credited),
        team_record=totals,
    )


def normalize_youtube_url(url: str) -> str:
    """Canonical ``watch?v=`` form for youtu.be and youtube.com links."""

    trimmed = url.strip()
    if "://" not in trimmed:
        trimmed = f"https://{trimmed}"
    parsed = urllib.parse.urlparse(trimmed)
    query = urllib.parse.parse_qs(parsed.query)
    start = query.get("t", [None])[0]
    suffix = f"&t={start}" if start else ""
    host = parsed.netloc.lower()
    if "youtu.be" in host:
        video_id = parsed.path.lstrip("/")
        if video_id:
            return f"https://www.youtube.com/watch?v={video_id}{suffix}"
    elif "youtube.com" in host:
        video_id = query.get("v", [None])[0]
        if video_id:
            return f"https://www.youtube.com/watch?v={video_id}{suffix}"
    return trimmed


def set_vod_link(store: Store, game_id: str, set_no: int, url: str) -> SetScore:
    if set_no < 1:
        raise MalformedInput("set number must be 1 or greater")
    if not url.strip() or not _YOUTUBE_PATTERN.match(url.strip()):
        raise MalformedInput("VOD link must be a YouTube URL")
    if store.get_by_id("games", game_id) is None:
        raise NotFound("games", game_id)

    matches = store.list("sets", game_id=game_id, set_no=set_no)
    if not matches:
        raise NotFound("sets", f"{game_id}#{set_no}")
    updated = store.update("sets", matches[0]["id"], {"vod_link": normalize_youtube_url(url)})
    logger.info("Linked VOD for game %s set %d", game_id, set_no)
    return SetScore.from_record(updated)
