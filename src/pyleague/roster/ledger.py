"""Team/player assignment ledger.

Teams store ``player_ids`` and players store ``team_id``; the ledger is the
only writer of either field and keeps both directions in agreement.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pyleague.errors import InvariantViolation, MalformedInput, NotFound
from pyleague.models import Player, Team
from pyleague.persistence import Store
from pyleague.steps import StepRunner


logger = logging.getLogger(__name__)


class RosterLedger:
    def __init__(self, store: Store):
        self.store = store

    def get_player(self, player_id: str) -> Player:
        record = self.store.get_by_id("players", player_id)
        if record is None:
            raise NotFound("players", player_id)
        return Player.from_record(record)

    def get_team(self, team_id: str) -> Team:
        record = self.store.get_by_id("teams", team_id)
        if record is None:
            raise NotFound("teams", team_id)
        return Team.from_record(record)

    def teams(self) -> List[Team]:
        return [Team.from_record(record) for record in self.store.list("teams")]

    def players(self) -> List[Player]:
        return [Player.from_record(record) for record in self.store.list("players")]

    def players_by_team(self, team_id: str) -> List[Player]:
        self.get_team(team_id)
        return [Player.from_record(record) for record in self.store.list("players", team_id=team_id)]

    def free_agents(self) -> List[Player]:
        return [player for player in self.players() if player.team_id is None]

    def move_player(
        self,
        player_id: str,
        from_team_id: Optional[str],
        to_team_id: Optional[str],
    ) -> Player:
        """Move a player between rosters; ``None`` on either side is free agency.

        The player's ``team_id`` is written first, then the source roster,
        then the destination roster. A store failure raises
        ``PartialFailure`` naming the step; nothing is rolled back.
        """

        from_team_id = from_team_id or None
        to_team_id = to_team_id or None
        if from_team_id == to_team_id:
            raise MalformedInput("source and destination of a move must differ")

        player = self.get_player(player_id)
        source = self.get_team(from_team_id) if from_team_id else None
        destination = self.get_team(to_team_id) if to_team_id else None

        if player.team_id != from_team_id:
            self._reject(
                f"player {player_id} is assigned to {player.team_id or 'free agency'}, "
                f"not {from_team_id or 'free agency'}"
            )
        stray = [
            team.id
            for team in self.teams()
            if player_id in team.player_ids and team.id not in {from_team_id, to_team_id}
        ]
        if stray:
            self._reject(f"player {player_id} is also listed on team(s) {', '.join(stray)}")

        runner = StepRunner(f"move player {player_id}")
        updated = runner.run(
            "set player team",
            lambda: self.store.update("players", player_id, {"team_id": to_team_id}),
        )
        if source is not None and player_id in source.player_ids:
            remaining = [pid for pid in source.player_ids if pid != player_id]
            runner.run(
                f"remove from team {source.id}",
                lambda: self.store.update("teams", source.id, {"player_ids": remaining}),
            )
        if destination is not None and player_id not in destination.player_ids:
            members = [*destination.player_ids, player_id]
            runner.run(
                f"add to team {destination.id}",
                lambda: self.store.update("teams", destination.id, {"player_ids": members}),
            )

        logger.info(
            "Moved player %s from %s to %s",
            player_id,
            from_team_id or "free agency",
            to_team_id or "free agency",
        )
        return Player.from_record(updated)

    def verify(self) -> List[str]:
        """Describe every disagreement between rosters and player assignments."""

        problems: List[str] = []
        players = {player.id: player for player in self.players()}
        owners: dict[str, List[str]] = {}
        for team in self.teams():
            for player_id in team.player_ids:
                player = players.get(player_id)
                if player is None:
                    problems.append(f"team {team.id} lists unknown player {player_id}")
                    continue
                if player_id in owners:
                    problems.append(f"player {player_id} is listed on teams {owners[player_id][0]} and {team.id}")
                owners.setdefault(player_id, []).append(team.id)
                if player.team_id != team.id:
                    problems.append(f"team {team.id} lists player {player_id} whose team is {player.team_id}")
        for player in players.values():
            if player.team_id is not None and player.team_id not in owners.get(player.id, []):
                problems.append(f"player {player.id} points at team {player.team_id} which does not list them")
        return problems

    def _reject(self, message: str) -> None:
        logger.warning("Rejected roster move: %s", message)
        raise InvariantViolation(message)
