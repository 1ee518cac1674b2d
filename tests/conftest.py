from __future__ import annotations

import pytest

from pyleague.persistence import MemoryStore


def league_seed() -> dict[str, list[dict]]:
    return {
        "teams": [
            {"id": "t1", "name": "Spikers", "captain": "Ana", "color": "red", "player_ids": ["p1", "p2"]},
            {"id": "t2", "name": "Blockers", "captain": "Ben", "color": "blue", "player_ids": ["p3"]},
            {"id": "t3", "name": "Diggers", "captain": "Cy", "color": "green", "player_ids": []},
        ],
        "players": [
            {"id": "p1", "name": "Ana", "primary_position": "Setter", "team_id": "t1", "is_captain": True},
            {"id": "p2", "name": "Dee", "primary_position": "Libero", "team_id": "t1"},
            {"id": "p3", "name": "Ben", "primary_position": "Hitter", "team_id": "t2", "is_captain": True},
            {"id": "p4", "name": "Eli", "primary_position": "Blocker"},
        ],
        "games": [
            {"id": "g1", "team_id": "t1", "date": "2024-05-01", "time": "19:00:00", "opponent": "Blockers"},
            {"id": "g2", "team_id": "t2", "date": "2024-05-01", "time": "19:00:00", "opponent": "Spikers"},
        ],
    }


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore(league_seed())
