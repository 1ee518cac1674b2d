import csv
import json

import pytest

from pyleague.cli import main
from pyleague.league import LeagueService
from pyleague.persistence import RecordStore

from tests.conftest import league_seed


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    monkeypatch.delenv("PYLEAGUE_DB_PATH", raising=False)
    monkeypatch.delenv("PYLEAGUE_PRIOR_GAMES", raising=False)
    monkeypatch.delenv("PYLEAGUE_LEADERS_LIMIT", raising=False)
    path = tmp_path / "league.sqlite"
    store = RecordStore(path)
    for collection, records in league_seed().items():
        for record in records:
            store.insert(collection, record)
    league = LeagueService(store)
    league.record_sets("g1", [{"points_for": 25, "points_against": 20}, {"points_for": 25, "points_against": 21}])
    league.record_sets("g2", [{"points_for": 18, "points_against": 25}])
    league.announce_trade("p4", None, "t3")
    return path


def test_standings_command(db_path, tmp_path, capsys):
    output = tmp_path / "standings.csv"

    assert main(["--db", str(db_path), "standings", "--output", str(output)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert "Spikers" in lines[1]
    assert "Blockers" in lines[3]
    with output.open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [row["name"] for row in rows] == ["Spikers", "Diggers", "Blockers"]
    assert rows[0]["point_differential"] == "9"


def test_leaders_command(db_path, capsys):
    assert main(["--db", str(db_path), "leaders", "--limit", "2"]) == 0

    out = capsys.readouterr().out
    assert "League average per set" in out
    assert "Ana" in out


def test_trades_command_filters_by_team(db_path, capsys):
    assert main(["--db", str(db_path), "trades", "--team", "Diggers"]) == 0
    assert "Eli traded from Free Agency to Diggers" in capsys.readouterr().out

    assert main(["--db", str(db_path), "trades", "--team", "Blockers"]) == 0
    assert "No trades recorded" in capsys.readouterr().out


def test_verify_command(db_path, capsys):
    assert main(["--db", str(db_path), "verify"]) == 0
    assert "Rosters consistent" in capsys.readouterr().out

    RecordStore(db_path).update("teams", "t2", {"player_ids": ["p3", "p1"]})

    assert main(["--db", str(db_path), "verify"]) == 1
    assert "roster problem(s) found" in capsys.readouterr().out


def test_profile_round_trip(db_path, tmp_path, capsys):
    saved = tmp_path / "profile.json"

    assert main(["--db", str(db_path), "--prior-games", "9", "--save-profile", str(saved), "leaders"]) == 0
    assert json.loads(saved.read_text(encoding="utf-8"))["rules"]["prior_games"] == 9.0

    assert main(["--db", str(db_path), "--load-profile", str(saved), "standings"]) == 0
