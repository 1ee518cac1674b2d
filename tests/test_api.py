import pytest
from httpx import ASGITransport, AsyncClient

from pyleague.api import create_app
from pyleague.config import LeagueRules
from pyleague.persistence import MemoryStore

from tests.conftest import league_seed


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    app = create_app(MemoryStore(league_seed()), LeagueRules())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_teams_and_rosters(client: AsyncClient):
    resp = await client.get("/teams")
    assert [team["name"] for team in resp.json()] == ["Spikers", "Blockers", "Diggers"]

    resp = await client.get("/teams/t1/players")
    assert [player["id"] for player in resp.json()] == ["p1", "p2"]

    resp = await client.get("/players/free-agents")
    assert [player["id"] for player in resp.json()] == ["p4"]


@pytest.mark.anyio
async def test_unknown_team_is_404(client: AsyncClient):
    resp = await client.get("/teams/t9/players")

    assert resp.status_code == 404
    assert resp.json()["detail"] == {
        "code": "not_found",
        "message": "teams record 't9' not found",
        "collection": "teams",
        "id": "t9",
    }


@pytest.mark.anyio
async def test_move_with_trade(client: AsyncClient):
    resp = await client.post(
        "/moves",
        json={"player_id": "p1", "from_team_id": "t1", "to_team_id": "t2", "record_trade": True},
    )

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["player"]["team_id"] == "t2"
    assert payload["trade"]["description"] == "Ana traded from Spikers to Blockers"

    resp = await client.get("/teams/t2/trades")
    assert [trade["id"] for trade in resp.json()] == [payload["trade"]["id"]]


@pytest.mark.anyio
async def test_move_conflict_is_409(client: AsyncClient):
    resp = await client.post("/moves", json={"player_id": "p1", "from_team_id": "t2", "to_team_id": "t3"})

    assert resp.status_code == 409
    assert resp.json()["detail"]["code"] == "invariant_violation"


@pytest.mark.anyio
async def test_record_trade(client: AsyncClient):
    resp = await client.post(
        "/trades",
        json={
            "date": "2024-05-04",
            "description": "paper trade",
            "players_traded": [{"player_id": "p4", "to_team": "Diggers"}],
        },
    )
    assert resp.status_code == 201
    assert resp.json()["date"] == "2024-05-04"

    resp = await client.get("/trades")
    assert [trade["description"] for trade in resp.json()] == ["paper trade"]


@pytest.mark.anyio
async def test_empty_trade_is_400(client: AsyncClient):
    resp = await client.post("/trades", json={"description": "nothing", "players_traded": []})

    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "malformed_input"


@pytest.mark.anyio
async def test_record_sets_and_standings(client: AsyncClient):
    resp = await client.post(
        "/games/g1/sets",
        json={
            "sets": [
                {"set_no": 1, "points_for": 25, "points_against": 20},
                {"set_no": 2, "points_for": 25, "points_against": 23},
            ],
            "subbed_player_ids": ["p2"],
        },
    )
    assert resp.status_code == 201
    payload = resp.json()
    assert payload["credited_player_ids"] == ["p1"]
    assert payload["aggregate"]["result"] == "W"
    assert payload["aggregate"]["set_results"] == ["W", "W"]

    resp = await client.get("/standings")
    rows = resp.json()
    assert rows[0]["team_id"] == "t1"
    assert rows[0]["point_differential"] == 7
    assert rows[0]["win_percentage"] == 1.0

    resp = await client.get("/games/g1")
    assert resp.json()["aggregate"]["points_for"] == 50

    resp = await client.get("/players/p1/rating")
    assert resp.json()["plus_minus"] == 7
    assert resp.json()["games_played"] == 2


@pytest.mark.anyio
async def test_non_numeric_score_is_400(client: AsyncClient):
    resp = await client.post(
        "/games/g1/sets",
        json={"sets": [{"set_no": 1, "points_for": "lots", "points_against": 20}]},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "malformed_input"


@pytest.mark.anyio
async def test_vod_link(client: AsyncClient):
    await client.post("/games/g1/sets", json={"sets": [{"points_for": 25, "points_against": 20}]})

    resp = await client.post("/games/g1/vod", json={"set_no": 1, "url": "https://youtu.be/abc?t=30"})

    assert resp.status_code == 200
    assert resp.json()["vod_link"] == "https://www.youtube.com/watch?v=abc&t=30"

    resp = await client.post("/games/g1/vod", json={"set_no": 1, "url": "https://example.com/abc"})
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_leaders(client: AsyncClient):
    await client.post("/games/g1/sets", json={"sets": [{"points_for": 25, "points_against": 20}]})

    resp = await client.get("/leaders", params={"limit": 1})

    payload = resp.json()
    assert resp.status_code == 200
    assert len(payload["top_plus_minus"]) == 1
    assert payload["top_plus_minus"][0]["plus_minus"] == 5
    assert payload["league_average"] == 5.0


@pytest.mark.anyio
async def test_unknown_player_rating_is_404(client: AsyncClient):
    resp = await client.get("/players/nobody/rating")

    assert resp.status_code == 404
