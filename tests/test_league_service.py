import datetime as dt

import pytest

from pyleague.config import LeagueRules
from pyleague.errors import InvariantViolation, MalformedInput, NotFound
from pyleague.league import LeagueService
from pyleague.persistence import MemoryStore

from tests.conftest import league_seed


@pytest.fixture
def league(store) -> LeagueService:
    return LeagueService(store, LeagueRules(prior_games=5, leaders_limit=3))


def test_announce_trade_moves_and_logs(league):
    trade = league.announce_trade("p1", "t1", "t2", date=dt.date(2024, 5, 3))

    assert trade.description == "Ana traded from Spikers to Blockers"
    assert trade.players_traded[0].from_team == "Spikers"
    assert league.ledger.get_player("p1").team_id == "t2"
    assert league.trade_history() == [trade]


def test_announce_free_agent_signing(league):
    trade = league.announce_trade("p4", None, "t3", description="Eli joins the Diggers")

    assert trade.description == "Eli joins the Diggers"
    assert trade.players_traded[0].from_team == "Free Agency"
    assert [trade.id for trade in league.team_trade_history("t3")] == [trade.id]
    assert league.team_trade_history("t1") == []


def test_rejected_move_records_no_trade(league, store):
    with pytest.raises(InvariantViolation):
        league.announce_trade("p1", "t2", "t3")

    assert store.list("trades") == []


def test_team_trade_history_unknown_team(league):
    with pytest.raises(NotFound):
        league.team_trade_history("t9")


def test_roster_queries(league):
    assert [p.id for p in league.get_players_by_team("t1")] == ["p1", "p2"]
    assert [p.id for p in league.get_free_agents()] == ["p4"]
    assert league.verify_rosters() == []


def test_aggregate_game_by_id_or_sets(league):
    league.record_sets("g1", [{"set_no": 1, "points_for": 25, "points_against": 20}])

    assert league.aggregate_game("g1").points_for == 25
    assert league.aggregate_game([{"points_for": 2, "points_against": 2}]).result == "T"


def test_standings_follow_recorded_sets(league):
    league.record_sets("g1", [{"points_for": 25, "points_against": 20}, {"points_for": 25, "points_against": 18}])
    league.record_sets("g2", [{"points_for": 15, "points_against": 25}])

    rows = league.standings()

    assert [row.team_id for row in rows] == ["t1", "t3", "t2"]
    assert rows[0].streak == 2
    assert league.rank() == rows


def test_weighted_average_uses_league_rules(league):
    league.record_sets("g1", [{"points_for": 25, "points_against": 15}])
    league.record_sets("g2", [{"points_for": 25, "points_against": 25}])

    # p1 and p2 are +10 over one set; p3 is even. League average is 20 / 3.
    expected = (10 + 5 * (20 / 3)) / 6
    assert league.weighted_average("p1") == pytest.approx(expected)
    assert league.weighted_average("p4") == pytest.approx(20 / 3)
    assert league.player_rating("p1").weighted == pytest.approx(expected)


def test_top_performers_respects_limit(league):
    league.record_sets("g1", [{"points_for": 25, "points_against": 15}])

    leaders = league.get_top_performers()

    assert len(leaders.top_plus_minus) == 3
    assert len(league.get_top_performers(limit=1).top_weighted) == 1


def test_set_vod_link_through_service(league):
    league.record_sets("g1", [{"points_for": 25, "points_against": 15}])

    assert league.set_vod_link("g1", 1, "https://youtu.be/xyz").vod_link == "https://www.youtube.com/watch?v=xyz"


def test_overall_rating_uses_rules(store):
    store.update("players", "p1", {"stats": {"Serving": 5, "Hitting": 5}})
    league = LeagueService(store, LeagueRules(overall_rating_scale=3, overall_rating_cap=25))

    assert league.overall_rating("p1") == 25


def test_players_sorted_by_skill(store):
    store.update("players", "p3", {"stats": {"Serving": 5, "Hitting": 4}})
    store.update("players", "p2", {"stats": {"Serving": 2}})
    league = LeagueService(store)

    assert [p.id for p in league.get_players("Serving")[:2]] == ["p3", "p2"]
    assert [p.id for p in league.get_players()] == ["p1", "p2", "p3", "p4"]


def test_player_ratings_cover_everyone(league):
    league.record_sets("g1", [{"points_for": 25, "points_against": 15}])

    ratings = {rating.player_id: rating for rating in league.player_ratings()}

    assert set(ratings) == {"p1", "p2", "p3", "p4"}
    assert ratings["p1"].per_game == 10.0
    assert ratings["p4"].per_game is None
    assert league.league_average() == 10.0


def test_overall_sort_follows_rules_cap(store):
    store.update("players", "p1", {"stats": {"Serving": 5}})
    store.update("players", "p2", {"stats": {"Serving": 5, "Hitting": 5}})
    league = LeagueService(store, LeagueRules(overall_rating_cap=10))

    assert [p.id for p in league.get_players("Overall Rating")][:2] == ["p1", "p2"]
    assert league.overall_rating("p1") == league.overall_rating("p2") == 10


def test_configured_skill_keys_limit_ratings(store):
    store.update("players", "p1", {"stats": {"Serving": 5, "Hitting": 4}})
    league = LeagueService(store, LeagueRules(skill_keys=("Serving",)))

    assert league.overall_rating("p1") == 10
    assert [p.id for p in league.get_players("Serving")][0] == "p1"
    with pytest.raises(MalformedInput):
        league.get_players("Hitting")


def test_standings_count_games_with_inline_sets():
    seed = league_seed()
    seed["games"][1]["sets"] = [{"set_no": 1, "points_for": 25, "points_against": 10}]
    league = LeagueService(MemoryStore(seed))

    rows = league.standings()

    assert rows[0].team_id == "t2"
    assert rows[0].wins == 1
