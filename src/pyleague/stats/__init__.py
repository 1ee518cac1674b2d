"""Derived statistics: set aggregation, standings and player ratings."""

from .aggregate import (
    GameAggregate,
    TeamRecord,
    aggregate_game,
    coerce_sets,
    compare_scores,
    fold_team_games,
    order_sets,
    set_count_result,
    set_result,
    win_streak,
)
from .entry import (
    RecordedSets,
    all_games,
    load_game,
    next_set_number,
    normalize_youtube_url,
    record_sets,
    refresh_team_totals,
    set_vod_link,
    team_games,
)
from .ratings import (
    PlayerRating,
    TopPerformers,
    league_average_per_game,
    overall_rating,
    per_game_average,
    rate_player,
    rate_players,
    raw_plus_minus,
    sort_by_skill,
    top_performers,
    weighted_average,
)
from .standings import StandingsRow, rank, win_percentage

__all__ = [
    "GameAggregate",
    "PlayerRating",
    "RecordedSets",
    "StandingsRow",
    "TeamRecord",
    "TopPerformers",
    "aggregate_game",
    "all_games",
    "coerce_sets",
    "compare_scores",
    "fold_team_games",
    "league_average_per_game",
    "load_game",
    "next_set_number",
    "normalize_youtube_url",
    "order_sets",
    "overall_rating",
    "per_game_average",
    "rank",
    "rate_player",
    "rate_players",
    "raw_plus_minus",
    "record_sets",
    "refresh_team_totals",
    "set_count_result",
    "set_result",
    "set_vod_link",
    "sort_by_skill",
    "team_games",
    "top_performers",
    "weighted_average",
    "win_percentage",
    "win_streak",
]
