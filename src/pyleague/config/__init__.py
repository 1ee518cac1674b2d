"""Configuration helpers for league policy."""

from .league import (
    DEFAULT_PRIOR_GAMES,
    DEFAULT_SKILL_KEYS,
    OVERALL_RATING_KEY,
    LeagueRules,
    get_rules,
)

__all__ = [
    "DEFAULT_PRIOR_GAMES",
    "DEFAULT_SKILL_KEYS",
    "OVERALL_RATING_KEY",
    "LeagueRules",
    "get_rules",
]
