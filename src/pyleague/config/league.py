"""League policy constants with environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Tuple

from pyleague.models.trade import FREE_AGENCY


logger = logging.getLogger(__name__)

_PRIOR_GAMES_ENV = "PYLEAGUE_PRIOR_GAMES"
_LEADERS_LIMIT_ENV = "PYLEAGUE_LEADERS_LIMIT"

DEFAULT_PRIOR_GAMES = 5.0
DEFAULT_LEADERS_LIMIT = 5

DEFAULT_SKILL_KEYS: Tuple[str, ...] = (
    "Serving",
    "Receiving",
    "Defensive Positioning",
    "Setting",
    "Blocking",
    "Hitting",
    "Hustle",
    "Stamina",
    "Vertical Jump",
    "Communication",
)

OVERALL_RATING_KEY = "Overall Rating"


@dataclass(frozen=True)
class LeagueRules:
    prior_games: float = DEFAULT_PRIOR_GAMES
    leaders_limit: int = DEFAULT_LEADERS_LIMIT
    free_agency_label: str = FREE_AGENCY
    skill_keys: Tuple[str, ...] = DEFAULT_SKILL_KEYS
    overall_rating_scale: int = 2
    overall_rating_cap: int = 100

    def with_overrides(self, overrides: Mapping[str, object]) -> "LeagueRules":
        """Return a copy with known fields replaced; unknown keys raise KeyError."""

        unknown = set(overrides) - set(self.__dataclass_fields__)
        if unknown:
            raise KeyError(f"Unknown league rule(s): {', '.join(sorted(unknown))}")
        values = dict(overrides)
        if "skill_keys" in values:
            values["skill_keys"] = tuple(values["skill_keys"])  # type: ignore[arg-type]
        return replace(self, **values)  # type: ignore[arg-type]


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def get_rules() -> LeagueRules:
    """Build the season rules, honouring environment overrides."""

    return LeagueRules(
        prior_games=_env_float(_PRIOR_GAMES_ENV, DEFAULT_PRIOR_GAMES, clamp_min=0.0),
        leaders_limit=_env_int(_LEADERS_LIMIT_ENV, DEFAULT_LEADERS_LIMIT, min_value=1),
    )
