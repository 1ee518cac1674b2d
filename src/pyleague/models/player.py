"""Player model shared by the roster ledger and the rating calculator."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


SKILL_MIN = 1
SKILL_MAX = 5


class Player(BaseModel):
    """League player as stored in the ``players`` collection."""

    id: str = Field(..., min_length=1)
    name: str
    primary_position: str = ""
    secondary_position: Optional[str] = None
    team_id: Optional[str] = None
    plus_minus: int = 0
    games_played: int = Field(default=0, ge=0)
    stats: Dict[str, int] = Field(default_factory=dict)
    is_captain: bool = False
    show_stats: bool = True

    model_config = ConfigDict(frozen=True)

    @field_validator("stats")
    @classmethod
    def _check_skill_range(cls, value: Dict[str, int]) -> Dict[str, int]:
        for skill, rating in value.items():
            if not SKILL_MIN <= rating <= SKILL_MAX:
                raise ValueError(f"skill {skill!r} rating {rating} outside {SKILL_MIN}-{SKILL_MAX}")
        return value

    @field_validator("team_id")
    @classmethod
    def _blank_team_is_free_agent(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Player":
        return cls.model_validate(record)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
