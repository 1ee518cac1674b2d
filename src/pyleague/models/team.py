"""Team model."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Team(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    captain: str = ""
    color: str = ""
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0
    player_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("player_ids")
    @classmethod
    def _unique_members(cls, value: List[str]) -> List[str]:
        # Legacy rows can carry repeated ids; membership is a set.
        return list(dict.fromkeys(value))

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Team":
        return cls.model_validate(record)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
