"""Game and set score models."""

from __future__ import annotations

import datetime as dt
from typing import Any, List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class SetScore(BaseModel):
    """Score of a single set, seen from the owning team's side."""

    set_no: Optional[int] = Field(default=None, ge=1)
    points_for: int = Field(..., ge=0)
    points_against: int = Field(..., ge=0)
    vod_link: Optional[str] = None
    id: Optional[str] = None
    game_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def differential(self) -> int:
        return self.points_for - self.points_against

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "SetScore":
        return cls.model_validate(record)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class Game(BaseModel):
    id: str
    team_id: str
    date: dt.date
    time: Optional[str] = None
    opponent: str = ""
    sets: List[SetScore] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.date.isoformat(), self.time or "00:00:00")

    @classmethod
    def from_record(cls, record: dict[str, Any], sets: Optional[List[dict[str, Any]]] = None) -> "Game":
        payload = dict(record)
        if sets is not None:
            payload["sets"] = sets
        return cls.model_validate(payload)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude={"sets"})
