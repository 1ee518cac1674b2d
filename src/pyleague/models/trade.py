"""Immutable trade log entries."""

from __future__ import annotations

import datetime as dt
from typing import Any, List

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


FREE_AGENCY = "Free Agency"


class TradeEntry(BaseModel):
    """One player movement; teams are referenced by name, not id."""

    player_id: str = Field(..., min_length=1)
    from_team: str = FREE_AGENCY
    to_team: str = FREE_AGENCY

    model_config = ConfigDict(frozen=True)


class Trade(BaseModel):
    id: str
    date: dt.date
    description: str = ""
    players_traded: List[TradeEntry] = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Trade":
        return cls.model_validate(record)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
