"""Pydantic models for API I/O."""

from .league import (
    AggregateResponse,
    LeadersResponse,
    MoveRequest,
    RatingResponse,
    RecordSetsRequest,
    RecordSetsResponse,
    StandingsRowResponse,
    TradeRequest,
    VodLinkRequest,
)

__all__ = [
    "AggregateResponse",
    "LeadersResponse",
    "MoveRequest",
    "RatingResponse",
    "RecordSetsRequest",
    "RecordSetsResponse",
    "StandingsRowResponse",
    "TradeRequest",
    "VodLinkRequest",
]
