"""Canonical league models shared across the engine, API and CLI."""

from .game import Game, SetScore
from .player import Player
from .team import Team
from .trade import FREE_AGENCY, Trade, TradeEntry

__all__ = [
    "FREE_AGENCY",
    "Game",
    "Player",
    "SetScore",
    "Team",
    "Trade",
    "TradeEntry",
]
