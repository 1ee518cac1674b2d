"""Trade history recording and queries."""

from .recorder import TradeRecorder, involves_team

__all__ = ["TradeRecorder", "involves_team"]
