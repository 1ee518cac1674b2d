"""Append-only trade log."""

from __future__ import annotations

import datetime as dt
import logging
import time
from typing import Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from pyleague.errors import MalformedInput
from pyleague.models import Trade, TradeEntry
from pyleague.persistence import Store


logger = logging.getLogger(__name__)

EntryInput = Union[TradeEntry, Mapping[str, str]]


def involves_team(trade: Trade, team_name: str) -> bool:
    """Name-based join between a trade and a team.

    Entries reference teams by display name, so a renamed team no longer
    matches its older trades.
    """

    return any(entry.from_team == team_name or entry.to_team == team_name for entry in trade.players_traded)


class TradeRecorder:
    def __init__(self, store: Store):
        self.store = store

    def _next_id(self) -> str:
        now_ms = time.time_ns() // 1_000_000
        last = 0
        for record in self.store.list("trades"):
            try:
                last = max(last, int(record["id"]))
            except (KeyError, TypeError, ValueError):
                continue
        return str(max(now_ms, last + 1))

    def record_trade(
        self,
        date: Union[dt.date, str, None],
        description: str,
        entries: Iterable[EntryInput],
    ) -> Trade:
        """Append a trade to the head of the history.

        The roster is not consulted; callers announce a trade by moving the
        players through the ledger and recording it here.
        """

        entries = list(entries)
        if not entries:
            raise MalformedInput("a trade needs at least one player entry")
        try:
            parsed = [TradeEntry.model_validate(entry) for entry in entries]
            trade = Trade(
                id=self._next_id(),
                date=date or dt.date.today(),
                description=description,
                players_traded=parsed,
            )
        except ValidationError as exc:
            raise MalformedInput(f"invalid trade: {exc.errors()[0]['msg']}") from exc

        stored = self.store.insert("trades", trade.to_record())
        logger.info("Recorded trade %s with %d player(s)", stored["id"], len(parsed))
        return Trade.from_record(stored)

    def history(self) -> List[Trade]:
        """All trades, most recent first."""

        return [Trade.from_record(record) for record in reversed(self.store.list("trades"))]

    def team_history(self, team_name: str) -> List[Trade]:
        return [trade for trade in self.history() if involves_team(trade, team_name)]

    def get(self, trade_id: str) -> Optional[Trade]:
        record = self.store.get_by_id("trades", trade_id)
        return Trade.from_record(record) if record is not None else None
