"""Roster ledger keeping team rosters and player assignments consistent."""

from .ledger import RosterLedger

__all__ = ["RosterLedger"]
