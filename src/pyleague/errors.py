"""Error taxonomy raised by the league engine."""

from __future__ import annotations

from typing import Any, Sequence


class LeagueError(Exception):
    """Base class for engine errors; ``code`` is stable across releases."""

    code = "league_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class NotFound(LeagueError, LookupError):
    """A referenced player, team or game does not exist."""

    code = "not_found"

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection} record {record_id!r} not found")
        self.collection = collection
        self.record_id = record_id

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update({"collection": self.collection, "id": self.record_id})
        return payload


class InvariantViolation(LeagueError):
    """A mutation would leave team rosters and player assignments inconsistent."""

    code = "invariant_violation"


class MalformedInput(LeagueError, ValueError):
    """Input rejected before any store call."""

    code = "malformed_input"


class PartialFailure(LeagueError):
    """A multi-step update stopped partway; completed steps are not undone."""

    code = "partial_failure"

    def __init__(self, failed_step: str, completed_steps: Sequence[str], cause: BaseException):
        super().__init__(f"step {failed_step!r} failed after {len(completed_steps)} completed step(s): {cause}")
        self.failed_step = failed_step
        self.completed_steps = list(completed_steps)
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update(
            {
                "failed_step": self.failed_step,
                "completed_steps": list(self.completed_steps),
            }
        )
        return payload
