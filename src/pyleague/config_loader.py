"""Persist and load league rule profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from pyleague.config import LeagueRules


@dataclass
class LeagueProfile:
    rules: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "LeagueProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(rules=data.get("rules", {}))

    def save(self, path: Path) -> None:
        payload = {"rules": self.rules}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def apply(self, base: LeagueRules) -> LeagueRules:
        return base.with_overrides(self.rules)
