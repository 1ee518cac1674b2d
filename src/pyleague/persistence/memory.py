"""Dict-backed store with the same contract as the SQLite store."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from .schema import COLLECTIONS, check_collection, matches


class MemoryStore:
    def __init__(self, seed: Mapping[str, List[Mapping[str, Any]]] | None = None):
        self._collections: Dict[str, Dict[str, dict]] = {name: {} for name in COLLECTIONS}
        for collection, records in (seed or {}).items():
            for record in records:
                self.insert(collection, record)

    def _table(self, collection: str) -> Dict[str, dict]:
        return self._collections[check_collection(collection)]

    def list(self, collection: str, **filters: Any) -> List[dict]:
        return [
            copy.deepcopy(record)
            for record in self._table(collection).values()
            if matches(record, filters)
        ]

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        record = self._table(collection).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def insert(self, collection: str, record: Mapping[str, Any]) -> dict:
        table = self._table(collection)
        payload = copy.deepcopy(dict(record))
        payload["id"] = str(payload.get("id") or uuid4().hex)
        if payload["id"] in table:
            raise ValueError(f"{collection} record {payload['id']!r} already exists")
        table[payload["id"]] = payload
        return copy.deepcopy(payload)

    def update(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> dict:
        table = self._table(collection)
        if record_id not in table:
            raise KeyError(f"{collection} record {record_id} not found")
        table[record_id] = {**table[record_id], **copy.deepcopy(dict(fields)), "id": record_id}
        return copy.deepcopy(table[record_id])

    def delete(self, collection: str, record_id: str) -> None:
        self._table(collection).pop(record_id, None)
