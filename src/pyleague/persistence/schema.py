"""Collection names and record filtering shared by the stores."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol


COLLECTIONS = ("teams", "players", "trades", "games", "sets")


def check_collection(collection: str) -> str:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection {collection!r}; expected one of {', '.join(COLLECTIONS)}")
    return collection


def matches(record: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    return all(record.get(key) == value for key, value in filters.items())


class Store(Protocol):
    """Contract the engine relies on; see ``RecordStore`` and ``MemoryStore``."""

    def list(self, collection: str, **filters: Any) -> List[dict]: ...

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]: ...

    def insert(self, collection: str, record: Mapping[str, Any]) -> dict: ...

    def update(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> dict: ...

    def delete(self, collection: str, record_id: str) -> None: ...
