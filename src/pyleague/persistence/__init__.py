"""Record stores backing the league engine.

Both stores expose the same per-collection contract: ``list``, ``get_by_id``,
``insert``, ``update`` and ``delete``. Records are plain JSON-compatible
dicts; the engine converts them to models at its own boundary.
"""

from __future__ import annotations

import json
import os
import sqlite3
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Mapping, Optional
from uuid import uuid4

from .memory import MemoryStore
from .schema import COLLECTIONS, Store, check_collection, matches


_DB_PATH_ENV = "PYLEAGUE_DB_PATH"


class RecordStore:
    """SQLite-backed store; each collection is a table of JSON payloads."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv(_DB_PATH_ENV)
        if env_db:
            if env_db.startswith("file:"):
                self.db_path: Path | str = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(self.db_path)
            except sqlite3.OperationalError:
                fallback_dir = Path(tempfile.gettempdir()) / "pyleague-runtime"
                fallback_dir.mkdir(parents=True, exist_ok=True)
                fallback = fallback_dir / "pyleague.sqlite"
                conn = sqlite3.connect(fallback)
                self.db_path = fallback
                self._create_schema(conn)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        for collection in COLLECTIONS:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {collection} (
                    id TEXT PRIMARY KEY,
                    payload_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
        conn.commit()

    def list(self, collection: str, **filters: Any) -> List[dict]:
        table = check_collection(collection)
        with self._connect() as conn:
            rows = conn.execute(f"SELECT payload_json FROM {table} ORDER BY rowid").fetchall()
        records = [json.loads(row["payload_json"]) for row in rows]
        return [record for record in records if matches(record, filters)]

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        table = check_collection(collection)
        with self._connect() as conn:
            row = conn.execute(f"SELECT payload_json FROM {table} WHERE id = ?", (record_id,)).fetchone()
        if row is None:
            return None
        return json.loads(row["payload_json"])

    def insert(self, collection: str, record: Mapping[str, Any]) -> dict:
        table = check_collection(collection)
        payload = dict(record)
        payload["id"] = str(payload.get("id") or uuid4().hex)
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            try:
                conn.execute(
                    f"INSERT INTO {table} (id, payload_json, created_at, updated_at) VALUES (?, ?, ?, ?)",
                    (payload["id"], json.dumps(payload), now, now),
                )
            except sqlite3.IntegrityError as exc:
                raise ValueError(f"{collection} record {payload['id']!r} already exists") from exc
            conn.commit()
        return payload

    def update(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> dict:
        table = check_collection(collection)
        existing = self.get_by_id(collection, record_id)
        if existing is None:
            raise KeyError(f"{collection} record {record_id} not found")
        updated = {**existing, **dict(fields), "id": record_id}
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                f"UPDATE {table} SET payload_json = ?, updated_at = ? WHERE id = ?",
                (json.dumps(updated), now, record_id),
            )
            conn.commit()
        return updated

    def delete(self, collection: str, record_id: str) -> None:
        table = check_collection(collection)
        with self._connect() as conn:
            conn.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
            conn.commit()


__all__ = ["COLLECTIONS", "MemoryStore", "RecordStore", "Store", "matches"]
