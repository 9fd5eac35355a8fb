# =======================================================================================
# compound_access/services/record_store.py - Key-Value Record Store
# =======================================================================================
import json
from datetime import datetime, timezone
from typing import Any, Dict, List
from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.engine import Connection
from ..models.enums import StorageKey
from ..utils.exceptions import RecordStoreError

_UPDATE_SQL = text(
    """
    UPDATE record_store
    SET payload = :payload, updated_at = :ts
    WHERE storage_key = :key
    """
).bindparams(bindparam("ts", type_=DateTime(timezone=True)))

_INSERT_SQL = text(
    """
    INSERT INTO record_store (storage_key, payload, updated_at)
    VALUES (:key, :payload, :ts)
    """
).bindparams(bindparam("ts", type_=DateTime(timezone=True)))


class RecordStore:
    """
    Persists whole collections as JSON arrays, one row per storage key.
    Writes replace the stored array (last write wins).
    """

    def exists(self, conn: Connection, key: StorageKey) -> bool:
        row = conn.execute(
            text("SELECT 1 FROM record_store WHERE storage_key = :key"),
            {"key": key.value},
        ).first()
        return row is not None

    def read(self, conn: Connection, key: StorageKey) -> List[Dict[str, Any]]:
        """Return the stored collection; a missing key reads as an empty list."""
        row = conn.execute(
            text("SELECT payload FROM record_store WHERE storage_key = :key"),
            {"key": key.value},
        ).mappings().first()

        if not row:
            return []

        try:
            items = json.loads(row["payload"])
        except ValueError as e:
            raise RecordStoreError(f"Collection '{key.value}' is not valid JSON: {e}") from e

        if not isinstance(items, list):
            raise RecordStoreError(f"Collection '{key.value}' is not a JSON array")

        return items

    def write(self, conn: Connection, key: StorageKey, items: List[Dict[str, Any]]) -> None:
        params = {
            "key": key.value,
            "payload": json.dumps(items),
            "ts": datetime.now(timezone.utc),
        }

        result = conn.execute(_UPDATE_SQL, params)
        if result.rowcount == 0:
            conn.execute(_INSERT_SQL, params)
