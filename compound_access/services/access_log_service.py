# =======================================================================================
# compound_access/services/access_log_service.py - Access Log Service
# =======================================================================================
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4
from sqlalchemy.engine import Connection
from ..models.enums import StorageKey
from ..models.schemas import AccessLog, AccessLogCreateRequest
from .record_store import RecordStore


class AccessLogService:
    """Append-only entry/exit log, read newest first."""

    def __init__(self, store: Optional[RecordStore] = None):
        self.store = store or RecordStore()

    def get_access_logs(self, conn: Connection, limit: Optional[int] = None) -> List[AccessLog]:
        logs = [AccessLog.model_validate(l) for l in self.store.read(conn, StorageKey.ACCESS_LOGS)]
        logs.sort(key=lambda log: log.timestamp, reverse=True)
        return logs[:limit] if limit else logs

    def create_access_log(self, conn: Connection, entry: AccessLogCreateRequest) -> AccessLog:
        logs = self.get_access_logs(conn)

        data = entry.model_dump()
        data["timestamp"] = entry.timestamp or datetime.now(timezone.utc)
        log = AccessLog(**data, id=uuid4().hex)

        logs.insert(0, log)
        self.store.write(conn, StorageKey.ACCESS_LOGS, [l.model_dump(mode="json") for l in logs])
        return log
