# =======================================================================================
# compound_access/database.py - Database Management
# =======================================================================================
from sqlalchemy import Column, DateTime, MetaData, String, Table, Text, create_engine, text
from sqlalchemy.dialects.mysql import LONGTEXT
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool
from contextlib import contextmanager
from typing import Optional
from .config import config

metadata = MetaData()

# One row per collection; payload is the JSON array of the collection.
record_store_table = Table(
    "record_store",
    metadata,
    Column("storage_key", String(64), primary_key=True),
    Column("payload", Text().with_variant(LONGTEXT(), "mysql"), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

class DatabaseManager:
    """Manages database connections and transactions."""

    def __init__(self, url: Optional[str] = None):
        self.url = url or config.DB_URL
        self.engine: Engine = create_engine(self.url, **self._engine_options())

    def _engine_options(self) -> dict:
        if self.url.startswith("sqlite"):
            # request handlers run in a threadpool
            return {"connect_args": {"check_same_thread": False}, "future": True}
        return {
            "poolclass": QueuePool,
            "pool_size": config.DB_POOL_SIZE,
            "max_overflow": config.DB_MAX_OVERFLOW,
            "pool_pre_ping": True,
            "isolation_level": "READ COMMITTED",
            "future": True,
        }

    def ensure_schema(self) -> None:
        """Create the record store table if it does not exist yet."""
        metadata.create_all(self.engine)

    @contextmanager
    def get_connection(self):
        """Get a database connection with automatic cleanup."""
        with self.engine.begin() as conn:
            yield conn

    def fetch_one(self, query: str, params: dict = None):
        """Fetch a single result."""
        with self.get_connection() as conn:
            result = conn.execute(text(query), params or {})
            return result.mappings().first()

    def dispose(self) -> None:
        self.engine.dispose()

# Global database instance
db_manager = DatabaseManager()
