# =======================================================================================
# compound_access/services/user_service.py - Staff User Service
# =======================================================================================
from typing import List, Optional
from sqlalchemy.engine import Connection
from ..models.enums import StorageKey
from ..models.schemas import User
from .record_store import RecordStore


class UserService:
    """Read access to the staff user collection."""

    def __init__(self, store: Optional[RecordStore] = None):
        self.store = store or RecordStore()

    def list_users(self, conn: Connection) -> List[User]:
        return [User.model_validate(u) for u in self.store.read(conn, StorageKey.USERS)]

    def get_current_user(self, conn: Connection) -> Optional[User]:
        """
        There is no login: the first stored user acts as the signed-in operator.
        """
        users = self.list_users(conn)
        return users[0] if users else None
