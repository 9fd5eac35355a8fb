# =======================================================================================
# compound_access/models/enums.py - Enums and Constants
# =======================================================================================
from enum import Enum
from typing import Literal

# Type aliases for better type hints
AccessType = Literal["entry", "exit"]
AccessMethod = Literal["qr_code", "manual", "guest"]
UserRole = Literal["admin", "security", "management"]
SortField = Literal["name", "unit", "building", "createdAt"]
SortDirection = Literal["asc", "desc"]
ScanResultType = Literal["success", "error"]

class StorageKey(str, Enum):
    """Fixed keys of the record store collections."""
    RESIDENTS = "residents"
    ACCESS_LOGS = "accessLogs"
    USERS = "users"

class ScannerState(str, Enum):
    """Camera scanner lifecycle states."""
    IDLE = "idle"
    SCANNING = "scanning"
    ERROR = "error"
