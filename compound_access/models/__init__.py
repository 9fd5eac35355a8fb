# =======================================================================================
# compound_access/models/__init__.py - Models Package
# =======================================================================================
from .schemas import *
from .enums import *

__all__ = [
    "Resident", "ResidentCreateRequest", "ResidentUpdateRequest", "FilterOptions",
    "AccessLog", "AccessLogCreateRequest", "CredentialPayload", "User", "DashboardStats",
    "ScanRequest", "ScanResponse", "RecentScan", "ScannerStatusResponse",
    "AccessType", "AccessMethod", "UserRole", "SortField", "SortDirection",
    "StorageKey", "ScannerState"
]
