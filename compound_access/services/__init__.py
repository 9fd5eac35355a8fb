# =======================================================================================
# compound_access/services/__init__.py - Services Package
# =======================================================================================
from .record_store import RecordStore
from .credential_codec import CredentialCodec
from .resident_service import ResidentService
from .access_log_service import AccessLogService
from .access_control import AccessControlService
from .dashboard_service import DashboardService
from .user_service import UserService
from .seed_service import SeedService
from .scanner_service import ScannerService

__all__ = [
    "RecordStore", "CredentialCodec", "ResidentService", "AccessLogService",
    "AccessControlService", "DashboardService", "UserService", "SeedService", "ScannerService"
]
