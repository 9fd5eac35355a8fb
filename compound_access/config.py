# =======================================================================================
# compound_access/config.py - Configuration Management
# =======================================================================================
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

def _env_bool(name: str, default: str) -> bool:
    """Helper to parse boolean environment variables."""
    return os.getenv(name, default).lower() == "true"

def _env_str(name: str) -> Optional[str]:
    """Helper to read optional string environment variables (blank -> None)."""
    v = os.getenv(name)
    return v.strip() if v and v.strip() else None

class Config:
    # Database (record store lives in a single key-value table)
    DB_URL: str = os.getenv("DB_URL", "sqlite:///./compound_access.db")

    # API Settings
    API_DEBUG: bool = _env_bool("API_DEBUG", "false")
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # Database Connection Pool (ignored for SQLite)
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "20"))

    # Credentials
    CREDENTIAL_VALIDITY_DAYS: int = int(os.getenv("CREDENTIAL_VALIDITY_DAYS", "30"))
    QR_IMAGE_WIDTH: int = int(os.getenv("QR_IMAGE_WIDTH", "200"))
    QR_MARGIN: int = int(os.getenv("QR_MARGIN", "1"))

    # Data
    SEED_DEMO_DATA: bool = _env_bool("SEED_DEMO_DATA", "true")
    DEFAULT_LOCATION: str = os.getenv("DEFAULT_LOCATION", "Main Gate")
    RECENT_ACTIVITY_LIMIT: int = int(os.getenv("RECENT_ACTIVITY_LIMIT", "10"))

    # Camera Scanner
    SCANNER_CAMERA_SOURCE: Optional[str] = _env_str("SCANNER_CAMERA_SOURCE")
    SCANNER_POLL_INTERVAL: float = float(os.getenv("SCANNER_POLL_INTERVAL", "0.1"))
    SCANNER_DEBOUNCE_SECONDS: float = float(os.getenv("SCANNER_DEBOUNCE_SECONDS", "3.0"))
    SCANNER_RECENT_LIMIT: int = int(os.getenv("SCANNER_RECENT_LIMIT", "5"))

config = Config()
