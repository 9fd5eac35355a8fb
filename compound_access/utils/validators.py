# =======================================================================================
# compound_access/utils/validators.py - Validation Helpers
# =======================================================================================

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from .exceptions import InvalidCredentialError


def ensure_aware(value: datetime) -> datetime:
    """
    Normalize a datetime to an aware UTC datetime.
    Naive values (stored by older records or typed by hand) are taken as local time.
    """
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"datetime out of range: {value.isoformat()}") from e


class CredentialValidator:
    """Validates raw credential payloads before and after parsing."""

    REQUIRED_FIELDS = ("residentId", "unitNumber")
    ISSUED_AT_FIELDS = ("issuedAt", "timestamp")

    @staticmethod
    def require_text(raw: Optional[str]) -> str:
        """Reject blank manual input before any parsing happens."""
        if raw is None or not raw.strip():
            raise InvalidCredentialError("Please enter QR code data")
        return raw.strip()

    @staticmethod
    def require_object(parsed: Any) -> Dict[str, Any]:
        if not isinstance(parsed, dict):
            raise InvalidCredentialError("Credential payload is not a JSON object")
        return parsed

    @classmethod
    def require_fields(cls, data: Dict[str, Any]) -> bool:
        """All of residentId, unitNumber and an issue time must be present and non-empty."""
        missing = [f for f in cls.REQUIRED_FIELDS if not data.get(f)]
        if not any(data.get(f) for f in cls.ISSUED_AT_FIELDS):
            missing.append("issuedAt")

        if missing:
            raise InvalidCredentialError(f"Missing credential fields: {', '.join(missing)}")

        return True

    @staticmethod
    def check_not_expired(valid_until: Optional[datetime], now: Optional[datetime] = None) -> bool:
        """A credential without validUntil never expires."""
        if valid_until is None:
            return True

        now = ensure_aware(now or datetime.now(timezone.utc))
        if ensure_aware(valid_until) < now:
            raise InvalidCredentialError("Credential expired")

        return True
