# =======================================================================================
# compound_access/services/access_control.py - Core Business Logic
# =======================================================================================
from datetime import datetime, timezone
from typing import Optional, Tuple
from sqlalchemy.engine import Connection
from ..config import config
from ..models.enums import AccessMethod, AccessType, ScanResultType
from ..models.schemas import AccessLog, AccessLogCreateRequest, CredentialPayload, Resident
from ..utils.exceptions import InactiveResidentError, InvalidCredentialError, ResidentNotFoundError
from ..utils.validators import CredentialValidator
from .access_log_service import AccessLogService
from .credential_codec import CredentialCodec
from .resident_service import ResidentService

ScanOutcome = Tuple[ScanResultType, str, Optional[Resident], Optional[AccessLog]]


class AccessControlService:
    """Turns a presented credential into a granted/denied decision."""

    def __init__(
        self,
        residents: Optional[ResidentService] = None,
        access_logs: Optional[AccessLogService] = None,
        codec: Optional[CredentialCodec] = None,
    ):
        self.codec = codec or CredentialCodec()
        self.residents = residents or ResidentService(codec=self.codec)
        self.access_logs = access_logs or AccessLogService()

    def authorize(self, conn: Connection, raw: str) -> Resident:
        """Resolve the credential holder, raising on any reason to deny."""
        payload = self.codec.validate(raw)
        if not payload:
            raise InvalidCredentialError("Invalid or expired QR code")

        resident = self.residents.get_resident_by_id(conn, payload.residentId)
        if not resident:
            raise ResidentNotFoundError("Resident not found")

        if not resident.isActive:
            raise InactiveResidentError("Resident account is inactive")

        return resident

    def process_credential(
        self,
        conn: Connection,
        raw: str,
        access_type: AccessType = "entry",
        location: Optional[str] = None,
        security_personnel: Optional[str] = None,
        method: AccessMethod = "qr_code",
    ) -> ScanOutcome:
        """
        Run a presented credential through the validation pipeline.
        Returns: (result, message, resident, log)

        Blank input is a form error rather than a denial and raises
        InvalidCredentialError.
        """
        raw = CredentialValidator.require_text(raw)

        try:
            resident = self.authorize(conn, raw)
        except (InvalidCredentialError, ResidentNotFoundError, InactiveResidentError) as e:
            if config.API_DEBUG:
                print(f"[access] Denied: {e}")
            return "error", str(e), None, None

        log = self.access_logs.create_access_log(
            conn,
            AccessLogCreateRequest(
                residentId=resident.id,
                residentName=resident.full_name,
                unitNumber=resident.unitNumber,
                timestamp=datetime.now(timezone.utc),
                accessType=access_type,
                method=method,
                location=location or config.DEFAULT_LOCATION,
                securityPersonnel=security_personnel,
            ),
        )

        return "success", f"Access granted - {access_type}", resident, log

    def demo_payload(self, resident: Resident) -> CredentialPayload:
        """A freshly issued payload, standing in for a physical scan."""
        return self.codec.build_payload(resident)
