
# =======================================================================================
# compound_access/models/schemas.py - Pydantic Models
# =======================================================================================
from datetime import datetime
from typing import Optional, List
from pydantic import AliasChoices, BaseModel, Field, field_validator
from .enums import AccessType, AccessMethod, UserRole, ScanResultType, ScannerState
from ..utils.validators import ensure_aware

# ========== Residents ==========

class EmergencyContact(BaseModel):
    name: str
    phone: str
    relationship: str


class VehicleInfo(BaseModel):
    licensePlate: str
    make: str
    model: str
    color: str


class ResidentBase(BaseModel):
    firstName: str = Field(..., min_length=1, description="Resident's first name")
    lastName: str = Field(..., min_length=1, description="Resident's last name")
    email: str = Field(..., description="Contact email")
    phone: str = Field(..., description="Contact phone number")
    unitNumber: str = Field(..., min_length=1, description="Unit identifier, e.g. A-101")
    building: str = Field(..., min_length=1, description="Building the unit belongs to")
    emergencyContact: EmergencyContact
    vehicleInfo: Optional[VehicleInfo] = None
    isActive: bool = True
    photo: Optional[str] = None


class Resident(ResidentBase):
    """Resident record as kept in the record store."""
    id: str
    qrCode: str = ""
    createdAt: datetime
    updatedAt: datetime

    @field_validator("createdAt", "updatedAt")
    @classmethod
    def _aware(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @property
    def full_name(self) -> str:
        return f"{self.firstName} {self.lastName}"


class ResidentCreateRequest(ResidentBase):
    """Create resident request model."""


class ResidentUpdateRequest(BaseModel):
    """Partial resident update; only supplied fields are applied."""
    firstName: Optional[str] = Field(None, min_length=1)
    lastName: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    unitNumber: Optional[str] = Field(None, min_length=1)
    building: Optional[str] = Field(None, min_length=1)
    emergencyContact: Optional[EmergencyContact] = None
    vehicleInfo: Optional[VehicleInfo] = None
    isActive: Optional[bool] = None
    photo: Optional[str] = None


class FilterOptions(BaseModel):
    building: Optional[str] = None
    isActive: Optional[bool] = None
    searchTerm: Optional[str] = None


class DeleteResponse(BaseModel):
    success: bool
    message: str


# ========== Access Logs ==========

class AccessLogBase(BaseModel):
    residentId: str
    residentName: str
    unitNumber: str
    accessType: AccessType
    method: AccessMethod = "qr_code"
    location: str = "Main Gate"
    securityPersonnel: Optional[str] = None
    notes: Optional[str] = None


class AccessLog(AccessLogBase):
    id: str
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def _aware(cls, v: datetime) -> datetime:
        return ensure_aware(v)


class AccessLogCreateRequest(AccessLogBase):
    """Access log entry; timestamp defaults to the time of the request."""
    timestamp: Optional[datetime] = None

    @field_validator("timestamp")
    @classmethod
    def _aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v) if v is not None else None


# ========== Credentials ==========

class CredentialPayload(BaseModel):
    """Payload embedded in a resident's QR credential."""
    residentId: str
    unitNumber: str
    # credentials printed by the earlier dashboard carry "timestamp"
    issuedAt: datetime = Field(validation_alias=AliasChoices("issuedAt", "timestamp"))
    validUntil: Optional[datetime] = None

    @field_validator("residentId", "unitNumber", mode="before")
    @classmethod
    def _stringify(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("issuedAt", "validUntil")
    @classmethod
    def _aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v) if v is not None else None


class CredentialResponse(BaseModel):
    residentId: str
    qrCode: str
    validUntil: datetime


# ========== Users ==========

class User(BaseModel):
    id: str
    username: str
    role: UserRole
    firstName: str
    lastName: str
    email: str
    isActive: bool = True
    lastLogin: Optional[datetime] = None


# ========== Dashboard ==========

class DashboardStats(BaseModel):
    totalResidents: int
    activeResidents: int
    todayEntries: int
    todayExits: int
    recentActivity: List[AccessLog]


# ========== Scan ==========

class ScanRequest(BaseModel):
    """Raw credential text presented at the gate (scanned or typed)."""
    qrData: str = Field(..., description="Decoded QR text (credential JSON)")
    accessType: AccessType = "entry"
    method: AccessMethod = "qr_code"
    location: Optional[str] = None
    securityPersonnel: Optional[str] = None


class ScanResponse(BaseModel):
    result: ScanResultType
    message: str
    accessType: AccessType
    resident: Optional[Resident] = None
    log: Optional[AccessLog] = None


class RecentScan(BaseModel):
    resident: Resident
    timestamp: datetime
    accessType: AccessType


class ScannerStartRequest(BaseModel):
    accessType: AccessType = "entry"


class ScannerStatusResponse(BaseModel):
    state: ScannerState
    accessType: AccessType
    cameraSource: Optional[str] = None
    error: Optional[str] = None
    lastResult: Optional[ScanResponse] = None
    recentScans: List[RecentScan] = []


# ========== Health ==========

class HealthResponse(BaseModel):
    status: str                 # "ok" | "error"
    dataAvailable: bool
    message: Optional[str] = None
