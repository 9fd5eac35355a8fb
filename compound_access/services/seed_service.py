# =======================================================================================
# compound_access/services/seed_service.py - Demo Data
# =======================================================================================
from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy.engine import Connection
from ..config import config
from ..models.enums import StorageKey
from ..models.schemas import AccessLog, Resident, User
from .credential_codec import CredentialCodec
from .record_store import RecordStore

DEMO_RESIDENTS = [
    {
        "id": "1",
        "firstName": "John",
        "lastName": "Smith",
        "email": "john.smith@email.com",
        "phone": "+1-555-0101",
        "unitNumber": "A-101",
        "building": "Building A",
        "emergencyContact": {"name": "Jane Smith", "phone": "+1-555-0102", "relationship": "Spouse"},
        "vehicleInfo": {"licensePlate": "ABC-123", "make": "Toyota", "model": "Camry", "color": "Blue"},
        "isActive": True,
        "createdAt": datetime(2024, 1, 15, tzinfo=timezone.utc),
    },
    {
        "id": "2",
        "firstName": "Maria",
        "lastName": "Garcia",
        "email": "maria.garcia@email.com",
        "phone": "+1-555-0201",
        "unitNumber": "B-205",
        "building": "Building B",
        "emergencyContact": {"name": "Carlos Garcia", "phone": "+1-555-0202", "relationship": "Brother"},
        "isActive": True,
        "createdAt": datetime(2024, 1, 20, tzinfo=timezone.utc),
    },
    {
        "id": "3",
        "firstName": "David",
        "lastName": "Johnson",
        "email": "david.johnson@email.com",
        "phone": "+1-555-0301",
        "unitNumber": "C-312",
        "building": "Building C",
        "emergencyContact": {"name": "Sarah Johnson", "phone": "+1-555-0302", "relationship": "Wife"},
        "vehicleInfo": {"licensePlate": "XYZ-789", "make": "Honda", "model": "Accord", "color": "Red"},
        "isActive": True,
        "createdAt": datetime(2024, 2, 1, tzinfo=timezone.utc),
    },
]

DEMO_USERS = [
    {
        "id": "1",
        "username": "admin",
        "role": "admin",
        "firstName": "System",
        "lastName": "Administrator",
        "email": "admin@compound.com",
        "isActive": True,
    },
    {
        "id": "2",
        "username": "security1",
        "role": "security",
        "firstName": "Robert",
        "lastName": "Brown",
        "email": "r.brown@compound.com",
        "isActive": True,
    },
]


class SeedService:
    """Populates an empty record store with a small demo compound."""

    def __init__(self, store: Optional[RecordStore] = None, codec: Optional[CredentialCodec] = None):
        self.store = store or RecordStore()
        self.codec = codec or CredentialCodec()

    def seed_if_empty(self, conn: Connection, now: Optional[datetime] = None) -> bool:
        """Seed only when the residents collection has never been written."""
        if self.store.exists(conn, StorageKey.RESIDENTS):
            return False

        now = now or datetime.now(timezone.utc)

        residents = []
        for data in DEMO_RESIDENTS:
            resident = Resident(**data, updatedAt=data["createdAt"], qrCode="")
            residents.append(resident.model_copy(update={"qrCode": self.codec.issue(resident, now)}))

        logs = [
            AccessLog(
                id="1",
                residentId="1",
                residentName="John Smith",
                unitNumber="A-101",
                timestamp=now,
                accessType="entry",
                method="qr_code",
                location=config.DEFAULT_LOCATION,
                securityPersonnel="Officer Brown",
            ),
            AccessLog(
                id="2",
                residentId="2",
                residentName="Maria Garcia",
                unitNumber="B-205",
                timestamp=now - timedelta(hours=1),
                accessType="exit",
                method="qr_code",
                location=config.DEFAULT_LOCATION,
                securityPersonnel="Officer Brown",
            ),
        ]

        users = [User(**data, lastLogin=now) for data in DEMO_USERS]

        self.store.write(conn, StorageKey.RESIDENTS, [r.model_dump(mode="json") for r in residents])
        self.store.write(conn, StorageKey.ACCESS_LOGS, [l.model_dump(mode="json") for l in logs])
        self.store.write(conn, StorageKey.USERS, [u.model_dump(mode="json") for u in users])

        if config.API_DEBUG:
            print(f"[seed] Wrote {len(residents)} residents, {len(logs)} logs, {len(users)} users")

        return True
