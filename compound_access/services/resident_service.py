# =======================================================================================
# compound_access/services/resident_service.py - Resident Directory Service
# =======================================================================================
from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import uuid4
from sqlalchemy.engine import Connection
from ..models.enums import SortDirection, SortField, StorageKey
from ..models.schemas import (
    CredentialPayload,
    FilterOptions,
    Resident,
    ResidentCreateRequest,
    ResidentUpdateRequest,
)
from .credential_codec import CredentialCodec
from .record_store import RecordStore

# Changing any of these invalidates the printed credential
CREDENTIAL_FIELDS = ("firstName", "lastName", "unitNumber")

# Fields that may be cleared with an explicit null
NULLABLE_FIELDS = ("vehicleInfo", "photo")

SORT_KEYS: Dict[str, Callable[[Resident], Any]] = {
    "name": lambda r: r.full_name,
    "unit": lambda r: r.unitNumber,
    "building": lambda r: r.building,
    "createdAt": lambda r: r.createdAt,
}


class ResidentService:
    """Filter/sort/CRUD operations over the resident collection."""

    def __init__(self, store: Optional[RecordStore] = None, codec: Optional[CredentialCodec] = None):
        self.store = store or RecordStore()
        self.codec = codec or CredentialCodec()

    # ----------------- helpers -----------------

    def _load(self, conn: Connection) -> List[Resident]:
        return [Resident.model_validate(r) for r in self.store.read(conn, StorageKey.RESIDENTS)]

    def _save(self, conn: Connection, residents: List[Resident]) -> None:
        self.store.write(conn, StorageKey.RESIDENTS, [r.model_dump(mode="json") for r in residents])

    @staticmethod
    def compare(a: Any, b: Any, direction: SortDirection) -> int:
        """Three-way comparison; equal values keep their stored order."""
        if direction == "asc":
            return -1 if a < b else 1 if a > b else 0
        return -1 if a > b else 1 if a < b else 0

    @staticmethod
    def matches_search(resident: Resident, term: str) -> bool:
        term = term.lower()
        return (
            term in resident.firstName.lower()
            or term in resident.lastName.lower()
            or term in resident.unitNumber.lower()
            or term in resident.email.lower()
        )

    # ----------------- queries -----------------

    def list_residents(
        self,
        conn: Connection,
        filters: Optional[FilterOptions] = None,
        sort_field: Optional[SortField] = None,
        sort_direction: Optional[SortDirection] = None,
    ) -> List[Resident]:
        residents = self._load(conn)

        if filters:
            if filters.building:
                residents = [r for r in residents if r.building == filters.building]
            if filters.isActive is not None:
                residents = [r for r in residents if r.isActive == filters.isActive]
            if filters.searchTerm:
                residents = [r for r in residents if self.matches_search(r, filters.searchTerm)]

        if sort_field and sort_direction and sort_field in SORT_KEYS:
            key = SORT_KEYS[sort_field]
            residents.sort(
                key=cmp_to_key(lambda a, b: self.compare(key(a), key(b), sort_direction))
            )

        return residents

    def get_resident_by_id(self, conn: Connection, resident_id: str) -> Optional[Resident]:
        for resident in self._load(conn):
            if resident.id == resident_id:
                return resident
        return None

    # ----------------- mutations -----------------

    def create_resident(self, conn: Connection, request: ResidentCreateRequest) -> Resident:
        residents = self._load(conn)
        now = datetime.now(timezone.utc)

        resident = Resident(
            **request.model_dump(),
            id=uuid4().hex,
            qrCode="",
            createdAt=now,
            updatedAt=now,
        )
        resident = resident.model_copy(update={"qrCode": self.codec.issue(resident, now)})

        residents.append(resident)
        self._save(conn, residents)
        return resident

    def update_resident(
        self, conn: Connection, resident_id: str, request: ResidentUpdateRequest
    ) -> Optional[Resident]:
        """Apply supplied fields; returns None when the resident does not exist."""
        residents = self._load(conn)
        index = next((i for i, r in enumerate(residents) if r.id == resident_id), None)
        if index is None:
            return None

        updates = {
            k: v
            for k, v in request.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE_FIELDS
        }

        merged = {**residents[index].model_dump(), **updates, "updatedAt": datetime.now(timezone.utc)}
        resident = Resident.model_validate(merged)

        if any(field in updates for field in CREDENTIAL_FIELDS):
            resident = resident.model_copy(update={"qrCode": self.codec.issue(resident)})

        residents[index] = resident
        self._save(conn, residents)
        return resident

    def delete_resident(self, conn: Connection, resident_id: str) -> bool:
        residents = self._load(conn)
        remaining = [r for r in residents if r.id != resident_id]

        if len(remaining) == len(residents):
            return False

        self._save(conn, remaining)
        return True

    def reissue_credential(
        self, conn: Connection, resident_id: str
    ) -> Optional[Tuple[Resident, CredentialPayload]]:
        """Issue a new credential (new validity window) for an existing resident."""
        residents = self._load(conn)
        index = next((i for i, r in enumerate(residents) if r.id == resident_id), None)
        if index is None:
            return None

        now = datetime.now(timezone.utc)
        payload = self.codec.build_payload(residents[index], now)
        resident = residents[index].model_copy(
            update={"qrCode": self.codec.render_image(payload), "updatedAt": now}
        )

        residents[index] = resident
        self._save(conn, residents)
        return resident, payload
