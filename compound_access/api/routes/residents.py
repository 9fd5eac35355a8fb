# =======================================================================================
# compound_access/api/routes/residents.py - Resident Directory Endpoints
# =======================================================================================
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Connection
from ...models.enums import SortDirection, SortField
from ...models.schemas import (
    CredentialResponse,
    DeleteResponse,
    FilterOptions,
    Resident,
    ResidentCreateRequest,
    ResidentUpdateRequest,
)
from ...services.resident_service import ResidentService
from ...utils.exceptions import CredentialRenderError
from ..dependencies import get_db_connection

router = APIRouter()
resident_service = ResidentService()


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resident not found")


@router.get("/residents", response_model=List[Resident])
def list_residents(
    building: Optional[str] = Query(None, description="Exact building name"),
    isActive: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Matches name, unit or email"),
    sortField: Optional[SortField] = Query(None),
    sortDirection: SortDirection = Query("asc"),
    conn: Connection = Depends(get_db_connection),
):
    filters = FilterOptions(building=building, isActive=isActive, searchTerm=search)
    return resident_service.list_residents(conn, filters, sortField, sortDirection)


@router.post("/residents", response_model=Resident, status_code=status.HTTP_201_CREATED)
def create_resident(request: ResidentCreateRequest, conn: Connection = Depends(get_db_connection)):
    try:
        return resident_service.create_resident(conn, request)
    except CredentialRenderError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/residents/{resident_id}", response_model=Resident)
def get_resident(resident_id: str, conn: Connection = Depends(get_db_connection)):
    resident = resident_service.get_resident_by_id(conn, resident_id)
    if not resident:
        raise _not_found()
    return resident


@router.patch("/residents/{resident_id}", response_model=Resident)
def update_resident(
    resident_id: str,
    request: ResidentUpdateRequest,
    conn: Connection = Depends(get_db_connection),
):
    try:
        resident = resident_service.update_resident(conn, resident_id, request)
    except CredentialRenderError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not resident:
        raise _not_found()
    return resident


@router.delete("/residents/{resident_id}", response_model=DeleteResponse)
def delete_resident(resident_id: str, conn: Connection = Depends(get_db_connection)):
    if not resident_service.delete_resident(conn, resident_id):
        raise _not_found()
    return DeleteResponse(success=True, message="Resident deleted")


@router.post("/residents/{resident_id}/credential", response_model=CredentialResponse)
def reissue_credential(resident_id: str, conn: Connection = Depends(get_db_connection)):
    """Issue a new QR credential, restarting its validity window."""
    try:
        reissued = resident_service.reissue_credential(conn, resident_id)
    except CredentialRenderError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not reissued:
        raise _not_found()

    resident, payload = reissued
    return CredentialResponse(
        residentId=resident.id,
        qrCode=resident.qrCode,
        validUntil=payload.validUntil,
    )
