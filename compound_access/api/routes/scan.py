# =======================================================================================
# compound_access/api/routes/scan.py - Scan Endpoints
# =======================================================================================
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.engine import Connection
from ...models.enums import AccessType
from ...models.schemas import ScanRequest, ScanResponse
from ...utils.exceptions import InvalidCredentialError
from ...workers.scanner_worker import scanner_worker
from ..dependencies import get_db_connection

router = APIRouter()
scanner_service = scanner_worker.scanner_service


def _respond(response: ScanResponse) -> ScanResponse:
    if response.result == "error":
        raise HTTPException(status_code=403, detail=response.message)
    return response


@router.post("/scan", response_model=ScanResponse)
def handle_scan(request: ScanRequest, conn: Connection = Depends(get_db_connection)):
    """Process credential text read at the gate or typed in by the guard."""
    try:
        response = scanner_service.process_payload(
            conn,
            request.qrData,
            request.accessType,
            request.method,
            request.location,
            request.securityPersonnel,
        )
    except InvalidCredentialError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _respond(response)


@router.post("/scan/demo", response_model=ScanResponse)
def demo_scan(
    residentId: str = Query("1", description="Resident whose credential is simulated"),
    accessType: AccessType = Query("entry"),
    conn: Connection = Depends(get_db_connection),
):
    """Simulate a scan with a freshly issued credential, no camera needed."""
    access_service = scanner_service.access_service
    resident = access_service.residents.get_resident_by_id(conn, residentId)
    if not resident:
        raise HTTPException(status_code=404, detail="Resident not found")

    raw = access_service.codec.serialize(access_service.demo_payload(resident))
    return _respond(scanner_service.process_payload(conn, raw, accessType))
