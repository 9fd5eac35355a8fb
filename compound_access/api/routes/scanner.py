# =======================================================================================
# compound_access/api/routes/scanner.py - Camera Scanner Control
# =======================================================================================
from fastapi import APIRouter
from ...models.schemas import ScannerStartRequest, ScannerStatusResponse
from ...workers.scanner_worker import scanner_worker

router = APIRouter()


@router.get("/scanner/status", response_model=ScannerStatusResponse)
def get_scanner_status():
    return scanner_worker.status()


@router.post("/scanner/start", response_model=ScannerStatusResponse)
def start_scanner(request: ScannerStartRequest):
    """
    Start polling the camera. Failures (no camera, permission denied) are
    reported through `state` and `error` rather than an HTTP error.
    """
    scanner_worker.start(request.accessType)
    return scanner_worker.status()


@router.post("/scanner/stop", response_model=ScannerStatusResponse)
def stop_scanner():
    scanner_worker.stop()
    return scanner_worker.status()
