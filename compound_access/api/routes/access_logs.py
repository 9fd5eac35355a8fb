# =======================================================================================
# compound_access/api/routes/access_logs.py - Access Log Endpoints
# =======================================================================================
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.engine import Connection
from ...models.schemas import AccessLog, AccessLogCreateRequest
from ...services.access_log_service import AccessLogService
from ..dependencies import get_db_connection

router = APIRouter()
access_log_service = AccessLogService()


@router.get("/access-logs", response_model=List[AccessLog])
def list_access_logs(
    limit: Optional[int] = Query(None, ge=1, description="Most recent N entries"),
    conn: Connection = Depends(get_db_connection),
):
    return access_log_service.get_access_logs(conn, limit)


@router.post("/access-logs", response_model=AccessLog, status_code=status.HTTP_201_CREATED)
def create_access_log(request: AccessLogCreateRequest, conn: Connection = Depends(get_db_connection)):
    """Record a manual or guest passage that did not come from a credential scan."""
    return access_log_service.create_access_log(conn, request)
