# =======================================================================================
# compound_access/api/routes/dashboard
# =======================================================================================

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Connection

from ...models.schemas import DashboardStats
from ...services.dashboard_service import DashboardService
from ..dependencies import get_db_connection

router = APIRouter()
dashboard_service = DashboardService()


@router.get("/dashboard/stats", response_model=DashboardStats)
def get_dashboard_stats(conn: Connection = Depends(get_db_connection)):
    return dashboard_service.get_dashboard_stats(conn)
