# =======================================================================================
# compound_access/services/dashboard_service.py
# =======================================================================================

from datetime import datetime
from typing import Optional
from sqlalchemy.engine import Connection

from ..config import config
from ..models.schemas import DashboardStats
from .access_log_service import AccessLogService
from .resident_service import ResidentService


class DashboardService:
    """Aggregated counts and recent activity for the dashboard."""

    def __init__(
        self,
        residents: Optional[ResidentService] = None,
        access_logs: Optional[AccessLogService] = None,
    ):
        self.residents = residents or ResidentService()
        self.access_logs = access_logs or AccessLogService()

    def get_dashboard_stats(self, conn: Connection, now: Optional[datetime] = None) -> DashboardStats:
        """
        "Today" is the local calendar day of `now`; a log counts when its own
        timestamp falls on the same local day.
        """
        residents = self.residents.list_residents(conn)
        logs = self.access_logs.get_access_logs(conn)

        today = (now or datetime.now()).astimezone().date()
        today_logs = [log for log in logs if log.timestamp.astimezone().date() == today]

        return DashboardStats(
            totalResidents=len(residents),
            activeResidents=sum(1 for r in residents if r.isActive),
            todayEntries=sum(1 for log in today_logs if log.accessType == "entry"),
            todayExits=sum(1 for log in today_logs if log.accessType == "exit"),
            recentActivity=logs[: config.RECENT_ACTIVITY_LIMIT],
        )
