"""Dashboard API: aggregated stats for the frontend dashboard."""

from fastapi import APIRouter, Depends

from erp_console.application.services.report_service import dashboard_summary
from erp_console.bootstrap import Container
from erp_console.core.clock import now
from erp_console.domain.models.user import User
from erp_console.domain.schemas.report import DashboardSummary
from erp_console.interfaces.api.deps import get_current_user
from erp_console.interfaces.deps import get_container

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardSummary)
def get_dashboard(
    container: Container = Depends(get_container),
    user: User = Depends(get_current_user),
):
    """Counts, revenue, six-month sales series and top inventory by value."""
    return dashboard_summary(container.products, container.clients, container.orders, now())
