"""Reports API: stock valuation, sales listing, financial ledger and period balance."""

from fastapi import APIRouter, Depends

from erp_console.application.services import report_service
from erp_console.bootstrap import Container
from erp_console.domain.models.user import User
from erp_console.domain.schemas.order import SalesReportRow
from erp_console.domain.schemas.product import StockReportRow
from erp_console.domain.schemas.report import ReportFilter
from erp_console.domain.schemas.transaction import BalanceSummary, FinancialReportRow
from erp_console.interfaces.api.deps import get_current_user
from erp_console.interfaces.deps import get_container, get_report_filter

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.get("/stock", response_model=list[StockReportRow])
def stock_report(
    container: Container = Depends(get_container),
    user: User = Depends(get_current_user),
):
    return report_service.stock_report(container.products)


@router.get("/sales", response_model=list[SalesReportRow])
def sales_report(
    filters: ReportFilter = Depends(get_report_filter),
    container: Container = Depends(get_container),
    user: User = Depends(get_current_user),
):
    return report_service.sales_report(container.orders, container.clients, filters)


@router.get("/financial", response_model=list[FinancialReportRow])
def financial_report(
    filters: ReportFilter = Depends(get_report_filter),
    container: Container = Depends(get_container),
    user: User = Depends(get_current_user),
):
    return report_service.financial_report(container.transactions, filters)


@router.get("/balance", response_model=BalanceSummary)
def balance(
    filters: ReportFilter = Depends(get_report_filter),
    container: Container = Depends(get_container),
    user: User = Depends(get_current_user),
):
    return report_service.balance_by_period(container.transactions, filters.start_date, filters.end_date)
