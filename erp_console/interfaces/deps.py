"""
API Dependencies.
"""

from datetime import datetime
from typing import Any, Optional

from fastapi import Depends, Query, Request

from erp_console.application.services.auth_service import AuthService
from erp_console.application.services.order_service import OrderWorkflow
from erp_console.bootstrap import Container
from erp_console.config import get_settings
from erp_console.domain.models.transaction import TransactionType
from erp_console.domain.repositories.client_repository import ClientRepository, SupplierRepository
from erp_console.domain.repositories.order_repository import OrderRepository, TransactionRepository
from erp_console.domain.repositories.product_repository import CategoryRepository, ProductRepository
from erp_console.domain.schemas.report import ReportFilter
from erp_console.domain.schemas.search import SearchParams, SortOrder

SEARCH_KEYS = {"page", "limit", "sort", "order", "search", "includeInactive"}


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_product_repository(container: Container = Depends(get_container)) -> ProductRepository:
    return container.products


def get_category_repository(container: Container = Depends(get_container)) -> CategoryRepository:
    return container.categories


def get_client_repository(container: Container = Depends(get_container)) -> ClientRepository:
    return container.clients


def get_supplier_repository(container: Container = Depends(get_container)) -> SupplierRepository:
    return container.suppliers


def get_order_repository(container: Container = Depends(get_container)) -> OrderRepository:
    return container.orders


def get_transaction_repository(container: Container = Depends(get_container)) -> TransactionRepository:
    return container.transactions


def get_order_workflow(container: Container = Depends(get_container)) -> OrderWorkflow:
    return container.order_workflow


def get_auth_service(container: Container = Depends(get_container)) -> AuthService:
    return container.auth


def get_search_params(
    request: Request,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    sort: Optional[str] = None,
    order: Optional[SortOrder] = None,
    search: str = "",
    include_inactive: bool = Query(False, alias="includeInactive"),
) -> SearchParams:
    """Pagination/sort query parameters; every other query parameter is an entity filter."""
    filters: dict[str, Any] = {
        key: value for key, value in request.query_params.items() if key not in SEARCH_KEYS
    }
    return SearchParams(
        page=page,
        limit=limit or get_settings().DEFAULT_PAGE_SIZE,
        sort=sort,
        order=order,
        search=search,
        filters=filters,
        include_inactive=include_inactive,
    )


def get_report_filter(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    type: Optional[TransactionType] = None,
    category: Optional[str] = None,
) -> ReportFilter:
    return ReportFilter(start_date=start_date, end_date=end_date, type=type, category=category)
