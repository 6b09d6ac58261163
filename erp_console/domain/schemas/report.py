"""Pydantic schemas for report filters and the dashboard summary."""

from datetime import datetime
from typing import Optional

from erp_console.domain.models.base import CamelModel
from erp_console.domain.models.transaction import TransactionType


class ReportFilter(CamelModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    type: Optional[TransactionType] = None
    category: Optional[str] = None
    client_id: Optional[str] = None
    supplier_id: Optional[str] = None
    product_id: Optional[str] = None


class MonthlySales(CamelModel):
    name: str  # "Jan", "Feb", ...
    year: int
    month: int
    revenue: float
    orders: int


class InventoryValue(CamelModel):
    name: str
    value: float
    stock: int


class DashboardStats(CamelModel):
    total_products: int
    active_products: int
    low_stock_products: int
    total_clients: int
    active_clients: int
    total_orders: int
    orders_this_month: int
    total_revenue: float
    revenue_this_month: float


class DashboardSummary(CamelModel):
    stats: DashboardStats
    sales_by_month: list[MonthlySales]
    top_inventory: list[InventoryValue]
