"""Report service: stock, sales and financial projections plus the dashboard summary.

Every report is recomputed from the current repository snapshots; nothing is
cached.
"""

from datetime import datetime
from typing import Iterable, Optional

from erp_console.config import get_settings
from erp_console.core.clock import ensure_aware, get_timezone, within
from erp_console.domain.models.order import Order
from erp_console.domain.models.transaction import Transaction
from erp_console.domain.repositories.client_repository import ClientRepository
from erp_console.domain.repositories.order_repository import OrderRepository, TransactionRepository
from erp_console.domain.repositories.product_repository import ProductRepository
from erp_console.domain.schemas.order import SalesReportRow
from erp_console.domain.schemas.product import StockReportRow
from erp_console.domain.schemas.report import (
    DashboardStats,
    DashboardSummary,
    InventoryValue,
    MonthlySales,
    ReportFilter,
)
from erp_console.domain.schemas.transaction import BalanceSummary, FinancialReportRow

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def stock_report(products: ProductRepository) -> list[StockReportRow]:
    """Valuation of every active product at its sale price."""
    return [
        StockReportRow(
            product_id=product.id,
            name=product.name,
            sku=product.sku,
            current_stock=product.stock_quantity,
            average_cost=product.cost,
            total_value=product.price * product.stock_quantity,
        )
        for product in products.list_all()
        if product.is_active
    ]


def sales_report(orders: OrderRepository, clients: ClientRepository, filters: ReportFilter) -> list[SalesReportRow]:
    rows = []
    for order in orders.list_all():
        if not within(order.created_at, filters.start_date, filters.end_date):
            continue
        client = clients.get_by_id(order.client_id)
        rows.append(
            SalesReportRow(
                order_id=order.id,
                order_number=order.order_number,
                client_name=client.name if client else "N/A",
                date=order.created_at,
                total=order.total,
                status=order.status,
                payment_status=order.payment_status,
            )
        )
    return rows


def financial_report(transactions: TransactionRepository, filters: ReportFilter) -> list[FinancialReportRow]:
    """Transactions oldest first, each row carrying the balance accumulated so far."""
    selected = [
        transaction
        for transaction in transactions.list_all()
        if within(transaction.date, filters.start_date, filters.end_date)
        and (not filters.category or transaction.category == filters.category)
        and (not filters.type or transaction.type == filters.type)
    ]
    selected.sort(key=lambda transaction: transaction.date)

    rows = []
    balance = 0.0
    for transaction in selected:
        balance += transaction.amount if transaction.type == "income" else -transaction.amount
        rows.append(
            FinancialReportRow(
                transaction_id=transaction.id,
                date=transaction.date,
                type=transaction.type,
                category=transaction.category,
                description=transaction.description,
                amount=transaction.amount,
                balance=balance,
            )
        )
    return rows


def _sum_amounts(transactions: Iterable[Transaction], type: str) -> float:
    return sum(transaction.amount for transaction in transactions if transaction.type == type)


def balance_by_period(
    transactions: TransactionRepository,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> BalanceSummary:
    selected = [
        transaction
        for transaction in transactions.list_all()
        if within(transaction.date, start_date, end_date)
    ]
    income = _sum_amounts(selected, "income")
    expense = _sum_amounts(selected, "expense")
    return BalanceSummary(income=income, expense=expense, balance=income - expense)


def _month_of(order: Order) -> tuple[int, int]:
    local = order.created_at.astimezone(get_timezone())
    return local.year, local.month


def _last_months(reference: datetime, count: int) -> list[tuple[int, int]]:
    """(year, month) pairs ending with the reference month, oldest first."""
    months = []
    year, month = reference.year, reference.month
    for _ in range(count):
        months.append((year, month))
        year, month = (year, month - 1) if month > 1 else (year - 1, 12)
    return list(reversed(months))


def dashboard_summary(
    products: ProductRepository,
    clients: ClientRepository,
    orders: OrderRepository,
    now: datetime,
) -> DashboardSummary:
    settings = get_settings()
    reference = ensure_aware(now).astimezone(get_timezone())
    current_month = (reference.year, reference.month)

    all_products = products.list_all()
    active_products = [product for product in all_products if product.is_active]
    all_clients = clients.list_all()
    all_orders = orders.list_all()
    orders_this_month = [order for order in all_orders if _month_of(order) == current_month]

    stats = DashboardStats(
        total_products=len(all_products),
        active_products=len(active_products),
        low_stock_products=sum(
            1 for product in active_products if product.stock_quantity < settings.LOW_STOCK_THRESHOLD
        ),
        total_clients=len(all_clients),
        active_clients=sum(1 for client in all_clients if client.is_active),
        total_orders=len(all_orders),
        orders_this_month=len(orders_this_month),
        total_revenue=sum(order.total for order in all_orders),
        revenue_this_month=sum(order.total for order in orders_this_month),
    )

    sales_by_month = []
    for year, month in _last_months(reference, 6):
        month_orders = [order for order in all_orders if _month_of(order) == (year, month)]
        sales_by_month.append(
            MonthlySales(
                name=MONTH_ABBREVIATIONS[month - 1],
                year=year,
                month=month,
                revenue=sum(order.total for order in month_orders),
                orders=len(month_orders),
            )
        )

    inventory = sorted(
        (
            InventoryValue(
                name=product.name,
                value=product.price * product.stock_quantity,
                stock=product.stock_quantity,
            )
            for product in active_products
        ),
        key=lambda row: row.value,
        reverse=True,
    )

    return DashboardSummary(stats=stats, sales_by_month=sales_by_month, top_inventory=inventory[:5])
