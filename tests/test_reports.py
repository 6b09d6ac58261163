"""Tests for the read-side report projections."""

from datetime import datetime, timedelta

import pytest

from erp_console.application.services import report_service
from erp_console.core.clock import ensure_aware, now
from erp_console.domain.schemas.report import ReportFilter


@pytest.fixture
def ledger(container):
    """Income/expense transactions across January 2024."""
    rows = [
        ("income", 1000, "2024-01-05T10:00:00", "sale"),
        ("expense", 300, "2024-01-02T10:00:00", "rent"),
        ("expense", 150, "2024-01-20T10:00:00", "purchase"),
        ("income", 250, "2024-01-15T10:00:00", "sale"),
    ]
    for type, amount, date, category in rows:
        container.transactions.create(
            {"type": type, "amount": amount, "date": date, "category": category, "user_id": "user_1"}
        )
    return container.transactions


class TestStockReport:
    def test_rows_for_active_products(self, container, make_product) -> None:
        make_product(name="Monitor", price=100, cost=60, stock_quantity=3)
        hidden = make_product(name="Old", price=10, stock_quantity=1)
        container.products.soft_delete(hidden.id)

        rows = report_service.stock_report(container.products)

        assert len(rows) == 1
        assert rows[0].name == "Monitor"
        assert rows[0].current_stock == 3
        assert rows[0].average_cost == 60
        assert rows[0].total_value == 300


class TestSalesReport:
    def test_rows_resolve_client_names(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        order = container.order_workflow.create(order_data((product, 1)))
        container.orders.create(
            {"client_id": "client_gone", "user_id": "user_1", "items": [], "total": 5, "order_number": "ORD-050"}
        )

        rows = report_service.sales_report(container.orders, container.clients, ReportFilter())

        names = {row.order_number: row.client_name for row in rows}
        assert names[order.order_number] == "Maria Souza"
        assert names["ORD-050"] == "N/A"

    def test_date_range(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        container.order_workflow.create(order_data((product, 1)))
        tomorrow = now() + timedelta(days=1)

        assert report_service.sales_report(container.orders, container.clients, ReportFilter(start_date=tomorrow)) == []
        assert len(report_service.sales_report(container.orders, container.clients, ReportFilter(end_date=tomorrow))) == 1


class TestFinancialReport:
    def test_running_balance_in_date_order(self, ledger) -> None:
        rows = report_service.financial_report(ledger, ReportFilter())

        assert [row.amount for row in rows] == [300, 1000, 250, 150]
        assert [row.balance for row in rows] == [-300, 700, 950, 800]

    def test_last_balance_equals_income_minus_expense(self, ledger) -> None:
        rows = report_service.financial_report(ledger, ReportFilter())
        income = sum(t.amount for t in ledger.list_all() if t.type == "income")
        expense = sum(t.amount for t in ledger.list_all() if t.type == "expense")
        assert rows[-1].balance == pytest.approx(income - expense)

    def test_filters_by_type_category_and_dates(self, ledger) -> None:
        assert len(report_service.financial_report(ledger, ReportFilter(type="income"))) == 2
        assert len(report_service.financial_report(ledger, ReportFilter(category="rent"))) == 1
        window = ReportFilter(start_date=datetime(2024, 1, 4), end_date=datetime(2024, 1, 16))
        rows = report_service.financial_report(ledger, window)
        assert [row.balance for row in rows] == [1000, 1250]

    def test_empty_selection(self, ledger) -> None:
        assert report_service.financial_report(ledger, ReportFilter(category="travel")) == []


class TestBalanceByPeriod:
    def test_totals(self, ledger) -> None:
        summary = report_service.balance_by_period(ledger)
        assert summary.income == 1250
        assert summary.expense == 450
        assert summary.balance == 800

    def test_period(self, ledger) -> None:
        summary = report_service.balance_by_period(ledger, datetime(2024, 1, 10), datetime(2024, 1, 31))
        assert summary.income == 250
        assert summary.expense == 150
        assert summary.balance == 100


class TestDashboardSummary:
    def test_seeded_summary(self, seeded_container) -> None:
        c = seeded_container
        summary = report_service.dashboard_summary(c.products, c.clients, c.orders, now())

        assert summary.stats.total_products == 3
        assert summary.stats.active_products == 3
        assert summary.stats.total_clients == 2
        assert summary.stats.total_orders == 2
        assert summary.stats.total_revenue == pytest.approx(1429.99 + 1237.45)
        assert len(summary.sales_by_month) == 6
        assert sum(month.orders for month in summary.sales_by_month) == 2
        assert [row.name for row in summary.top_inventory] == ["Monitor", "Cadeira", "Camiseta"]

    def test_low_stock_and_month_window(self, container, make_product) -> None:
        make_product(name="Few", stock_quantity=3)
        make_product(name="Many", stock_quantity=40)
        reference = ensure_aware(datetime(2024, 3, 15, 12, 0))

        summary = report_service.dashboard_summary(container.products, container.clients, container.orders, reference)

        assert summary.stats.low_stock_products == 1
        assert [(m.year, m.month) for m in summary.sales_by_month] == [
            (2023, 10), (2023, 11), (2023, 12), (2024, 1), (2024, 2), (2024, 3),
        ]
        assert summary.sales_by_month[-1].name == "Mar"

    def test_top_inventory_is_capped_at_five(self, container, make_product) -> None:
        for i in range(7):
            make_product(name=f"P{i}", price=10, stock_quantity=i + 1)
        summary = report_service.dashboard_summary(container.products, container.clients, container.orders, now())
        assert [row.name for row in summary.top_inventory] == ["P6", "P5", "P4", "P3", "P2"]
