"""Tests for order placement, cancellation, deletion and numbering."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from erp_console.application.services.order_service import calculate_order_total, generate_order_number
from erp_console.core.exceptions import (
    BusinessRuleViolationException,
    ConflictException,
    EntityNotFoundException,
    ValidationException,
)
from erp_console.domain.models.order import OrderItem
from erp_console.domain.schemas.order import OrderUpdate
from erp_console.domain.schemas.search import SearchParams


def _stock(container, product) -> int:
    return container.products.get_by_id(product.id).stock_quantity


class TestOrderNumbering:
    def test_first_number(self) -> None:
        assert generate_order_number([]) == "ORD-001"

    def test_increments_after_nine(self) -> None:
        numbers = [f"ORD-{i:03d}" for i in range(1, 10)]
        assert generate_order_number(numbers) == "ORD-010"

    def test_uses_lexicographic_maximum(self) -> None:
        assert generate_order_number(["ORD-999", "ORD-1000"]) == "ORD-1000"

    def test_ignores_numbers_with_other_prefixes(self) -> None:
        assert generate_order_number(["INV-050", "ORD-002"]) == "ORD-003"

    def test_custom_prefix(self) -> None:
        assert generate_order_number(["PED-041"], prefix="PED") == "PED-042"


class TestOrderTotal:
    def test_sum_of_item_totals_minus_discount_plus_tax_and_shipping(self) -> None:
        items = [
            OrderItem(id="item_1", product_id="p1", quantity=2, unit_price=10, total=20),
            OrderItem(id="item_2", product_id="p2", quantity=1, unit_price=5, discount=1, total=4),
        ]
        assert calculate_order_total(items, discount=3, tax=2.5, shipping=10) == 33.5

    def test_item_totals_are_not_recomputed(self) -> None:
        items = [OrderItem(id="item_1", product_id="p1", quantity=2, unit_price=10, total=1)]
        assert calculate_order_total(items, 0, 0, 0) == 1


class TestCreateOrder:
    def test_scenario_create_then_cancel_restores_stock(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10, price=25.5)

        order = container.order_workflow.create(order_data((product, 3)))

        assert _stock(container, product) == 7
        assert order.total == pytest.approx(3 * 25.5)
        assert order.order_number == "ORD-001"
        assert order.status == "pending"
        assert order.items[0].id.startswith("item_")

        cancelled = container.order_workflow.cancel(order.id)

        assert cancelled.status == "cancelled"
        assert _stock(container, product) == 10

    def test_order_exceeding_stock_fails_without_mutation(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=2)
        with pytest.raises(ValidationException):
            container.order_workflow.create(order_data((product, 3)))
        assert _stock(container, product) == 2
        assert container.orders.list_all() == []

    def test_one_bad_item_leaves_every_product_untouched(self, container, make_product, order_data) -> None:
        plenty = make_product(name="Plenty", stock_quantity=50)
        scarce = make_product(name="Scarce", stock_quantity=1)
        with pytest.raises(ValidationException):
            container.order_workflow.create(order_data((plenty, 5), (scarce, 2)))
        assert _stock(container, plenty) == 50
        assert _stock(container, scarce) == 1
        assert container.orders.list_all() == []

    def test_quantities_are_aggregated_per_product(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=5)
        with pytest.raises(ValidationException):
            container.order_workflow.create(order_data((product, 3), (product, 3)))
        assert _stock(container, product) == 5

    def test_unknown_product_raises_not_found(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=5)
        data = order_data((product, 1))
        data["items"].append({"product_id": "prod_missing", "quantity": 1, "unit_price": 1, "total": 1})
        with pytest.raises(EntityNotFoundException):
            container.order_workflow.create(data)
        assert _stock(container, product) == 5

    def test_unknown_client_raises_not_found(self, container, make_product, order_data) -> None:
        product = make_product()
        with pytest.raises(EntityNotFoundException):
            container.order_workflow.create(order_data((product, 1), client_id="client_missing"))
        assert _stock(container, product) == 10

    def test_empty_order_is_rejected(self, container, order_data) -> None:
        with pytest.raises(ValidationException):
            container.order_workflow.create(order_data())

    def test_malformed_payload_is_rejected(self, container, make_product, order_data) -> None:
        product = make_product()
        with pytest.raises(ValidationException):
            container.order_workflow.create(order_data((product, 0)))

    def test_supplied_total_is_trusted(self, container, make_product, order_data) -> None:
        product = make_product(price=10)
        order = container.order_workflow.create(order_data((product, 2), total=999))
        assert order.total == 999

    def test_total_includes_discount_tax_and_shipping(self, container, make_product, order_data) -> None:
        product = make_product(price=10)
        order = container.order_workflow.create(order_data((product, 2), discount=5, tax=1, shipping=4))
        assert order.total == pytest.approx(20)

    def test_supplied_order_number_in_use_conflicts(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        container.order_workflow.create(order_data((product, 1), order_number="ORD-007"))
        with pytest.raises(ConflictException):
            container.order_workflow.create(order_data((product, 1), order_number="ORD-007"))
        assert _stock(container, product) == 9
        assert len(container.orders.list_all()) == 1

    def test_numbers_follow_existing_orders(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        container.order_workflow.create(order_data((product, 1), order_number="ORD-009"))
        second = container.order_workflow.create(order_data((product, 1)))
        assert second.order_number == "ORD-010"
        assert container.order_workflow.next_order_number() == "ORD-011"

    def test_failed_store_rolls_back_stock(self, container, make_product, order_data, monkeypatch) -> None:
        product = make_product(stock_quantity=10)

        def broken_create(payload):
            raise RuntimeError("disk full")

        monkeypatch.setattr(container.orders, "create", broken_create)
        with pytest.raises(RuntimeError):
            container.order_workflow.create(order_data((product, 4)))
        assert _stock(container, product) == 10


class TestUpdateOrder:
    def test_other_edits_do_not_touch_stock(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        order = container.order_workflow.create(order_data((product, 2)))
        updated = container.order_workflow.modify(order.id, OrderUpdate(payment_status="paid", notes="ok"))
        assert updated.payment_status == "paid"
        assert updated.notes == "ok"
        assert _stock(container, product) == 8

    def test_complete_then_cancel_restores_stock(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        order = container.order_workflow.create(order_data((product, 2)))
        container.order_workflow.modify(order.id, OrderUpdate(status="completed"))
        assert _stock(container, product) == 8
        container.order_workflow.cancel(order.id)
        assert _stock(container, product) == 10

    def test_cancelling_twice_restores_once(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        order = container.order_workflow.create(order_data((product, 2)))
        container.order_workflow.cancel(order.id)
        container.order_workflow.cancel(order.id)
        assert _stock(container, product) == 10

    @pytest.mark.parametrize("start,target", [("completed", "pending"), ("cancelled", "pending"), ("cancelled", "completed")])
    def test_forbidden_transitions(self, container, make_product, order_data, start, target) -> None:
        product = make_product(stock_quantity=10)
        order = container.order_workflow.create(order_data((product, 1)))
        container.order_workflow.modify(order.id, OrderUpdate(status=start))
        stock_before = _stock(container, product)

        with pytest.raises(BusinessRuleViolationException):
            container.order_workflow.modify(order.id, OrderUpdate(status=target))

        assert container.orders.get_by_id(order.id).status == start
        assert _stock(container, product) == stock_before

    def test_cancel_skips_products_that_no_longer_exist(self, container, make_product, order_data) -> None:
        kept = make_product(name="Kept", stock_quantity=10)
        gone = make_product(name="Gone", stock_quantity=10)
        order = container.order_workflow.create(order_data((kept, 1), (gone, 1)))
        container.products._commit(p for p in container.products.list_all() if p.id != gone.id)

        container.order_workflow.cancel(order.id)

        assert _stock(container, kept) == 10
        assert container.products.get_by_id(gone.id) is None

    def test_update_unknown_order_raises_not_found(self, container) -> None:
        with pytest.raises(EntityNotFoundException):
            container.order_workflow.modify("order_missing", OrderUpdate(status="completed"))


class TestDeleteOrder:
    def test_delete_pending_order_restores_stock(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        order = container.order_workflow.create(order_data((product, 4)))
        assert container.order_workflow.delete(order.id) is True
        assert _stock(container, product) == 10
        assert container.order_workflow.get_by_id(order.id) is None

    def test_delete_cancelled_order_does_not_restore_again(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        order = container.order_workflow.create(order_data((product, 4)))
        container.order_workflow.cancel(order.id)
        assert container.order_workflow.delete(order.id) is True
        assert _stock(container, product) == 10

    def test_delete_missing_order_returns_false(self, container) -> None:
        assert container.order_workflow.delete("order_missing") is False


class TestOrderSearch:
    def test_search_by_number_and_status(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        first = container.order_workflow.create(order_data((product, 1)))
        container.order_workflow.create(order_data((product, 1)))
        container.order_workflow.cancel(first.id)

        assert container.order_workflow.search(SearchParams(search="ord-002")).total == 1
        cancelled = container.order_workflow.search(SearchParams(filters={"status": "cancelled"}))
        assert [o.id for o in cancelled.data] == [first.id]

    def test_sort_by_total_desc(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10, price=10)
        container.order_workflow.create(order_data((product, 1)))
        container.order_workflow.create(order_data((product, 3)))
        response = container.order_workflow.search(SearchParams(sort="total", order="desc"))
        assert [o.total for o in response.data] == [30, 10]


class TestConcurrentOrders:
    def test_parallel_orders_never_oversell(self, container, make_product, order_data) -> None:
        product = make_product(stock_quantity=10)
        go = threading.Event()

        def place() -> bool:
            go.wait()
            try:
                container.order_workflow.create(order_data((product, 1)))
            except ValidationException:
                return False
            return True

        with ThreadPoolExecutor(max_workers=12) as pool:
            futures = [pool.submit(place) for _ in range(60)]
            go.set()
            placed = sum(future.result() for future in futures)

        assert placed == 10
        assert _stock(container, product) == 0
        orders = container.orders.list_all()
        assert len(orders) == 10
        assert len({order.order_number for order in orders}) == 10
