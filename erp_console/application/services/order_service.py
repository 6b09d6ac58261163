"""Order workflow: order placement, cancellation and deletion with their stock effects."""

from collections import Counter
from typing import Any, Iterable, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from erp_console.core.exceptions import (
    BusinessRuleViolationException,
    ConflictException,
    EntityNotFoundException,
    ValidationException,
    validation_details,
)
from erp_console.domain.models.order import Order, OrderStatus
from erp_console.domain.orders import calculate_order_total, generate_order_number
from erp_console.domain.repositories.client_repository import ClientRepository
from erp_console.domain.repositories.order_repository import OrderRepository
from erp_console.domain.repositories.product_repository import ProductRepository
from erp_console.domain.schemas.order import OrderCreate, OrderUpdate
from erp_console.domain.schemas.search import PaginatedResponse, SearchParams

__all__ = [
    "ALLOWED_TRANSITIONS",
    "OrderWorkflow",
    "calculate_order_total",
    "generate_order_number",
]

logger = structlog.get_logger(__name__)

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    "pending": frozenset({"pending", "completed", "cancelled"}),
    "completed": frozenset({"completed", "cancelled"}),
    "cancelled": frozenset({"cancelled"}),
}


def _quantities(items: Iterable[Any]) -> Counter:
    """Total quantity requested per product across all lines."""
    requested: Counter = Counter()
    for item in items:
        requested[item.product_id] += item.quantity
    return requested


def _negate(deltas: Mapping[str, int]) -> dict[str, int]:
    return {product_id: -delta for product_id, delta in deltas.items()}


class OrderWorkflow:
    """Coordinates the order and product repositories.

    Every mutation holds the orders lock and then the products lock, validates
    everything first and only then commits, so a failure never leaves a partial
    stock change behind.
    """

    def __init__(self, orders: OrderRepository, products: ProductRepository, clients: ClientRepository):
        self.orders = orders
        self.products = products
        self.clients = clients

    # -- reads -------------------------------------------------------------

    def get_by_id(self, order_id: str) -> Optional[Order]:
        return self.orders.get_by_id(order_id)

    def search(self, params: SearchParams) -> PaginatedResponse[Order]:
        return self.orders.search(params)

    def next_order_number(self) -> str:
        return self.orders.next_order_number()

    # -- create ------------------------------------------------------------

    def create(self, data: Union[OrderCreate, Mapping[str, Any]]) -> Order:
        order_in = self._parse(data)
        if not order_in.items:
            raise ValidationException("Order must have at least one item")

        with self.orders.lock, self.clients.lock, self.products.lock:
            if self.clients.get_by_id(order_in.client_id) is None:
                raise EntityNotFoundException("Client not found", {"client_id": order_in.client_id})
            if order_in.order_number and self.orders.find_by_order_number(order_in.order_number):
                raise ConflictException("Order number already in use", {"order_number": order_in.order_number})

            requested = _quantities(order_in.items)
            for product_id, quantity in requested.items():
                product = self.products.get_by_id(product_id)
                if product is None:
                    raise EntityNotFoundException(
                        f"Product with ID {product_id} not found", {"product_id": product_id}
                    )
                if product.stock_quantity < quantity:
                    raise ValidationException(
                        f"Not enough stock for product: {product.name}",
                        {"product_id": product_id, "available": product.stock_quantity, "requested": quantity},
                    )

            payload = order_in.model_dump()
            payload["total"] = self._total(order_in)

            deltas = _negate(requested)
            self.products.apply_stock_changes(deltas)
            try:
                order = self.orders.create(payload)
            except Exception:
                self.products.apply_stock_changes(_negate(deltas))
                raise

        logger.info("stock_reserved", order_id=order.id, order_number=order.order_number, deltas=deltas)
        return order

    @staticmethod
    def _parse(data: Union[OrderCreate, Mapping[str, Any]]) -> OrderCreate:
        if isinstance(data, OrderCreate):
            return data
        try:
            return OrderCreate.model_validate(data)
        except ValidationError as exc:
            raise ValidationException("Invalid order data", validation_details(exc)) from exc

    @staticmethod
    def _total(order_in: OrderCreate) -> float:
        computed = calculate_order_total(order_in.items, order_in.discount, order_in.tax, order_in.shipping)
        if order_in.total is None:
            return computed
        if abs(order_in.total - computed) > 0.005:
            logger.warning("order_total_mismatch", supplied=order_in.total, computed=computed)
        return order_in.total

    # -- update ------------------------------------------------------------

    def update(self, order: Order) -> Order:
        with self.orders.lock, self.products.lock:
            existing = self.orders.get_by_id(order.id)
            if existing is None:
                raise EntityNotFoundException("Order not found", {"id": order.id})

            if order.status not in ALLOWED_TRANSITIONS[existing.status]:
                logger.warning("order_transition_refused", id=order.id, current=existing.status, requested=order.status)
                raise BusinessRuleViolationException(
                    f"Cannot change order status from {existing.status} to {order.status}",
                    {"id": order.id, "current": existing.status, "requested": order.status},
                )

            if existing.status == "cancelled" or order.status != "cancelled":
                return self.orders.update(order)

            deltas = self._restock(existing)
            try:
                updated = self.orders.update(order)
            except Exception:
                self.products.apply_stock_changes(_negate(deltas))
                raise

        logger.info("stock_restored", order_id=order.id, reason="cancelled", deltas=deltas)
        return updated

    def modify(self, order_id: str, data: OrderUpdate) -> Order:
        """Apply the fields set on ``data`` to a stored order."""
        existing = self.orders.get_by_id(order_id)
        if existing is None:
            raise EntityNotFoundException("Order not found", {"id": order_id})
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        return self.update(existing.model_copy(update=changes))

    def cancel(self, order_id: str) -> Order:
        return self.modify(order_id, OrderUpdate(status="cancelled"))

    # -- delete ------------------------------------------------------------

    def delete(self, order_id: str) -> bool:
        with self.orders.lock, self.products.lock:
            existing = self.orders.get_by_id(order_id)
            if existing is None:
                logger.warning("order_delete_skipped", id=order_id, reason="not_found")
                return False

            if existing.status == "cancelled":
                return self.orders.delete(order_id)

            deltas = self._restock(existing)
            try:
                deleted = self.orders.delete(order_id)
            except Exception:
                self.products.apply_stock_changes(_negate(deltas))
                raise

        logger.info("stock_restored", order_id=order_id, reason="deleted", deltas=deltas)
        return deleted

    def _restock(self, order: Order) -> dict[str, int]:
        """Give the order's quantities back to the products that still exist."""
        deltas = {
            product_id: quantity
            for product_id, quantity in _quantities(order.items).items()
            if self.products.get_by_id(product_id) is not None
        }
        self.products.apply_stock_changes(deltas)
        return deltas
