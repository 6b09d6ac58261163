"""
Collection-backed Order and Transaction repositories.

The order repository only stores orders; stock effects of placing, cancelling
and deleting orders belong to the order workflow.
"""

from typing import Any, Callable, ClassVar, Iterable, Optional

import structlog

from erp_console.config import get_settings
from erp_console.core.clock import within
from erp_console.core.exceptions import ConflictException
from erp_console.core.search import contains, sortable_fields
from erp_console.domain.models.base import new_id
from erp_console.domain.models.order import Order
from erp_console.domain.models.transaction import Transaction
from erp_console.domain.orders import generate_order_number
from erp_console.domain.repositories.order_repository import OrderRepository, TransactionRepository
from erp_console.domain.schemas.order import OrderFilter
from erp_console.domain.schemas.search import SearchParams
from erp_console.domain.schemas.transaction import TransactionFilter
from erp_console.infrastructure.repositories.base_repository import CollectionRepository, HardDeleteMixin
from erp_console.infrastructure.storage import LocalStorage

logger = structlog.get_logger(__name__)


class CollectionOrderRepository(HardDeleteMixin, CollectionRepository[Order], OrderRepository):
    """Order repository implementation."""

    storage_key: ClassVar[str] = "orders"
    id_prefix: ClassVar[str] = "order"
    entity_name: ClassVar[str] = "order"
    sortable = sortable_fields(
        "order_number", "status", "payment_status", "payment_method", "created_at", "updated_at", "total",
    )

    def __init__(self, storage: LocalStorage, initial: Iterable[dict] = ()):
        super().__init__(storage, Order, initial)
        self.prefix = get_settings().ORDER_NUMBER_PREFIX

    def next_order_number(self) -> str:
        return generate_order_number((order.order_number for order in self._items), self.prefix)

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        return next((order for order in self._items if order.order_number == order_number), None)

    def create(self, obj_in: Any) -> Order:
        payload = self._payload(obj_in)
        items = [dict(item) for item in payload.get("items") or []]
        for item in items:
            if not item.get("id"):
                item["id"] = new_id("item")
        payload["items"] = items

        with self.lock:
            if not payload.get("order_number"):
                payload["order_number"] = self.next_order_number()
            return super().create(payload)

    def _check(self, entity: Order) -> None:
        existing = self.find_by_order_number(entity.order_number)
        if existing is not None and existing.id != entity.id:
            raise ConflictException(
                "Order number already in use",
                {"order_number": entity.order_number, "order_id": existing.id},
            )

    def _predicate(self, params: SearchParams) -> Callable[[Order], bool]:
        search = params.search
        filters = self._filters(OrderFilter, params)

        def matches(order: Order) -> bool:
            if search and not contains(order.order_number, search):
                return False
            if filters.client_id and order.client_id != filters.client_id:
                return False
            if filters.status and order.status != filters.status:
                return False
            if filters.payment_status and order.payment_status != filters.payment_status:
                return False
            if filters.payment_method and order.payment_method != filters.payment_method:
                return False
            return within(order.created_at, filters.start_date, filters.end_date)

        return matches


class CollectionTransactionRepository(HardDeleteMixin, CollectionRepository[Transaction], TransactionRepository):
    """Transaction repository implementation; newest first by default."""

    storage_key: ClassVar[str] = "transactions"
    id_prefix: ClassVar[str] = "trans"
    entity_name: ClassVar[str] = "transaction"
    sortable = sortable_fields(
        "date", "amount", "type", "category", "description", "created_at", "updated_at",
    )
    default_sort = "date"
    default_order = "desc"

    def __init__(self, storage: LocalStorage, initial: Iterable[dict] = ()):
        super().__init__(storage, Transaction, initial)

    def _predicate(self, params: SearchParams) -> Callable[[Transaction], bool]:
        search = params.search
        filters = self._filters(TransactionFilter, params)

        def matches(transaction: Transaction) -> bool:
            if search and not contains(transaction.description, search):
                return False
            if filters.type and transaction.type != filters.type:
                return False
            if filters.category and transaction.category != filters.category:
                return False
            if filters.order_id and transaction.order_id != filters.order_id:
                return False
            if filters.supplier_id and transaction.supplier_id != filters.supplier_id:
                return False
            return within(transaction.date, filters.start_date, filters.end_date)

        return matches
