"""
Collection-backed Product and Category repositories.
"""

from typing import Callable, ClassVar, Iterable, Mapping

import structlog

from erp_console.core.clock import now
from erp_console.core.exceptions import BusinessRuleViolationException, ValidationException
from erp_console.core.search import contains, sortable_fields
from erp_console.domain.models.product import Category, Product
from erp_console.domain.repositories.product_repository import CategoryRepository, ProductRepository
from erp_console.domain.schemas.product import ProductFilter
from erp_console.domain.schemas.search import SearchParams
from erp_console.infrastructure.repositories.base_repository import (
    CollectionRepository,
    HardDeleteMixin,
    SoftDeleteMixin,
)
from erp_console.infrastructure.storage import LocalStorage

logger = structlog.get_logger(__name__)


class CollectionProductRepository(SoftDeleteMixin, CollectionRepository[Product], ProductRepository):
    """Product repository; stock is only moved through ``apply_stock_changes``."""

    storage_key: ClassVar[str] = "products"
    id_prefix: ClassVar[str] = "prod"
    entity_name: ClassVar[str] = "product"
    sortable = sortable_fields(
        "name", "price", "stock_quantity", "created_at", "updated_at", "sku", "cost",
    )

    def __init__(self, storage: LocalStorage, initial: Iterable[dict] = ()):
        super().__init__(storage, Product, initial)

    def _predicate(self, params: SearchParams) -> Callable[[Product], bool]:
        search = params.search
        filters = self._filters(ProductFilter, params)

        def matches(product: Product) -> bool:
            if not self.visible(product, params):
                return False
            if search and not (
                contains(product.name, search)
                or contains(product.description, search)
                or contains(product.sku, search)
            ):
                return False
            if filters.category_id and product.category_id != filters.category_id:
                return False
            if filters.supplier_id and product.supplier_id != filters.supplier_id:
                return False
            if filters.price_min and product.price < filters.price_min:
                return False
            if filters.price_max and product.price > filters.price_max:
                return False
            if filters.in_stock and product.stock_quantity <= 0:
                return False
            return True

        return matches

    def apply_stock_changes(self, deltas: Mapping[str, int]) -> list[Product]:
        """Add each delta to its product's stock, all or nothing.

        Unknown product ids are skipped. A change that would drive any stock
        below zero refuses the whole batch.
        """
        with self.lock:
            timestamp = now()
            changed: dict[str, Product] = {}
            for product_id, delta in deltas.items():
                product = self.get_by_id(product_id)
                if product is None:
                    logger.warning("stock_change_skipped", product_id=product_id, reason="not_found")
                    continue
                new_stock = product.stock_quantity + delta
                if new_stock < 0:
                    raise ValidationException(
                        f"Not enough stock for product: {product.name}",
                        {"product_id": product_id, "available": product.stock_quantity, "requested": -delta},
                    )
                changed[product_id] = product.model_copy(
                    update={"stock_quantity": new_stock, "updated_at": timestamp}
                )
            if changed:
                self._replace(changed)

        logger.info("stock_changed", deltas=dict(deltas))
        return list(changed.values())

    def clear_supplier(self, supplier_id: str) -> int:
        with self.lock:
            timestamp = now()
            changed = {
                product.id: product.model_copy(update={"supplier_id": None, "updated_at": timestamp})
                for product in self._items
                if product.is_active and product.supplier_id == supplier_id
            }
            if changed:
                self._replace(changed)

        logger.info("supplier_detached_from_products", supplier_id=supplier_id, count=len(changed))
        return len(changed)

    def count_active_by_category(self, category_id: str) -> int:
        return self.count(lambda product: product.is_active and product.category_id == category_id)


class CollectionCategoryRepository(HardDeleteMixin, CollectionRepository[Category], CategoryRepository):
    """Category repository; deletion is refused while active products use the category."""

    storage_key: ClassVar[str] = "categories"
    id_prefix: ClassVar[str] = "cat"
    entity_name: ClassVar[str] = "category"
    sortable = sortable_fields("name", "created_at", "updated_at")

    def __init__(self, storage: LocalStorage, products: ProductRepository, initial: Iterable[dict] = ()):
        super().__init__(storage, Category, initial)
        self.products = products

    def _predicate(self, params: SearchParams) -> Callable[[Category], bool]:
        search = params.search

        def matches(category: Category) -> bool:
            if not search:
                return True
            return contains(category.name, search) or contains(category.description, search)

        return matches

    def delete(self, id: str) -> bool:
        with self.lock, self.products.lock:
            in_use = self.products.count_active_by_category(id)
            if in_use > 0:
                logger.warning("category_delete_refused", id=id, active_products=in_use)
                raise BusinessRuleViolationException(
                    f"This category is used by {in_use} active products",
                    {"category_id": id, "active_products": in_use},
                )
            return super().delete(id)
