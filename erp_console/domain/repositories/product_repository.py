"""
Product and Category Repository Interfaces.
"""

from typing import Mapping, Protocol

from erp_console.domain.models.product import Category, Product
from erp_console.domain.repositories.base import HardDeleteRepository, SoftDeleteRepository


class ProductRepository(SoftDeleteRepository[Product], Protocol):
    """Interface for Product-specific operations."""

    def apply_stock_changes(self, deltas: Mapping[str, int]) -> list[Product]:
        """Add each delta to the product's stock in a single commit."""
        ...

    def clear_supplier(self, supplier_id: str) -> int:
        """Detach a supplier from every active product; returns how many changed."""
        ...

    def count_active_by_category(self, category_id: str) -> int:
        """Active products referencing the category."""
        ...


class CategoryRepository(HardDeleteRepository[Category], Protocol):
    """Interface for Category-specific operations."""
