"""
Order and Transaction Repository Interfaces.
"""

from typing import Optional, Protocol

from erp_console.domain.models.order import Order
from erp_console.domain.models.transaction import Transaction
from erp_console.domain.repositories.base import HardDeleteRepository


class OrderRepository(HardDeleteRepository[Order], Protocol):
    """Interface for Order persistence; stock effects live in the order workflow."""

    def next_order_number(self) -> str:
        """Next ``PREFIX-NNN`` number."""
        ...

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        ...


class TransactionRepository(HardDeleteRepository[Transaction], Protocol):
    """Interface for Transaction-specific operations."""
