"""
Client and Supplier Repository Interfaces.
"""

from typing import Optional, Protocol

from erp_console.domain.models.client import Client
from erp_console.domain.models.supplier import Supplier
from erp_console.domain.repositories.base import SoftDeleteRepository


class ClientRepository(SoftDeleteRepository[Client], Protocol):
    """Interface for Client-specific operations."""

    def find_active_by_document(self, document: str, exclude_id: Optional[str] = None) -> Optional[Client]:
        """Active client holding the document, other than ``exclude_id``."""
        ...


class SupplierRepository(SoftDeleteRepository[Supplier], Protocol):
    """Interface for Supplier-specific operations."""

    def find_active_by_document(self, document: str, exclude_id: Optional[str] = None) -> Optional[Supplier]:
        """Active supplier holding the document, other than ``exclude_id``."""
        ...
