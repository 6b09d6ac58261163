"""
Collection-backed Client and Supplier repositories.

Both hold a tax document that must be well formed and unique among the
active records of the same repository.
"""

from typing import Callable, ClassVar, Iterable, Optional

import structlog

from erp_console.core.exceptions import ConflictException, ValidationException
from erp_console.core.search import contains, sortable_fields
from erp_console.domain.documents import document_label, validate_document
from erp_console.domain.models.client import Client
from erp_console.domain.models.supplier import Supplier
from erp_console.domain.repositories.client_repository import ClientRepository, SupplierRepository
from erp_console.domain.repositories.product_repository import ProductRepository
from erp_console.domain.schemas.client import ClientFilter, SupplierFilter
from erp_console.domain.schemas.search import SearchParams
from erp_console.infrastructure.repositories.base_repository import CollectionRepository, SoftDeleteMixin
from erp_console.infrastructure.storage import LocalStorage

logger = structlog.get_logger(__name__)


def _matches_address(entity, city: Optional[str], state: Optional[str]) -> bool:
    if city and not contains(entity.address.city, city):
        return False
    if state and entity.address.state.lower() != state.lower():
        return False
    return True


class DocumentHolderMixin:
    """Document format and active-uniqueness checks shared by clients and suppliers."""

    def find_active_by_document(self, document: str, exclude_id: Optional[str] = None):
        return next(
            (
                item for item in self._items
                if item.is_active and item.document == document and item.id != exclude_id
            ),
            None,
        )

    def _check_document(self, entity, document_type: str) -> None:
        label = document_label(document_type)
        if entity.is_active and self.find_active_by_document(entity.document, exclude_id=entity.id):
            raise ConflictException(
                f"A {self.entity_name} with this {label} already exists",
                {"document": entity.document},
            )
        if not validate_document(entity.document, document_type):
            raise ValidationException(f"Invalid {label} format", {"document": entity.document})


class CollectionClientRepository(DocumentHolderMixin, SoftDeleteMixin, CollectionRepository[Client], ClientRepository):
    """Client repository implementation."""

    storage_key: ClassVar[str] = "clients"
    id_prefix: ClassVar[str] = "client"
    entity_name: ClassVar[str] = "client"
    sortable = sortable_fields(
        "name", "email", "document", "created_at", "updated_at", "address.city", "address.state",
    )
    default_sort = "name"

    def __init__(self, storage: LocalStorage, initial: Iterable[dict] = ()):
        super().__init__(storage, Client, initial)

    def _check(self, entity: Client) -> None:
        self._check_document(entity, entity.document_type)

    def _predicate(self, params: SearchParams) -> Callable[[Client], bool]:
        search = params.search
        filters = self._filters(ClientFilter, params)

        def matches(client: Client) -> bool:
            if not self.visible(client, params):
                return False
            if search and not (
                contains(client.name, search)
                or contains(client.email, search)
                or search in client.document
            ):
                return False
            if filters.document_type and client.document_type != filters.document_type:
                return False
            return _matches_address(client, filters.city, filters.state)

        return matches


class CollectionSupplierRepository(DocumentHolderMixin, SoftDeleteMixin, CollectionRepository[Supplier], SupplierRepository):
    """Supplier repository; deactivation detaches the supplier from its products."""

    storage_key: ClassVar[str] = "suppliers"
    id_prefix: ClassVar[str] = "sup"
    entity_name: ClassVar[str] = "supplier"
    sortable = sortable_fields(
        "name", "product", "contact_name", "email", "created_at", "updated_at",
        "address.city", "address.state",
    )
    default_sort = "name"

    def __init__(self, storage: LocalStorage, products: ProductRepository, initial: Iterable[dict] = ()):
        super().__init__(storage, Supplier, initial)
        self.products = products

    def _check(self, entity: Supplier) -> None:
        self._check_document(entity, "cnpj")

    def _predicate(self, params: SearchParams) -> Callable[[Supplier], bool]:
        search = params.search
        filters = self._filters(SupplierFilter, params)

        def matches(supplier: Supplier) -> bool:
            if not self.visible(supplier, params):
                return False
            if search and not (
                contains(supplier.name, search)
                or contains(supplier.product, search)
                or contains(supplier.contact_name, search)
                or contains(supplier.email, search)
                or search in supplier.document
            ):
                return False
            return _matches_address(supplier, filters.city, filters.state)

        return matches

    def soft_delete(self, id: str) -> bool:
        with self.lock, self.products.lock:
            if not super().soft_delete(id):
                return False
            self.products.clear_supplier(id)
        return True
