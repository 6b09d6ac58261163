"""Composition root: builds storage, repositories and services once per process."""

from dataclasses import dataclass
from typing import Optional

import structlog

from erp_console.application.services.auth_service import AuthService
from erp_console.application.services.order_service import OrderWorkflow
from erp_console.config import Settings
from erp_console.infrastructure.repositories.client_repository import (
    CollectionClientRepository,
    CollectionSupplierRepository,
)
from erp_console.infrastructure.repositories.order_repository import (
    CollectionOrderRepository,
    CollectionTransactionRepository,
)
from erp_console.infrastructure.repositories.product_repository import (
    CollectionCategoryRepository,
    CollectionProductRepository,
)
from erp_console.infrastructure.repositories.user_repository import CollectionUserRepository
from erp_console.infrastructure.seed import demo_data
from erp_console.infrastructure.storage import LocalStorage, build_storage

logger = structlog.get_logger(__name__)


@dataclass
class Container:
    storage: LocalStorage
    products: CollectionProductRepository
    categories: CollectionCategoryRepository
    clients: CollectionClientRepository
    suppliers: CollectionSupplierRepository
    orders: CollectionOrderRepository
    transactions: CollectionTransactionRepository
    users: CollectionUserRepository
    order_workflow: OrderWorkflow
    auth: AuthService


def build_container(settings: Settings, storage: Optional[LocalStorage] = None) -> Container:
    storage = storage if storage is not None else build_storage(settings.STORAGE_URL)
    seed = demo_data() if settings.SEED_DEMO_DATA else {}

    products = CollectionProductRepository(storage, seed.get("products", ()))
    categories = CollectionCategoryRepository(storage, products, seed.get("categories", ()))
    suppliers = CollectionSupplierRepository(storage, products, seed.get("suppliers", ()))
    clients = CollectionClientRepository(storage, seed.get("clients", ()))
    orders = CollectionOrderRepository(storage, seed.get("orders", ()))
    transactions = CollectionTransactionRepository(storage, seed.get("transactions", ()))
    users = CollectionUserRepository(storage, seed.get("users", ()))

    container = Container(
        storage=storage,
        products=products,
        categories=categories,
        clients=clients,
        suppliers=suppliers,
        orders=orders,
        transactions=transactions,
        users=users,
        order_workflow=OrderWorkflow(orders, products, clients),
        auth=AuthService(users, storage),
    )
    logger.info("Container ready", collections=storage.keys())
    return container
