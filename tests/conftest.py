"""Pytest configuration and fixtures."""

import os

os.environ.update(
    STORAGE_URL="memory://",
    SEED_DEMO_DATA="false",
    LOGIN_DELAY_SECONDS="0",
    SECRET_KEY="test-secret",
    ENVIRONMENT="test",
)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from erp_console.application.services.auth_service import hash_password  # noqa: E402
from erp_console.bootstrap import Container, build_container  # noqa: E402
from erp_console.config import get_settings  # noqa: E402
from erp_console.infrastructure.storage import MemoryStorage  # noqa: E402
from erp_console.main import create_app  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def container(storage: MemoryStorage) -> Container:
    """Empty in-memory container."""
    return build_container(get_settings(), storage)


@pytest.fixture
def seeded_container() -> Container:
    """In-memory container loaded with the demo data."""
    settings = get_settings().model_copy(update={"SEED_DEMO_DATA": True})
    return build_container(settings, MemoryStorage())


@pytest.fixture
def address() -> dict:
    return {
        "street": "Rua das Flores",
        "number": "42",
        "neighborhood": "Centro",
        "city": "Campinas",
        "state": "SP",
        "zip_code": "13010-000",
    }


@pytest.fixture
def category(container: Container):
    return container.categories.create({"name": "Electronics", "description": "Devices"})


@pytest.fixture
def make_product(container: Container, category):
    def make(**overrides):
        data = {
            "name": "Monitor",
            "description": "24 inch monitor",
            "sku": "MON-001",
            "price": 100.0,
            "cost": 60.0,
            "stock_quantity": 10,
            "category_id": category.id,
        }
        data.update(overrides)
        return container.products.create(data)

    return make


@pytest.fixture
def make_client(container: Container, address: dict):
    def make(**overrides):
        data = {
            "name": "Maria Souza",
            "email": "maria@example.com",
            "phone": "11 99999-0000",
            "document": "123.456.789-00",
            "document_type": "cpf",
            "address": address,
        }
        data.update(overrides)
        return container.clients.create(data)

    return make


@pytest.fixture
def make_supplier(container: Container, address: dict):
    def make(**overrides):
        data = {
            "name": "Tech Distribuidora",
            "product": "Electronics",
            "contact_name": "Carlos",
            "email": "carlos@tech.example.com",
            "phone": "11 3333-0000",
            "document": "12.345.678/0001-90",
            "address": address,
        }
        data.update(overrides)
        return container.suppliers.create(data)

    return make


@pytest.fixture
def client_entity(make_client):
    return make_client()


@pytest.fixture
def order_data(client_entity):
    """Builds an order payload for (product, quantity) pairs with caller-computed item totals."""

    def build(*lines, **overrides):
        data = {
            "client_id": client_entity.id,
            "user_id": "user_1",
            "items": [
                {
                    "product_id": product.id,
                    "quantity": quantity,
                    "unit_price": product.price,
                    "total": product.price * quantity,
                }
                for product, quantity in lines
            ],
        }
        data.update(overrides)
        return data

    return build


@pytest.fixture
def api(container: Container):
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(container: Container, api: TestClient) -> dict:
    """Bearer header of a freshly seeded admin."""
    container.users.create(
        {"name": "Admin", "email": "admin@test.com", "password_hash": hash_password("secret123"), "role": "admin"}
    )
    response = api.post("/api/auth/login", json={"email": "admin@test.com", "password": "secret123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
