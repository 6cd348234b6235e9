"""API tests for catalog endpoints."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import get_mat_store, get_sup_store
from src.api.main import app
from src.config import reset_settings
from src.core.entities.catalog import Category, Supplier
from src.core.entities.material import Material, MaterialWithCategory
from src.core.exceptions import ReferenceInUseError, ValidationError

HEADERS = {"X-Principal-Id": "7", "X-Tenant-Id": "1"}
NOW = datetime(2024, 5, 2, 12, tzinfo=UTC)


@pytest.fixture
def narrow_low_factor(monkeypatch):
    """Low-stock factor 1.05: a balance of 11 against 10 is adequate."""
    monkeypatch.setenv("LEDGER_LOW_STOCK_FACTOR", "1.05")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def mock_supplier_store():
    store = AsyncMock()
    store.list_all.return_value = [Supplier(id=1, name="Acme", tenant_id=1, created_at=NOW)]
    store.get.return_value = None
    store.create.return_value = Supplier(id=2, name="Beta", tenant_id=1, created_at=NOW)
    store.update.return_value = None
    store.delete.return_value = True
    return store


@pytest.fixture
def mock_material_store():
    store = AsyncMock()
    material = Material(
        id=3, name="Valve", unit="UN", current_stock=11, minimum_stock=10,
        unit_price=Decimal("4.00"), tenant_id=1, created_at=NOW,
    )
    store.get.return_value = material
    store.list_with_category.return_value = [
        MaterialWithCategory(
            **material.model_dump(),
            category=Category(id=9, name="Plumbing", tenant_id=1, created_at=NOW),
        )
    ]
    return store


@pytest.fixture
async def catalog_client(mock_supplier_store, mock_material_store):
    app.dependency_overrides[get_sup_store] = lambda: mock_supplier_store
    app.dependency_overrides[get_mat_store] = lambda: mock_material_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_sup_store, None)
    app.dependency_overrides.pop(get_mat_store, None)


class TestCatalogAPI:
    async def test_requires_principal(self, catalog_client: AsyncClient, mock_supplier_store):
        response = await catalog_client.get("/api/suppliers")
        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTHORIZATION_ERROR"
        mock_supplier_store.list_all.assert_not_awaited()

    async def test_principal_without_tenant(self, catalog_client: AsyncClient):
        response = await catalog_client.get("/api/suppliers", headers={"X-Principal-Id": "7"})
        assert response.status_code == 401

    async def test_list_is_scoped_to_header_tenant(
        self, catalog_client: AsyncClient, mock_supplier_store
    ):
        response = await catalog_client.get("/api/suppliers", headers=HEADERS)
        assert response.status_code == 200
        assert response.json()[0]["name"] == "Acme"
        mock_supplier_store.list_all.assert_awaited_once_with(1)

    async def test_create_returns_201(self, catalog_client: AsyncClient, mock_supplier_store):
        response = await catalog_client.post(
            "/api/suppliers", json={"name": "Beta"}, headers=HEADERS
        )
        assert response.status_code == 201
        assert response.json()["id"] == 2

    async def test_create_blank_name_is_400(self, catalog_client: AsyncClient):
        response = await catalog_client.post("/api/suppliers", json={"name": ""}, headers=HEADERS)
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_store_validation_error_is_400(
        self, catalog_client: AsyncClient, mock_supplier_store
    ):
        mock_supplier_store.create.side_effect = ValidationError("name", "must not be blank")
        response = await catalog_client.post(
            "/api/suppliers", json={"name": " "}, headers=HEADERS
        )
        assert response.status_code == 400

    async def test_missing_row_is_404(self, catalog_client: AsyncClient):
        response = await catalog_client.get("/api/suppliers/99", headers=HEADERS)
        assert response.status_code == 404
        assert response.json()["error_code"] == "SUPPLIER_NOT_FOUND"

        response = await catalog_client.put(
            "/api/suppliers/99", json={"phone": "1"}, headers=HEADERS
        )
        assert response.status_code == 404

    async def test_delete(self, catalog_client: AsyncClient, mock_supplier_store):
        response = await catalog_client.delete("/api/suppliers/1", headers=HEADERS)
        assert response.status_code == 204

        mock_supplier_store.delete.return_value = False
        response = await catalog_client.delete("/api/suppliers/1", headers=HEADERS)
        assert response.status_code == 404

    async def test_delete_referenced_is_409(
        self, catalog_client: AsyncClient, mock_supplier_store
    ):
        mock_supplier_store.delete.side_effect = ReferenceInUseError("supplier", 1, "movements")
        response = await catalog_client.delete("/api/suppliers/1", headers=HEADERS)
        assert response.status_code == 409
        assert response.json()["error_code"] == "REFERENCE_IN_USE"


class TestMaterialsAPI:
    async def test_material_carries_status_and_value(self, catalog_client: AsyncClient):
        response = await catalog_client.get("/api/materials/3", headers=HEADERS)
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "low"
        assert Decimal(body["total_value"]) == Decimal("44.00")

    async def test_with_category(self, catalog_client: AsyncClient, mock_material_store):
        response = await catalog_client.get("/api/materials/with-category", headers=HEADERS)
        assert response.status_code == 200
        assert response.json()[0]["category"]["name"] == "Plumbing"
        mock_material_store.list_with_category.assert_awaited_once_with(1)
        mock_material_store.get.assert_not_awaited()

    async def test_status_uses_configured_low_factor(
        self, narrow_low_factor, catalog_client: AsyncClient
    ):
        response = await catalog_client.get("/api/materials/3", headers=HEADERS)
        assert response.json()["status"] == "adequate"

        response = await catalog_client.get("/api/materials/with-category", headers=HEADERS)
        assert response.json()[0]["status"] == "adequate"
