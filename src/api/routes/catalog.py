"""
Catalog endpoints.

Tenant-scoped CRUD for categories, suppliers, employees, third parties and
materials. Rows of another tenant answer 404 exactly like missing rows.
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.dependencies import (
    get_cat_store,
    get_emp_store,
    get_mat_store,
    get_sup_store,
    get_tenant_id,
    get_tp_store,
)
from src.application.dto.requests import (
    CreateCategoryRequest,
    CreateEmployeeRequest,
    CreateMaterialRequest,
    CreateSupplierRequest,
    CreateThirdPartyRequest,
    UpdateCategoryRequest,
    UpdateEmployeeRequest,
    UpdateMaterialRequest,
    UpdateSupplierRequest,
    UpdateThirdPartyRequest,
)
from src.application.dto.responses import (
    CategoryResponse,
    EmployeeResponse,
    ErrorResponse,
    MaterialResponse,
    MaterialWithCategoryResponse,
    SupplierResponse,
    ThirdPartyResponse,
)
from src.config import get_settings
from src.core.entities.material import Material, MaterialWithCategory
from src.core.exceptions import NotFoundError
from src.core.interfaces.catalog_store import ICatalogStore
from src.infrastructure.storage.sqlite import SQLiteMaterialStore

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def build_crud_router(
    prefix: str,
    entity: str,
    store_dependency: Callable[..., Any],
    create_model: type[BaseModel],
    update_model: type[BaseModel],
    response_model: type[BaseModel],
    router: APIRouter | None = None,
    to_response: Callable[[Any], BaseModel] | None = None,
) -> APIRouter:
    """Register list/get/create/update/delete routes for one catalog entity."""
    router = router or APIRouter(prefix=prefix, tags=["catalog"])
    to_response = to_response or response_model.model_validate

    @router.get("", response_model=list[response_model], responses=ERROR_RESPONSES)
    async def list_entities(
        tenant_id: int = Depends(get_tenant_id),
        store: ICatalogStore = Depends(store_dependency),
    ) -> list[BaseModel]:
        rows = await store.list_all(tenant_id)
        return [to_response(row) for row in rows]

    @router.get("/{entity_id}", response_model=response_model, responses=ERROR_RESPONSES)
    async def get_entity(
        entity_id: int,
        tenant_id: int = Depends(get_tenant_id),
        store: ICatalogStore = Depends(store_dependency),
    ) -> BaseModel:
        row = await store.get(entity_id, tenant_id)
        if row is None:
            raise NotFoundError(entity, entity_id)
        return to_response(row)

    @router.post(
        "",
        response_model=response_model,
        status_code=status.HTTP_201_CREATED,
        responses=ERROR_RESPONSES,
    )
    async def create_entity(
        payload: create_model,  # type: ignore[valid-type]
        tenant_id: int = Depends(get_tenant_id),
        store: ICatalogStore = Depends(store_dependency),
    ) -> BaseModel:
        row = await store.create(payload, tenant_id)
        return to_response(row)

    @router.put("/{entity_id}", response_model=response_model, responses=ERROR_RESPONSES)
    async def update_entity(
        entity_id: int,
        payload: update_model,  # type: ignore[valid-type]
        tenant_id: int = Depends(get_tenant_id),
        store: ICatalogStore = Depends(store_dependency),
    ) -> BaseModel:
        row = await store.update(entity_id, payload, tenant_id)
        if row is None:
            raise NotFoundError(entity, entity_id)
        return to_response(row)

    @router.delete(
        "/{entity_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses=ERROR_RESPONSES,
    )
    async def delete_entity(
        entity_id: int,
        tenant_id: int = Depends(get_tenant_id),
        store: ICatalogStore = Depends(store_dependency),
    ) -> None:
        if not await store.delete(entity_id, tenant_id):
            raise NotFoundError(entity, entity_id)

    return router


categories_router = build_crud_router(
    "/api/categories",
    "category",
    get_cat_store,
    CreateCategoryRequest,
    UpdateCategoryRequest,
    CategoryResponse,
)

suppliers_router = build_crud_router(
    "/api/suppliers",
    "supplier",
    get_sup_store,
    CreateSupplierRequest,
    UpdateSupplierRequest,
    SupplierResponse,
)

employees_router = build_crud_router(
    "/api/employees",
    "employee",
    get_emp_store,
    CreateEmployeeRequest,
    UpdateEmployeeRequest,
    EmployeeResponse,
)

third_parties_router = build_crud_router(
    "/api/third-parties",
    "third_party",
    get_tp_store,
    CreateThirdPartyRequest,
    UpdateThirdPartyRequest,
    ThirdPartyResponse,
)

materials_router = APIRouter(prefix="/api/materials", tags=["catalog"])


def material_response(material: Material) -> MaterialResponse:
    """Material response classified with the configured low-stock factor."""
    low_factor = get_settings().ledger.low_stock_factor
    response_cls = (
        MaterialWithCategoryResponse
        if isinstance(material, MaterialWithCategory)
        else MaterialResponse
    )
    return response_cls.from_material(material, material.stock_status(low_factor))


# Registered before /{entity_id} so the literal path wins
@materials_router.get(
    "/with-category",
    response_model=list[MaterialWithCategoryResponse],
    responses=ERROR_RESPONSES,
)
async def list_materials_with_category(
    tenant_id: int = Depends(get_tenant_id),
    store: SQLiteMaterialStore = Depends(get_mat_store),
) -> list[MaterialWithCategoryResponse]:
    """List materials joined with their category, if any."""
    rows = await store.list_with_category(tenant_id)
    return [material_response(row) for row in rows]


build_crud_router(
    "/api/materials",
    "material",
    get_mat_store,
    CreateMaterialRequest,
    UpdateMaterialRequest,
    MaterialResponse,
    router=materials_router,
    to_response=material_response,
)

routers = [
    categories_router,
    suppliers_router,
    employees_router,
    third_parties_router,
    materials_router,
]
