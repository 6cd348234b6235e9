"""
Dependency injection container for FastAPI.

Provides the caller's tenant scope, stores and use cases to route handlers.
"""

from fastapi import Depends, Header

from src.application.use_cases import (
    GetDashboardMetricsUseCase,
    GetFinancialReportUseCase,
    PostMovementUseCase,
)
from src.config import bind_request_context
from src.core.entities.tenant import Principal
from src.core.services.tenant_guard import TenantScopeGuard
from src.infrastructure.storage.sqlite import (
    SQLiteCategoryStore,
    SQLiteEmployeeStore,
    SQLiteMaterialStore,
    SQLiteMovementStore,
    SQLiteSupplierStore,
    SQLiteThirdPartyStore,
    get_category_store,
    get_employee_store,
    get_material_store,
    get_movement_store,
    get_supplier_store,
    get_third_party_store,
)


# Principal and tenant scope
def get_principal(
    x_principal_id: int | None = Header(default=None),
    x_principal_role: str | None = Header(default=None),
    x_tenant_id: int | None = Header(default=None),
) -> Principal | None:
    """
    Build the principal forwarded by the authenticating gateway.

    Returns None when the request carries no principal.
    """
    if x_principal_id is None:
        return None
    return Principal(
        id=x_principal_id,
        role=x_principal_role or "user",
        tenant_id=x_tenant_id,
    )


def get_tenant_id(principal: Principal | None = Depends(get_principal)) -> int:
    """Resolve the caller's tenant; AuthorizationError becomes a 401."""
    tenant_id = TenantScopeGuard().resolve(principal)
    bind_request_context(tenant_id=tenant_id, principal_id=principal.id)
    return tenant_id


# Store dependencies
async def get_cat_store() -> SQLiteCategoryStore:
    """Get category store."""
    return await get_category_store()


async def get_sup_store() -> SQLiteSupplierStore:
    """Get supplier store."""
    return await get_supplier_store()


async def get_emp_store() -> SQLiteEmployeeStore:
    """Get employee store."""
    return await get_employee_store()


async def get_tp_store() -> SQLiteThirdPartyStore:
    """Get third party store."""
    return await get_third_party_store()


async def get_mat_store() -> SQLiteMaterialStore:
    """Get material store."""
    return await get_material_store()


async def get_mov_store() -> SQLiteMovementStore:
    """Get movement store."""
    return await get_movement_store()


# Use case dependencies
def get_post_movement_use_case() -> PostMovementUseCase:
    """Get post movement use case."""
    return PostMovementUseCase()


def get_dashboard_metrics_use_case() -> GetDashboardMetricsUseCase:
    """Get dashboard metrics use case."""
    return GetDashboardMetricsUseCase()


def get_financial_report_use_case() -> GetFinancialReportUseCase:
    """Get financial report use case."""
    return GetFinancialReportUseCase()
