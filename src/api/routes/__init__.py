"""API route modules."""

from src.api.routes.catalog import (
    categories_router,
    employees_router,
    materials_router,
    suppliers_router,
    third_parties_router,
)
from src.api.routes.health import router as health_router
from src.api.routes.movements import router as movements_router
from src.api.routes.reports import router as reports_router

__all__ = [
    "health_router",
    "categories_router",
    "suppliers_router",
    "employees_router",
    "third_parties_router",
    "materials_router",
    "movements_router",
    "reports_router",
]
