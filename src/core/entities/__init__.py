"""Domain entities."""

from src.core.entities.catalog import (
    Category,
    Employee,
    NamedEntity,
    Supplier,
    TenantOwned,
    ThirdParty,
)
from src.core.entities.material import (
    LOW_STOCK_FACTOR,
    MAX_STOCK,
    Material,
    MaterialWithCategory,
    StockStatus,
    classify_stock,
)
from src.core.entities.movement import (
    MAX_QUANTITY,
    EntryOrigin,
    ExitDestination,
    Movement,
    MovementDirection,
    MovementItem,
)
from src.core.entities.reports import DashboardMetrics, FinancialReport, StockValuation
from src.core.entities.tenant import Principal

__all__ = [
    # Tenant
    "Principal",
    # Catalog
    "TenantOwned",
    "NamedEntity",
    "Category",
    "Supplier",
    "Employee",
    "ThirdParty",
    # Material
    "Material",
    "MaterialWithCategory",
    "StockStatus",
    "classify_stock",
    "LOW_STOCK_FACTOR",
    "MAX_STOCK",
    # Movement
    "MovementDirection",
    "EntryOrigin",
    "ExitDestination",
    "Movement",
    "MovementItem",
    "MAX_QUANTITY",
    # Reports
    "DashboardMetrics",
    "FinancialReport",
    "StockValuation",
]
