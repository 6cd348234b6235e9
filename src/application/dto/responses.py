"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities.material import Material, StockStatus
from src.core.entities.movement import EntryOrigin, ExitDestination, MovementDirection


class EntityResponse(BaseModel):
    """Fields shared by every tenant-scoped row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant_id: int
    created_at: datetime


# --- Catalog ---


class CategoryResponse(EntityResponse):
    """Category response DTO."""

    name: str
    description: str | None = None


class SupplierResponse(EntityResponse):
    """Supplier response DTO."""

    name: str
    contact: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None


class EmployeeResponse(EntityResponse):
    """Employee response DTO."""

    name: str
    department: str | None = None
    position: str | None = None
    email: str | None = None
    phone: str | None = None


class ThirdPartyResponse(EntityResponse):
    """Third party response DTO."""

    name: str
    document: str | None = None
    document_type: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    is_active: bool


class MaterialResponse(EntityResponse):
    """Material response DTO with derived stock status."""

    name: str
    description: str | None = None
    category_id: int | None = None
    unit: str
    current_stock: int
    minimum_stock: int
    unit_price: Decimal
    total_value: Decimal = Field(..., description="unit_price * current_stock")
    status: StockStatus = Field(..., description="critical, low or adequate")

    @classmethod
    def from_material(cls, material: Material, status: StockStatus) -> "MaterialResponse":
        """Build from a material and the status classified for it."""
        return cls.model_validate(
            {**material.model_dump(), "total_value": material.total_value, "status": status}
        )


class MaterialWithCategoryResponse(MaterialResponse):
    """Material joined with its category, if any."""

    category: CategoryResponse | None = None


# --- Movements ---


class MovementItemResponse(BaseModel):
    """Movement line response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    material_id: int
    quantity: int
    unit_price: Decimal | None = None
    total_price: Decimal | None = None
    purpose: str | None = None


class MovementResponse(BaseModel):
    """Posted movement response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    direction: MovementDirection
    occurred_at: datetime
    origin: EntryOrigin | None = None
    destination: ExitDestination | None = None
    supplier_id: int | None = None
    employee_id: int | None = None
    third_party_id: int | None = None
    notes: str | None = None
    tenant_id: int
    created_at: datetime
    total_quantity: int
    total_value: Decimal
    items: list[MovementItemResponse]


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    limit: int
    offset: int
    has_more: bool


class MovementListResponse(PaginatedResponse):
    """Page of movements, newest first."""

    movements: list[MovementResponse]


# --- Reports ---


class DashboardMetricsResponse(BaseModel):
    """Dashboard counters of the caller's tenant."""

    model_config = ConfigDict(from_attributes=True)

    total_materials: int
    entries_today: int
    exits_today: int
    critical_items: int
    day_start: datetime | None = None
    day_end: datetime | None = None


class StockValuationResponse(BaseModel):
    """One material of the financial report."""

    model_config = ConfigDict(from_attributes=True)

    material: MaterialWithCategoryResponse
    total_value: Decimal
    status: StockStatus


class FinancialReportResponse(BaseModel):
    """Financial valuation of the current stock."""

    model_config = ConfigDict(from_attributes=True)

    total_stock_value: Decimal
    total_items: int
    high_value_items: int
    high_value_threshold: Decimal
    stock_items: list[StockValuationResponse]


# --- Health / errors ---


class ComponentHealthResponse(BaseModel):
    """Health of one backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. MATERIAL_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
