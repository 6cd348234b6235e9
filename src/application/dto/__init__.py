"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    CreateCategoryRequest,
    CreateEmployeeRequest,
    CreateMaterialRequest,
    CreateSupplierRequest,
    CreateThirdPartyRequest,
    EntryItemRequest,
    ExitItemRequest,
    PostEntryRequest,
    PostExitRequest,
    UpdateCategoryRequest,
    UpdateEmployeeRequest,
    UpdateMaterialRequest,
    UpdateSupplierRequest,
    UpdateThirdPartyRequest,
)
from src.application.dto.responses import (
    CategoryResponse,
    ComponentHealthResponse,
    DashboardMetricsResponse,
    EmployeeResponse,
    ErrorResponse,
    FinancialReportResponse,
    HealthResponse,
    MaterialResponse,
    MaterialWithCategoryResponse,
    MovementItemResponse,
    MovementListResponse,
    MovementResponse,
    PaginatedResponse,
    StockValuationResponse,
    SupplierResponse,
    ThirdPartyResponse,
)

__all__ = [
    # Requests
    "CreateCategoryRequest",
    "UpdateCategoryRequest",
    "CreateSupplierRequest",
    "UpdateSupplierRequest",
    "CreateEmployeeRequest",
    "UpdateEmployeeRequest",
    "CreateThirdPartyRequest",
    "UpdateThirdPartyRequest",
    "CreateMaterialRequest",
    "UpdateMaterialRequest",
    "EntryItemRequest",
    "ExitItemRequest",
    "PostEntryRequest",
    "PostExitRequest",
    # Responses
    "CategoryResponse",
    "SupplierResponse",
    "EmployeeResponse",
    "ThirdPartyResponse",
    "MaterialResponse",
    "MaterialWithCategoryResponse",
    "MovementItemResponse",
    "MovementResponse",
    "MovementListResponse",
    "PaginatedResponse",
    "DashboardMetricsResponse",
    "StockValuationResponse",
    "FinancialReportResponse",
    "ComponentHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
