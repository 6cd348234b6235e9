"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from src.application.dto.requests import PostEntryRequest, PostExitRequest
from src.application.dto.responses import (
    DashboardMetricsResponse,
    ErrorResponse,
    FinancialReportResponse,
    HealthResponse,
    MovementResponse,
)
from src.application.services import get_stock_aggregation_service, reset_services
from src.application.use_cases import (
    GetDashboardMetricsUseCase,
    GetFinancialReportUseCase,
    PostMovementUseCase,
    post_movement,
)

__all__ = [
    # Requests
    "PostEntryRequest",
    "PostExitRequest",
    # Responses
    "MovementResponse",
    "DashboardMetricsResponse",
    "FinancialReportResponse",
    "HealthResponse",
    "ErrorResponse",
    # Services
    "get_stock_aggregation_service",
    "reset_services",
    # Use cases
    "PostMovementUseCase",
    "post_movement",
    "GetDashboardMetricsUseCase",
    "GetFinancialReportUseCase",
]
