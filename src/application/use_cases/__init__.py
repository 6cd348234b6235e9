"""Application use cases."""

from src.application.use_cases.get_dashboard_metrics import GetDashboardMetricsUseCase
from src.application.use_cases.get_financial_report import GetFinancialReportUseCase
from src.application.use_cases.post_movement import PostMovementUseCase, post_movement

__all__ = [
    "PostMovementUseCase",
    "post_movement",
    "GetDashboardMetricsUseCase",
    "GetFinancialReportUseCase",
]
