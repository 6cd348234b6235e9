"""Dashboard and financial report endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    get_dashboard_metrics_use_case,
    get_financial_report_use_case,
    get_tenant_id,
)
from src.application.dto.responses import (
    DashboardMetricsResponse,
    ErrorResponse,
    FinancialReportResponse,
)
from src.application.use_cases.get_dashboard_metrics import GetDashboardMetricsUseCase
from src.application.use_cases.get_financial_report import GetFinancialReportUseCase

router = APIRouter(prefix="/api", tags=["reports"])


@router.get(
    "/dashboard/metrics",
    response_model=DashboardMetricsResponse,
    responses={401: {"model": ErrorResponse}},
)
async def dashboard_metrics(
    tenant_id: int = Depends(get_tenant_id),
    use_case: GetDashboardMetricsUseCase = Depends(get_dashboard_metrics_use_case),
) -> DashboardMetricsResponse:
    """Material count, today's entries and exits, critical items."""
    metrics = await use_case.execute(tenant_id)
    return use_case.to_response(metrics)


@router.get(
    "/reports/financial",
    response_model=FinancialReportResponse,
    responses={401: {"model": ErrorResponse}},
)
async def financial_report(
    tenant_id: int = Depends(get_tenant_id),
    use_case: GetFinancialReportUseCase = Depends(get_financial_report_use_case),
) -> FinancialReportResponse:
    """Stock valuation per material with totals."""
    report = await use_case.execute(tenant_id)
    return use_case.to_response(report)
