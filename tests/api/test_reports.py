"""API tests for dashboard and financial report endpoints."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import get_dashboard_metrics_use_case, get_financial_report_use_case
from src.api.main import app
from src.application.use_cases import GetDashboardMetricsUseCase, GetFinancialReportUseCase
from src.core.entities.reports import DashboardMetrics, FinancialReport

HEADERS = {"X-Principal-Id": "7", "X-Tenant-Id": "4"}


@pytest.fixture
def mock_dashboard_use_case():
    uc = AsyncMock(spec=GetDashboardMetricsUseCase)
    metrics = DashboardMetrics(total_materials=5, entries_today=2, exits_today=3, critical_items=1)
    uc.execute.return_value = metrics
    uc.to_response.return_value = GetDashboardMetricsUseCase().to_response(metrics)
    return uc


@pytest.fixture
def mock_report_use_case():
    uc = AsyncMock(spec=GetFinancialReportUseCase)
    report = FinancialReport(total_stock_value=Decimal("250.00"), total_items=2)
    uc.execute.return_value = report
    uc.to_response.return_value = GetFinancialReportUseCase().to_response(report)
    return uc


@pytest.fixture
async def reports_client(mock_dashboard_use_case, mock_report_use_case):
    app.dependency_overrides[get_dashboard_metrics_use_case] = lambda: mock_dashboard_use_case
    app.dependency_overrides[get_financial_report_use_case] = lambda: mock_report_use_case
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_dashboard_metrics_use_case, None)
    app.dependency_overrides.pop(get_financial_report_use_case, None)


class TestReportsAPI:
    async def test_dashboard_metrics(self, reports_client: AsyncClient, mock_dashboard_use_case):
        response = await reports_client.get("/api/dashboard/metrics", headers=HEADERS)
        assert response.status_code == 200
        body = response.json()
        assert body["total_materials"] == 5
        assert body["exits_today"] == 3
        mock_dashboard_use_case.execute.assert_awaited_once_with(4)

    async def test_financial_report(self, reports_client: AsyncClient, mock_report_use_case):
        response = await reports_client.get("/api/reports/financial", headers=HEADERS)
        assert response.status_code == 200
        assert Decimal(response.json()["total_stock_value"]) == Decimal("250.00")
        mock_report_use_case.execute.assert_awaited_once_with(4)

    async def test_reports_require_principal(self, reports_client: AsyncClient):
        response = await reports_client.get("/api/reports/financial")
        assert response.status_code == 401
