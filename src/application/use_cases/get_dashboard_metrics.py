"""Get Dashboard Metrics Use Case."""

from datetime import datetime

from src.application.dto.responses import DashboardMetricsResponse
from src.config import get_logger
from src.core.entities.reports import DashboardMetrics
from src.core.services.stock_aggregation import StockAggregationService

logger = get_logger(__name__)


class GetDashboardMetricsUseCase:
    """Counters for the tenant dashboard."""

    def __init__(self, aggregation_service: StockAggregationService | None = None):
        self._service = aggregation_service

    async def _get_service(self) -> StockAggregationService:
        if self._service is None:
            from src.application.services import get_stock_aggregation_service

            self._service = await get_stock_aggregation_service()
        return self._service

    async def execute(self, tenant_id: int, now: datetime | None = None) -> DashboardMetrics:
        """Execute dashboard metrics use case."""
        service = await self._get_service()
        metrics = await service.dashboard_metrics(tenant_id, now=now)
        logger.info(
            "dashboard_metrics_served",
            tenant_id=tenant_id,
            critical_items=metrics.critical_items,
        )
        return metrics

    def to_response(self, metrics: DashboardMetrics) -> DashboardMetricsResponse:
        """Convert metrics to API response."""
        return DashboardMetricsResponse.model_validate(metrics)
