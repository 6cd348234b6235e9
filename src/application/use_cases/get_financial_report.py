"""Get Financial Report Use Case."""

from src.application.dto.responses import (
    FinancialReportResponse,
    MaterialWithCategoryResponse,
    StockValuationResponse,
)
from src.config import get_logger
from src.core.entities.reports import FinancialReport
from src.core.services.stock_aggregation import StockAggregationService

logger = get_logger(__name__)


class GetFinancialReportUseCase:
    """Valuation of the current stock of a tenant."""

    def __init__(self, aggregation_service: StockAggregationService | None = None):
        self._service = aggregation_service

    async def _get_service(self) -> StockAggregationService:
        if self._service is None:
            from src.application.services import get_stock_aggregation_service

            self._service = await get_stock_aggregation_service()
        return self._service

    async def execute(self, tenant_id: int) -> FinancialReport:
        """Execute financial report use case."""
        service = await self._get_service()
        report = await service.financial_report(tenant_id)
        logger.info(
            "financial_report_served",
            tenant_id=tenant_id,
            total_items=report.total_items,
            high_value_items=report.high_value_items,
        )
        return report

    def to_response(self, report: FinancialReport) -> FinancialReportResponse:
        """Convert report to API response.

        Each nested material carries the status of its report row.
        """
        return FinancialReportResponse(
            total_stock_value=report.total_stock_value,
            total_items=report.total_items,
            high_value_items=report.high_value_items,
            high_value_threshold=report.high_value_threshold,
            stock_items=[
                StockValuationResponse(
                    material=MaterialWithCategoryResponse.from_material(row.material, row.status),
                    total_value=row.total_value,
                    status=row.status,
                )
                for row in report.stock_items
            ],
        )
