"""
Stock aggregation service.

Derives the dashboard counters and the financial valuation of a tenant from
the current balances and the movement history. Pure reads: nothing is cached,
so two calls without writes in between return identical results.
"""

from datetime import UTC, datetime, time, timedelta
from decimal import Decimal

from src.config import get_logger
from src.config.settings import LedgerSettings
from src.core.entities.movement import MovementDirection
from src.core.entities.reports import DashboardMetrics, FinancialReport, StockValuation
from src.core.interfaces.material_store import IMaterialStore
from src.core.interfaces.movement_store import IMovementStore
from src.core.services.tenant_guard import require_tenant

logger = get_logger(__name__)


class StockAggregationService:
    """Dashboard metrics and financial report for one tenant at a time."""

    def __init__(
        self,
        material_store: IMaterialStore,
        movement_store: IMovementStore,
        ledger_settings: LedgerSettings | None = None,
    ):
        self._materials = material_store
        self._movements = movement_store
        self._settings = ledger_settings or LedgerSettings()

    def day_bounds(self, tenant_id: int, now: datetime | None = None) -> tuple[datetime, datetime]:
        """
        UTC bounds of the tenant's current local day.

        Returns:
            (start, end) with start = local midnight, end = next local midnight
        """
        zone = self._settings.zone_for(tenant_id)
        now = now or datetime.now(UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)

        local_day = now.astimezone(zone).date()
        start = datetime.combine(local_day, time.min, tzinfo=zone)
        end = datetime.combine(local_day + timedelta(days=1), time.min, tzinfo=zone)
        return start.astimezone(UTC), end.astimezone(UTC)

    async def dashboard_metrics(
        self, tenant_id: int, now: datetime | None = None
    ) -> DashboardMetrics:
        """Count materials, today's entries and exits, and critical items."""
        tenant_id = require_tenant(tenant_id)
        start, end = self.day_bounds(tenant_id, now)

        metrics = DashboardMetrics(
            total_materials=await self._materials.count(tenant_id),
            entries_today=await self._movements.count_between(
                tenant_id, MovementDirection.ENTRY, start, end
            ),
            exits_today=await self._movements.count_between(
                tenant_id, MovementDirection.EXIT, start, end
            ),
            critical_items=await self._materials.count_critical(tenant_id),
            day_start=start,
            day_end=end,
        )

        logger.debug(
            "dashboard_metrics_computed",
            tenant_id=tenant_id,
            total_materials=metrics.total_materials,
            entries_today=metrics.entries_today,
            exits_today=metrics.exits_today,
            critical_items=metrics.critical_items,
        )
        return metrics

    async def financial_report(self, tenant_id: int) -> FinancialReport:
        """Value every material at unit_price * current_stock."""
        tenant_id = require_tenant(tenant_id)
        threshold = self._settings.high_value_threshold
        low_factor = self._settings.low_stock_factor

        materials = await self._materials.list_with_category(tenant_id)

        stock_items: list[StockValuation] = []
        total = Decimal("0")
        high_value = 0
        for material in materials:
            value = material.total_value
            total += value
            if value > threshold:
                high_value += 1
            stock_items.append(
                StockValuation(
                    material=material,
                    total_value=value,
                    status=material.stock_status(low_factor),
                )
            )

        logger.debug(
            "financial_report_computed",
            tenant_id=tenant_id,
            total_items=len(stock_items),
            total_stock_value=str(total),
        )
        return FinancialReport(
            total_stock_value=total,
            total_items=len(stock_items),
            high_value_items=high_value,
            high_value_threshold=threshold,
            stock_items=stock_items,
        )
