"""Tests for StockAggregationService."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.config.settings import LedgerSettings
from src.core.entities.material import MaterialWithCategory, StockStatus
from src.core.entities.movement import MovementDirection
from src.core.exceptions import AuthorizationError
from src.core.services.stock_aggregation import StockAggregationService


def make_material(**overrides) -> MaterialWithCategory:
    data = {"id": 1, "name": "Steel bolt", "unit": "UN", "tenant_id": 1}
    data.update(overrides)
    return MaterialWithCategory(**data)


@pytest.fixture
def material_store():
    store = AsyncMock()
    store.count.return_value = 3
    store.count_critical.return_value = 1
    store.list_with_category.return_value = []
    return store


@pytest.fixture
def movement_store():
    store = AsyncMock()
    store.count_between.side_effect = lambda tenant_id, direction, start, end: (
        2 if direction == MovementDirection.ENTRY else 1
    )
    return store


@pytest.fixture
def service(material_store, movement_store):
    return StockAggregationService(
        material_store,
        movement_store,
        LedgerSettings(timezone="UTC", tenant_timezones={7: "America/Sao_Paulo"}),
    )


class TestDayBounds:
    def test_utc_tenant(self, service):
        now = datetime(2024, 3, 10, 15, 30, tzinfo=UTC)
        start, end = service.day_bounds(1, now)
        assert start == datetime(2024, 3, 10, tzinfo=UTC)
        assert end == datetime(2024, 3, 11, tzinfo=UTC)

    def test_zoned_tenant(self, service):
        # 01:00 UTC on the 11th is still the 10th in Sao Paulo (UTC-3)
        now = datetime(2024, 3, 11, 1, 0, tzinfo=UTC)
        start, end = service.day_bounds(7, now)
        assert start == datetime(2024, 3, 10, 3, 0, tzinfo=UTC)
        assert end == datetime(2024, 3, 11, 3, 0, tzinfo=UTC)

    def test_naive_now_is_utc(self, service):
        start, _ = service.day_bounds(1, datetime(2024, 3, 10, 23, 59))
        assert start == datetime(2024, 3, 10, tzinfo=UTC)


class TestDashboardMetrics:
    async def test_counts(self, service, material_store, movement_store):
        now = datetime(2024, 3, 10, 12, tzinfo=UTC)
        metrics = await service.dashboard_metrics(1, now)

        assert metrics.total_materials == 3
        assert metrics.entries_today == 2
        assert metrics.exits_today == 1
        assert metrics.critical_items == 1
        assert metrics.day_start == datetime(2024, 3, 10, tzinfo=UTC)

        material_store.count.assert_awaited_once_with(1)
        movement_store.count_between.assert_any_await(
            1,
            MovementDirection.EXIT,
            datetime(2024, 3, 10, tzinfo=UTC),
            datetime(2024, 3, 11, tzinfo=UTC),
        )

    async def test_requires_tenant(self, service, material_store):
        with pytest.raises(AuthorizationError):
            await service.dashboard_metrics(None)
        material_store.count.assert_not_awaited()

    async def test_repeated_calls_agree(self, service):
        now = datetime(2024, 3, 10, 12, tzinfo=UTC)
        assert await service.dashboard_metrics(1, now) == await service.dashboard_metrics(1, now)


class TestFinancialReport:
    async def test_empty_tenant(self, service):
        report = await service.financial_report(1)
        assert report.total_stock_value == Decimal("0")
        assert report.total_items == 0
        assert report.high_value_items == 0
        assert report.stock_items == []

    async def test_valuation(self, service, material_store):
        material_store.list_with_category.return_value = [
            make_material(id=1, current_stock=100, minimum_stock=10, unit_price=Decimal("12.50")),
            make_material(id=2, current_stock=4, minimum_stock=5, unit_price=Decimal("2.00")),
            make_material(id=3, current_stock=11, minimum_stock=10, unit_price=Decimal("0")),
        ]

        report = await service.financial_report(1)

        assert report.total_stock_value == Decimal("1258.00")
        assert report.total_items == 3
        assert report.high_value_items == 1
        assert [row.total_value for row in report.stock_items] == [
            Decimal("1250.00"),
            Decimal("8.00"),
            Decimal("0"),
        ]
        assert [row.status for row in report.stock_items] == [
            StockStatus.ADEQUATE,
            StockStatus.CRITICAL,
            StockStatus.LOW,
        ]

    async def test_threshold_is_exclusive(self, material_store, movement_store):
        service = StockAggregationService(
            material_store,
            movement_store,
            LedgerSettings(high_value_threshold=Decimal("100")),
        )
        material_store.list_with_category.return_value = [
            make_material(current_stock=10, unit_price=Decimal("10.00")),
        ]
        report = await service.financial_report(1)
        assert report.high_value_items == 0
        assert report.high_value_threshold == Decimal("100")

    async def test_configured_low_factor(self, material_store, movement_store):
        service = StockAggregationService(
            material_store,
            movement_store,
            LedgerSettings(low_stock_factor=Decimal("1.5")),
        )
        material_store.list_with_category.return_value = [
            make_material(current_stock=14, minimum_stock=10),
        ]
        report = await service.financial_report(1)

        # 14 is adequate at the default 1.2 but low at 1.5
        assert report.stock_items[0].status == StockStatus.LOW
