"""End-to-end ledger behavior over a real SQLite database."""

import asyncio
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from src.application.use_cases.post_movement import PostMovementUseCase, post_movement
from src.config.settings import LedgerSettings
from src.core.entities.material import StockStatus, classify_stock
from src.core.exceptions import InsufficientStockError, NotFoundError
from src.core.services.stock_aggregation import StockAggregationService
from src.infrastructure.storage.sqlite import (
    SQLiteEmployeeStore,
    SQLiteMaterialStore,
    SQLiteMovementStore,
    SQLiteSupplierStore,
)

TENANT = 1
OTHER_TENANT = 2


@pytest.fixture
def materials() -> SQLiteMaterialStore:
    return SQLiteMaterialStore()


@pytest.fixture
def movements(materials) -> SQLiteMovementStore:
    return SQLiteMovementStore(materials)


@pytest.fixture
def use_case(materials, movements) -> PostMovementUseCase:
    return PostMovementUseCase(
        material_store=materials,
        movement_store=movements,
        counterparty_stores={
            "supplier_id": SQLiteSupplierStore(),
            "employee_id": SQLiteEmployeeStore(),
        },
        ledger_settings=LedgerSettings(),
    )


@pytest.fixture
def aggregation(materials, movements) -> StockAggregationService:
    return StockAggregationService(materials, movements, LedgerSettings())


@pytest.fixture
async def world(ledger_db, use_case, materials):
    """Material M with 10 units (minimum 5) received from a supplier."""
    supplier = await SQLiteSupplierStore().create({"name": "Acme"}, TENANT)
    employee = await SQLiteEmployeeStore().create({"name": "Ana"}, TENANT)
    material = await materials.create(
        {"name": "M", "unit": "UN", "minimum_stock": 5, "unit_price": Decimal("3.00")},
        TENANT,
    )
    await post_movement(
        "entry",
        {"origin": "supplier", "supplier_id": supplier.id},
        [{"material_id": material.id, "quantity": 10, "unit_price": "3.00"}],
        TENANT,
        use_case=use_case,
    )
    return {"supplier": supplier, "employee": employee, "material": material}


async def stock_of(materials, material_id, tenant_id=TENANT) -> int:
    return (await materials.get(material_id, tenant_id)).current_stock


def exit_lines(material_id, quantity):
    return [{"material_id": material_id, "quantity": quantity, "purpose": "office use"}]


class TestScenarios:
    async def test_exit_lowers_stock_and_reports_follow(
        self, world, use_case, materials, aggregation
    ):
        material = world["material"]

        await post_movement(
            "exit",
            {"employee_id": world["employee"].id},
            exit_lines(material.id, 4),
            TENANT,
            use_case=use_case,
        )

        assert await stock_of(materials, material.id) == 6

        metrics = await aggregation.dashboard_metrics(TENANT)
        assert metrics.critical_items == 0
        assert metrics.entries_today == 1
        assert metrics.exits_today == 1

        report = await aggregation.financial_report(TENANT)
        assert report.stock_items[0].total_value == Decimal("18.00")
        assert report.total_stock_value == Decimal("18.00")

    async def test_overdraw_leaves_stock_untouched(self, world, use_case, materials):
        material = world["material"]
        header = {"employee_id": world["employee"].id}
        await post_movement("exit", header, exit_lines(material.id, 4), TENANT, use_case=use_case)

        with pytest.raises(InsufficientStockError) as exc_info:
            await post_movement(
                "exit", header, exit_lines(material.id, 10), TENANT, use_case=use_case
            )

        assert exc_info.value.details["available"] == 6
        assert await stock_of(materials, material.id) == 6

    async def test_foreign_material_fails_whole_entry(self, world, use_case, materials, movements):
        material = world["material"]
        foreign = await materials.create({"name": "Foreign", "unit": "UN"}, OTHER_TENANT)

        with pytest.raises(NotFoundError):
            await post_movement(
                "entry",
                {"origin": "supplier", "supplier_id": world["supplier"].id},
                [
                    {"material_id": material.id, "quantity": 5, "unit_price": "1"},
                    {"material_id": foreign.id, "quantity": 5, "unit_price": "1"},
                ],
                TENANT,
                use_case=use_case,
            )

        assert await stock_of(materials, material.id) == 10
        assert await stock_of(materials, foreign.id, OTHER_TENANT) == 0
        assert len(await movements.list_movements(TENANT)) == 1

    async def test_classification_boundaries(self, world, use_case, materials):
        material = world["material"]
        await materials.update(material.id, {"minimum_stock": 10}, TENANT)
        header = {"employee_id": world["employee"].id}
        entry_header = {"origin": "supplier", "supplier_id": world["supplier"].id}

        expected = {10: StockStatus.CRITICAL, 11: StockStatus.LOW, 13: StockStatus.ADEQUATE}
        for target, status in expected.items():
            current = await stock_of(materials, material.id)
            if target > current:
                await post_movement(
                    "entry",
                    entry_header,
                    [{"material_id": material.id, "quantity": target - current, "unit_price": "1"}],
                    TENANT,
                    use_case=use_case,
                )
            elif target < current:
                await post_movement(
                    "exit", header, exit_lines(material.id, current - target),
                    TENANT, use_case=use_case,
                )
            fetched = await materials.get(material.id, TENANT)
            assert fetched.current_stock == target
            assert classify_stock(fetched.current_stock, fetched.minimum_stock) == status


class TestLedgerProperties:
    async def test_balance_conservation(self, world, use_case, materials, movements):
        material = world["material"]
        header = {"employee_id": world["employee"].id}
        for quantity in (3, 2):
            await post_movement(
                "exit", header, exit_lines(material.id, quantity), TENANT, use_case=use_case
            )
        await post_movement(
            "entry",
            {"origin": "employee_return", "employee_id": world["employee"].id},
            [{"material_id": material.id, "quantity": 1, "unit_price": "0"}],
            TENANT,
            use_case=use_case,
        )

        signed_total = 0
        for movement in await movements.list_movements(TENANT):
            for item in movement.items:
                if item.material_id == material.id:
                    signed_total += movement.signed_quantity(item)

        assert signed_total == 6
        assert await stock_of(materials, material.id) == signed_total

    async def test_concurrent_exits_never_overdraw(self, world, use_case, materials):
        material = world["material"]
        header = {"employee_id": world["employee"].id}

        results = await asyncio.gather(
            *(
                post_movement(
                    "exit", header, exit_lines(material.id, 3), TENANT, use_case=use_case
                )
                for _ in range(5)
            ),
            return_exceptions=True,
        )

        posted = [r for r in results if not isinstance(r, Exception)]
        failed = [r for r in results if isinstance(r, Exception)]
        assert len(posted) == 3
        assert all(isinstance(e, InsufficientStockError) for e in failed)
        assert await stock_of(materials, material.id) == 1

    async def test_aggregation_is_idempotent(self, world, aggregation):
        now = datetime.now(UTC)
        assert await aggregation.dashboard_metrics(TENANT, now) == (
            await aggregation.dashboard_metrics(TENANT, now)
        )
        assert await aggregation.financial_report(TENANT) == (
            await aggregation.financial_report(TENANT)
        )

    async def test_tenants_do_not_see_each_other(self, world, aggregation, movements):
        metrics = await aggregation.dashboard_metrics(OTHER_TENANT)
        assert metrics.total_materials == 0
        assert metrics.entries_today == 0

        report = await aggregation.financial_report(OTHER_TENANT)
        assert report.total_items == 0
        assert await movements.list_movements(OTHER_TENANT) == []

    async def test_other_tenant_cannot_use_counterparties(self, world, use_case, materials):
        theirs = await materials.create({"name": "Theirs", "unit": "UN"}, OTHER_TENANT)

        with pytest.raises(NotFoundError) as exc_info:
            await post_movement(
                "entry",
                {"origin": "supplier", "supplier_id": world["supplier"].id},
                [{"material_id": theirs.id, "quantity": 1, "unit_price": "1"}],
                OTHER_TENANT,
                use_case=use_case,
            )

        assert exc_info.value.code == "SUPPLIER_NOT_FOUND"
