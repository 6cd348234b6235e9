"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from decimal import Decimal
from pathlib import Path

import pytest

from src.application.services import reset_services
from src.infrastructure.storage import sqlite as sqlite_module
from src.infrastructure.storage.sqlite.connection import ConnectionPool, close_pool, set_pool
from src.infrastructure.storage.sqlite.migrations import initialize_database


def _reset_store_singletons() -> None:
    for name in (
        "_category_store",
        "_supplier_store",
        "_employee_store",
        "_third_party_store",
        "_material_store",
        "_movement_store",
    ):
        setattr(sqlite_module, name, None)
    reset_services()


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "ledger.db"


@pytest.fixture
async def ledger_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated temporary database installed as the global pool."""
    await initialize_database(temp_db_path, create_backup_before=False)
    await set_pool(ConnectionPool(temp_db_path, pool_size=4, busy_timeout=5000))
    _reset_store_singletons()
    try:
        yield temp_db_path
    finally:
        await close_pool()
        _reset_store_singletons()


@pytest.fixture
def material_payload() -> dict:
    """Minimal valid material payload."""
    return {
        "name": "Copper cable 2.5mm",
        "unit": "M",
        "minimum_stock": 5,
        "unit_price": Decimal("12.50"),
    }
