"""Tests for the schema migrator."""

from pathlib import Path

import aiosqlite

from src.infrastructure.storage.sqlite.migrations import (
    REQUIRED_TABLES,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


class TestMigrator:
    def test_discovers_schema_migration(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"
        assert versions == sorted(versions)

    async def test_fresh_database(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)

        assert results
        assert all(r.success for r in results)

        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
        assert set(REQUIRED_TABLES) <= tables

    async def test_second_run_applies_nothing(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        assert await initialize_database(temp_db_path, create_backup_before=True) == []
        # Backup removed after a clean run
        assert list(temp_db_path.parent.glob("*.backup_*")) == []

    async def test_status(self, temp_db_path: Path):
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is False
        assert "001" in status["pending_migrations"]

        await initialize_database(temp_db_path, create_backup_before=False)
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is True
        assert status["current_version"] is not None
        assert status["pending_migrations"] == []

    async def test_integrity_checks_pass(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        checks = await verify_schema_integrity(temp_db_path)
        assert {c["check"] for c in checks} == {
            "foreign_keys",
            "integrity",
            "required_tables",
            "non_negative_stock",
        }
        assert all(c["status"] == "PASS" for c in checks)

    async def test_negative_stock_is_refused_by_schema(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        async with aiosqlite.connect(temp_db_path) as conn:
            try:
                await conn.execute(
                    "INSERT INTO materials (name, unit, current_stock, tenant_id, created_at) "
                    "VALUES ('x', 'UN', -1, 1, '2024-01-01T00:00:00.000000+00:00')"
                )
            except aiosqlite.IntegrityError:
                refused = True
            else:
                refused = False
        assert refused
