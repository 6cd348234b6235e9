"""SQLite implementation of material storage."""

from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.catalog import Category
from src.core.entities.material import MAX_STOCK, Material, MaterialWithCategory
from src.core.exceptions import NotFoundError, PersistenceError, ValidationError
from src.core.interfaces.material_store import IMaterialStore
from src.core.services.tenant_guard import require_tenant
from src.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

# Conditional in-place update: never read-modify-write in Python.
# The upper bound stops SQLite from promoting an overflowing sum to REAL.
ADJUST_BALANCE_SQL = """
    UPDATE materials
    SET current_stock = current_stock + ?
    WHERE id = ? AND tenant_id = ?
      AND current_stock + ? >= 0
      AND current_stock + ? <= ?
"""


class SQLiteMaterialStore(SQLiteCatalogStore[Material], IMaterialStore):
    """Materials with category join and atomic balance adjustment."""

    entity_name = "material"
    table = "materials"
    entity_cls = Material
    # current_stock is written only by adjust_balance
    columns = ("name", "description", "category_id", "unit", "minimum_stock", "unit_price")
    referenced_by = (("movement_items", "material_id"),)

    async def list_with_category(self, tenant_id: int) -> list[MaterialWithCategory]:
        """List materials joined with their (possibly absent) category."""
        tenant_id = require_tenant(tenant_id)
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT m.*,
                       c.id AS cat_id,
                       c.name AS cat_name,
                       c.description AS cat_description,
                       c.created_at AS cat_created_at
                FROM materials m
                LEFT JOIN categories c
                    ON c.id = m.category_id AND c.tenant_id = m.tenant_id
                WHERE m.tenant_id = ?
                ORDER BY m.name, m.id
                """,
                (tenant_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_material_with_category(row) for row in rows]

    async def get_many(
        self, material_ids: list[int], tenant_id: int
    ) -> dict[int, Material]:
        """Get the materials of the tenant among the given IDs."""
        tenant_id = require_tenant(tenant_id)
        ids = sorted(set(material_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM materials WHERE tenant_id = ? AND id IN ({placeholders})",
                (tenant_id, *ids),
            )
            rows = await cursor.fetchall()
            return {row["id"]: self._row_to_entity(row) for row in rows}

    async def count(self, tenant_id: int) -> int:
        tenant_id = require_tenant(tenant_id)
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM materials WHERE tenant_id = ?", (tenant_id,)
            )
            row = await cursor.fetchone()
            return row[0]

    async def count_critical(self, tenant_id: int) -> int:
        tenant_id = require_tenant(tenant_id)
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT COUNT(*) FROM materials
                WHERE tenant_id = ? AND current_stock <= minimum_stock
                """,
                (tenant_id,),
            )
            row = await cursor.fetchone()
            return row[0]

    async def adjust_balance(
        self,
        material_id: int,
        delta: int,
        tenant_id: int,
        conn: Any = None,
    ) -> bool:
        """Add delta to current_stock in place; False if nothing changed.

        Nothing changes when the material is missing, belongs to another
        tenant, or the balance would leave the range 0..MAX_STOCK.
        """
        tenant_id = require_tenant(tenant_id)
        if abs(delta) > MAX_STOCK:
            raise ValidationError("delta", f"balance change cannot exceed {MAX_STOCK}", delta)
        params = (delta, material_id, tenant_id, delta, delta, MAX_STOCK)

        if conn is not None:
            cursor = await conn.execute(ADJUST_BALANCE_SQL, params)
            return cursor.rowcount == 1

        try:
            async with get_transaction() as own_conn:
                cursor = await own_conn.execute(ADJUST_BALANCE_SQL, params)
                changed = cursor.rowcount == 1
        except aiosqlite.Error as e:
            raise PersistenceError("adjust balance", str(e)) from e

        logger.info(
            "material_balance_adjusted",
            material_id=material_id,
            delta=delta,
            changed=changed,
        )
        return changed

    async def _check_references(self, entity: Material, tenant_id: int) -> None:
        """A material's category must belong to the same tenant."""
        if entity.category_id is None:
            return
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM categories WHERE id = ? AND tenant_id = ?",
                (entity.category_id, tenant_id),
            )
            if await cursor.fetchone() is None:
                raise NotFoundError("category", entity.category_id)

    def _row_to_material_with_category(self, row: aiosqlite.Row) -> MaterialWithCategory:
        data = {key: row[key] for key in row.keys() if not key.startswith("cat_")}
        category = None
        if row["cat_id"] is not None:
            category = Category(
                id=row["cat_id"],
                name=row["cat_name"],
                description=row["cat_description"],
                tenant_id=row["tenant_id"],
                created_at=row["cat_created_at"],
            )
        return MaterialWithCategory.model_validate({**data, "category": category})
