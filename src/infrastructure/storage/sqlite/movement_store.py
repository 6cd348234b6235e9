"""
SQLite implementation of movement storage.

`apply_movement` is the only writer of movements: header, items and balance
updates run inside one BEGIN IMMEDIATE transaction, so a failure at any step
leaves nothing behind.
"""

from datetime import datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.material import MAX_STOCK
from src.core.entities.movement import (
    EntryOrigin,
    ExitDestination,
    Movement,
    MovementDirection,
    MovementItem,
)
from src.core.exceptions import InsufficientStockError, PersistenceError, ValidationError
from src.core.interfaces.material_store import IMaterialStore
from src.core.interfaces.movement_store import IMovementStore
from src.core.services.tenant_guard import require_tenant
from src.infrastructure.storage.sqlite.codec import (
    from_db_decimal,
    from_db_timestamp,
    to_db_decimal,
    to_db_timestamp,
)
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore

logger = get_logger(__name__)


class SQLiteMovementStore(IMovementStore):
    """SQLite implementation of stock movement storage."""

    def __init__(self, material_store: IMaterialStore | None = None):
        self._materials = material_store or SQLiteMaterialStore()

    async def apply_movement(self, movement: Movement) -> Movement:
        """Insert header and items and adjust balances in one transaction."""
        tenant_id = require_tenant(movement.tenant_id)

        try:
            async with get_transaction(immediate=True) as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO movements (
                        direction, occurred_at, origin, destination,
                        supplier_id, employee_id, third_party_id,
                        notes, tenant_id, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        movement.direction.value,
                        to_db_timestamp(movement.occurred_at),
                        movement.origin.value if movement.origin else None,
                        movement.destination.value if movement.destination else None,
                        movement.supplier_id,
                        movement.employee_id,
                        movement.third_party_id,
                        movement.notes,
                        tenant_id,
                        to_db_timestamp(movement.created_at),
                    ),
                )
                movement.id = cursor.lastrowid

                for index, item in enumerate(movement.items):
                    item.movement_id = movement.id
                    item.tenant_id = tenant_id
                    cursor = await conn.execute(
                        """
                        INSERT INTO movement_items (
                            movement_id, material_id, quantity,
                            unit_price, total_price, purpose, tenant_id
                        ) VALUES (?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            movement.id,
                            item.material_id,
                            item.quantity,
                            to_db_decimal(item.unit_price),
                            to_db_decimal(item.total_price),
                            item.purpose,
                            tenant_id,
                        ),
                    )
                    item.id = cursor.lastrowid

                    delta = movement.signed_quantity(item)
                    applied = await self._materials.adjust_balance(
                        item.material_id, delta, tenant_id, conn=conn
                    )
                    if not applied:
                        await self._raise_unapplied(conn, item, delta, index, tenant_id)

        except aiosqlite.Error as e:
            self._forget_ids(movement)
            logger.error(
                "movement_apply_failed",
                direction=movement.direction.value,
                tenant_id=tenant_id,
                error=str(e),
            )
            raise PersistenceError("apply movement", str(e)) from e
        except (InsufficientStockError, PersistenceError, ValidationError):
            self._forget_ids(movement)
            raise

        logger.info(
            "movement_applied",
            movement_id=movement.id,
            direction=movement.direction.value,
            items=len(movement.items),
            tenant_id=tenant_id,
        )
        return movement

    async def get_movement(self, movement_id: int, tenant_id: int) -> Movement | None:
        """Get a movement of the tenant with its items."""
        tenant_id = require_tenant(tenant_id)
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM movements WHERE id = ? AND tenant_id = ?",
                (movement_id, tenant_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            movements = await self._attach_items(conn, [self._row_to_movement(row)])
            return movements[0]

    async def list_movements(
        self,
        tenant_id: int,
        direction: MovementDirection | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Movement]:
        """List movements of the tenant, newest first."""
        tenant_id = require_tenant(tenant_id)
        query = "SELECT * FROM movements WHERE tenant_id = ?"
        params: list = [tenant_id]
        if direction is not None:
            query += " AND direction = ?"
            params.append(direction.value)
        query += " ORDER BY occurred_at DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return await self._attach_items(conn, [self._row_to_movement(r) for r in rows])

    async def count_between(
        self,
        tenant_id: int,
        direction: MovementDirection,
        start: datetime,
        end: datetime,
    ) -> int:
        """Count movements with start <= occurred_at < end."""
        tenant_id = require_tenant(tenant_id)
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT COUNT(*) FROM movements
                WHERE tenant_id = ? AND direction = ?
                  AND occurred_at >= ? AND occurred_at < ?
                """,
                (tenant_id, direction.value, to_db_timestamp(start), to_db_timestamp(end)),
            )
            row = await cursor.fetchone()
            return row[0]

    async def _raise_unapplied(
        self,
        conn: aiosqlite.Connection,
        item: MovementItem,
        delta: int,
        index: int,
        tenant_id: int,
    ) -> None:
        """Explain a balance update that matched no row."""
        cursor = await conn.execute(
            "SELECT current_stock FROM materials WHERE id = ? AND tenant_id = ?",
            (item.material_id, tenant_id),
        )
        row = await cursor.fetchone()
        if row is None:
            raise PersistenceError(
                "apply movement", f"material {item.material_id} no longer exists"
            )
        if delta > 0:
            raise ValidationError(
                f"items.{index}.quantity",
                f"balance of material {item.material_id} would exceed {MAX_STOCK}",
                item.quantity,
            )
        # Drained by a concurrent exit after the sufficiency check
        raise InsufficientStockError(
            material_id=item.material_id,
            requested=item.quantity,
            available=row["current_stock"],
        )

    @staticmethod
    def _forget_ids(movement: Movement) -> None:
        """Drop identities handed out by a rolled-back transaction."""
        movement.id = None
        for item in movement.items:
            item.id = None
            item.movement_id = None

    async def _attach_items(
        self, conn: aiosqlite.Connection, movements: list[Movement]
    ) -> list[Movement]:
        if not movements:
            return movements
        by_id = {m.id: m for m in movements}
        placeholders = ", ".join("?" for _ in by_id)
        cursor = await conn.execute(
            f"SELECT * FROM movement_items WHERE movement_id IN ({placeholders}) ORDER BY id",
            tuple(by_id),
        )
        for row in await cursor.fetchall():
            by_id[row["movement_id"]].items.append(self._row_to_item(row))
        return movements

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> Movement:
        return Movement(
            id=row["id"],
            direction=MovementDirection(row["direction"]),
            occurred_at=from_db_timestamp(row["occurred_at"]),
            origin=EntryOrigin(row["origin"]) if row["origin"] else None,
            destination=ExitDestination(row["destination"]) if row["destination"] else None,
            supplier_id=row["supplier_id"],
            employee_id=row["employee_id"],
            third_party_id=row["third_party_id"],
            notes=row["notes"],
            tenant_id=row["tenant_id"],
            created_at=from_db_timestamp(row["created_at"]),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> MovementItem:
        return MovementItem(
            id=row["id"],
            movement_id=row["movement_id"],
            material_id=row["material_id"],
            quantity=row["quantity"],
            unit_price=from_db_decimal(row["unit_price"]),
            total_price=from_db_decimal(row["total_price"]),
            purpose=row["purpose"],
            tenant_id=row["tenant_id"],
        )
