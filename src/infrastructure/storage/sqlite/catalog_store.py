"""
SQLite implementation of the tenant-scoped catalog stores.

`SQLiteCatalogStore` holds the shared CRUD; each entity store only declares
its table, entity class, writable columns and the tables that reference it.
Every statement filters on tenant_id.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

import aiosqlite
import pydantic

from src.config import get_logger
from src.core.entities.catalog import Category, Employee, Supplier, ThirdParty
from src.core.exceptions import PersistenceError, ReferenceInUseError, ValidationError
from src.core.interfaces.catalog_store import EntityT, ICatalogStore, Payload
from src.core.services.tenant_guard import require_tenant
from src.infrastructure.storage.sqlite.codec import to_db_timestamp, to_db_value
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteCatalogStore(ICatalogStore[EntityT]):
    """Shared tenant-scoped CRUD over one table."""

    entity_name: ClassVar[str]
    table: ClassVar[str]
    entity_cls: ClassVar[type]
    # Columns a caller may set; id, tenant_id and created_at are managed here
    columns: ClassVar[tuple[str, ...]]
    # (table, column) pairs whose rows block deletion
    referenced_by: ClassVar[tuple[tuple[str, str], ...]] = ()

    async def list_all(self, tenant_id: int) -> list[EntityT]:
        tenant_id = require_tenant(tenant_id)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {self.table} WHERE tenant_id = ? ORDER BY name, id",
                (tenant_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def get(self, entity_id: int, tenant_id: int) -> EntityT | None:
        tenant_id = require_tenant(tenant_id)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {self.table} WHERE id = ? AND tenant_id = ?",
                (entity_id, tenant_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def create(self, payload: Payload, tenant_id: int) -> EntityT:
        tenant_id = require_tenant(tenant_id)
        entity = self._build(self._payload_fields(payload, partial=False), tenant_id)
        await self._check_references(entity, tenant_id)

        columns = (*self.columns, "tenant_id", "created_at")
        values = [to_db_value(getattr(entity, col)) for col in self.columns]
        values += [tenant_id, to_db_timestamp(entity.created_at)]

        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"INSERT INTO {self.table} ({', '.join(columns)}) "
                    f"VALUES ({', '.join('?' for _ in columns)})",
                    values,
                )
                entity.id = cursor.lastrowid
        except aiosqlite.Error as e:
            raise PersistenceError(f"create {self.entity_name}", str(e)) from e

        logger.info(
            "catalog_entity_created",
            entity=self.entity_name,
            entity_id=entity.id,
            tenant_id=tenant_id,
        )
        return entity

    async def update(
        self, entity_id: int, payload: Payload, tenant_id: int
    ) -> EntityT | None:
        tenant_id = require_tenant(tenant_id)
        current = await self.get(entity_id, tenant_id)
        if current is None:
            return None

        changes = self._payload_fields(payload, partial=True)
        if not changes:
            return current

        # Validate the merged row, then write only the changed columns
        merged = self._build({**current.model_dump(), **changes}, tenant_id)
        await self._check_references(merged, tenant_id)

        assignments = ", ".join(f"{col} = ?" for col in changes)
        values = [to_db_value(getattr(merged, col)) for col in changes]

        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"UPDATE {self.table} SET {assignments} WHERE id = ? AND tenant_id = ?",
                    (*values, entity_id, tenant_id),
                )
                if cursor.rowcount == 0:
                    return None
        except aiosqlite.Error as e:
            raise PersistenceError(f"update {self.entity_name}", str(e)) from e

        logger.info(
            "catalog_entity_updated",
            entity=self.entity_name,
            entity_id=entity_id,
            fields=sorted(changes),
        )
        return await self.get(entity_id, tenant_id)

    async def delete(self, entity_id: int, tenant_id: int) -> bool:
        tenant_id = require_tenant(tenant_id)
        try:
            async with get_transaction(immediate=True) as conn:
                for ref_table, ref_column in self.referenced_by:
                    cursor = await conn.execute(
                        f"SELECT 1 FROM {ref_table} "
                        f"WHERE {ref_column} = ? AND tenant_id = ? LIMIT 1",
                        (entity_id, tenant_id),
                    )
                    if await cursor.fetchone() is not None:
                        raise ReferenceInUseError(self.entity_name, entity_id, ref_table)

                cursor = await conn.execute(
                    f"DELETE FROM {self.table} WHERE id = ? AND tenant_id = ?",
                    (entity_id, tenant_id),
                )
                deleted = cursor.rowcount > 0
        except aiosqlite.IntegrityError as e:
            raise ReferenceInUseError(self.entity_name, entity_id, str(e)) from e
        except aiosqlite.Error as e:
            raise PersistenceError(f"delete {self.entity_name}", str(e)) from e

        if deleted:
            logger.info(
                "catalog_entity_deleted",
                entity=self.entity_name,
                entity_id=entity_id,
                tenant_id=tenant_id,
            )
        return deleted

    async def _check_references(self, entity: EntityT, tenant_id: int) -> None:
        """Hook for stores whose rows point at other tenant-scoped rows."""

    def _payload_fields(self, payload: Payload, partial: bool) -> dict[str, Any]:
        if isinstance(payload, pydantic.BaseModel):
            data = payload.model_dump(exclude_unset=partial)
        elif isinstance(payload, Mapping):
            data = dict(payload)
        else:
            raise ValidationError("payload", "expected an object", payload)
        return {key: value for key, value in data.items() if key in self.columns}

    def _build(self, data: dict[str, Any], tenant_id: int) -> EntityT:
        try:
            return self.entity_cls.model_validate({**data, "tenant_id": tenant_id})
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(e) from e

    def _row_to_entity(self, row: aiosqlite.Row) -> EntityT:
        return self.entity_cls.model_validate(dict(row))


class SQLiteCategoryStore(SQLiteCatalogStore[Category]):
    entity_name = "category"
    table = "categories"
    entity_cls = Category
    columns = ("name", "description")


class SQLiteSupplierStore(SQLiteCatalogStore[Supplier]):
    entity_name = "supplier"
    table = "suppliers"
    entity_cls = Supplier
    columns = ("name", "contact", "phone", "email", "address")
    referenced_by = (("movements", "supplier_id"),)


class SQLiteEmployeeStore(SQLiteCatalogStore[Employee]):
    entity_name = "employee"
    table = "employees"
    entity_cls = Employee
    columns = ("name", "department", "position", "email", "phone")
    referenced_by = (("movements", "employee_id"),)


class SQLiteThirdPartyStore(SQLiteCatalogStore[ThirdParty]):
    entity_name = "third_party"
    table = "third_parties"
    entity_cls = ThirdParty
    columns = ("name", "document", "document_type", "email", "phone", "address", "is_active")
    referenced_by = (("movements", "third_party_id"),)
