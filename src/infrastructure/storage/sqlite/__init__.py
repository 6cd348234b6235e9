"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.catalog_store import (
    SQLiteCatalogStore,
    SQLiteCategoryStore,
    SQLiteEmployeeStore,
    SQLiteSupplierStore,
    SQLiteThirdPartyStore,
)
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    set_pool,
)
from src.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from src.infrastructure.storage.sqlite.movement_store import SQLiteMovementStore

# Aliases for backward compatibility
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_category_store: SQLiteCategoryStore | None = None
_supplier_store: SQLiteSupplierStore | None = None
_employee_store: SQLiteEmployeeStore | None = None
_third_party_store: SQLiteThirdPartyStore | None = None
_material_store: SQLiteMaterialStore | None = None
_movement_store: SQLiteMovementStore | None = None


async def get_category_store() -> SQLiteCategoryStore:
    """Get singleton category store instance."""
    global _category_store
    if _category_store is None:
        _category_store = SQLiteCategoryStore()
    return _category_store


async def get_supplier_store() -> SQLiteSupplierStore:
    """Get singleton supplier store instance."""
    global _supplier_store
    if _supplier_store is None:
        _supplier_store = SQLiteSupplierStore()
    return _supplier_store


async def get_employee_store() -> SQLiteEmployeeStore:
    """Get singleton employee store instance."""
    global _employee_store
    if _employee_store is None:
        _employee_store = SQLiteEmployeeStore()
    return _employee_store


async def get_third_party_store() -> SQLiteThirdPartyStore:
    """Get singleton third party store instance."""
    global _third_party_store
    if _third_party_store is None:
        _third_party_store = SQLiteThirdPartyStore()
    return _third_party_store


async def get_material_store() -> SQLiteMaterialStore:
    """Get singleton material store instance."""
    global _material_store
    if _material_store is None:
        _material_store = SQLiteMaterialStore()
    return _material_store


async def get_movement_store() -> SQLiteMovementStore:
    """Get singleton movement store instance."""
    global _movement_store
    if _movement_store is None:
        _movement_store = SQLiteMovementStore(await get_material_store())
    return _movement_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "set_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Aliases for connection
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteCatalogStore",
    "SQLiteCategoryStore",
    "SQLiteSupplierStore",
    "SQLiteEmployeeStore",
    "SQLiteThirdPartyStore",
    "SQLiteMaterialStore",
    "SQLiteMovementStore",
    # Factory functions
    "get_category_store",
    "get_supplier_store",
    "get_employee_store",
    "get_third_party_store",
    "get_material_store",
    "get_movement_store",
]
