"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteCategoryStore,
    SQLiteEmployeeStore,
    SQLiteMaterialStore,
    SQLiteMovementStore,
    SQLiteSupplierStore,
    SQLiteThirdPartyStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteCategoryStore",
    "SQLiteSupplierStore",
    "SQLiteEmployeeStore",
    "SQLiteThirdPartyStore",
    "SQLiteMaterialStore",
    "SQLiteMovementStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
