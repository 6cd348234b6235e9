"""
Abstract interface for material storage.

Adds the category join and the atomic balance adjustment used by the
movement ledger on top of the catalog CRUD contract.
"""

from abc import abstractmethod
from typing import Any

from src.core.entities.material import Material, MaterialWithCategory
from src.core.interfaces.catalog_store import ICatalogStore


class IMaterialStore(ICatalogStore[Material]):
    """Material catalog with balance updates."""

    @abstractmethod
    async def list_with_category(self, tenant_id: int) -> list[MaterialWithCategory]:
        """List materials joined with their (possibly absent) category."""

    @abstractmethod
    async def get_many(
        self, material_ids: list[int], tenant_id: int
    ) -> dict[int, Material]:
        """Get the materials of the tenant among the given IDs, keyed by ID."""

    @abstractmethod
    async def count(self, tenant_id: int) -> int:
        """Number of materials of the tenant."""

    @abstractmethod
    async def count_critical(self, tenant_id: int) -> int:
        """Number of materials with current_stock <= minimum_stock."""

    @abstractmethod
    async def adjust_balance(
        self,
        material_id: int,
        delta: int,
        tenant_id: int,
        conn: Any = None,
    ) -> bool:
        """
        Add delta to current_stock in one in-place update.

        The update only applies if the material belongs to the tenant and the
        resulting balance stays within 0..MAX_STOCK. When `conn` is given the
        update runs inside that open transaction.

        Returns:
            True if the balance changed
        """
