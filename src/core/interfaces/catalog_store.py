"""
Abstract interface for tenant-scoped catalog storage.

One store per entity type (category, supplier, employee, third party,
material). Every operation takes the tenant id explicitly; rows of another
tenant behave exactly as if they did not exist.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from src.core.entities.catalog import TenantOwned

EntityT = TypeVar("EntityT", bound=TenantOwned)

Payload = BaseModel | Mapping[str, Any]


class ICatalogStore(ABC, Generic[EntityT]):
    """CRUD contract shared by all catalog entity stores."""

    entity_name: str

    @abstractmethod
    async def list_all(self, tenant_id: int) -> list[EntityT]:
        """List every row of the tenant, ordered by name."""

    @abstractmethod
    async def get(self, entity_id: int, tenant_id: int) -> EntityT | None:
        """Get one row of the tenant by ID."""

    @abstractmethod
    async def create(self, payload: Payload, tenant_id: int) -> EntityT:
        """Create a row owned by the tenant.

        Raises:
            ValidationError: required fields missing or invalid
        """

    @abstractmethod
    async def update(
        self, entity_id: int, payload: Payload, tenant_id: int
    ) -> EntityT | None:
        """Apply the provided fields; None if the row is not in the tenant."""

    @abstractmethod
    async def delete(self, entity_id: int, tenant_id: int) -> bool:
        """Delete a row of the tenant; True iff a row was removed.

        Raises:
            ReferenceInUseError: the row is referenced by movements
        """
