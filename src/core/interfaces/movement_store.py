"""Abstract interface for stock movement storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from src.core.entities.movement import Movement, MovementDirection


class IMovementStore(ABC):
    """Persistence of movements and their atomic application to balances."""

    @abstractmethod
    async def apply_movement(self, movement: Movement) -> Movement:
        """
        Persist header and items and adjust every material balance as one unit.

        Either everything becomes visible or nothing does.

        Raises:
            InsufficientStockError: a concurrent exit drained a material
            PersistenceError: any storage failure (after rollback)
        """

    @abstractmethod
    async def get_movement(self, movement_id: int, tenant_id: int) -> Movement | None:
        """Get a movement of the tenant with its items."""

    @abstractmethod
    async def list_movements(
        self,
        tenant_id: int,
        direction: MovementDirection | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Movement]:
        """List movements of the tenant, newest first, with items."""

    @abstractmethod
    async def count_between(
        self,
        tenant_id: int,
        direction: MovementDirection,
        start: datetime,
        end: datetime,
    ) -> int:
        """Count movements with start <= occurred_at < end."""
