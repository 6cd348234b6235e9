"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.catalog_store import EntityT, ICatalogStore, Payload
from src.core.interfaces.material_store import IMaterialStore
from src.core.interfaces.movement_store import IMovementStore

__all__ = [
    "EntityT",
    "Payload",
    "ICatalogStore",
    "IMaterialStore",
    "IMovementStore",
]
