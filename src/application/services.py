"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from src.core.services import StockAggregationService

if TYPE_CHECKING:
    from src.config.settings import LedgerSettings
    from src.core.interfaces import IMaterialStore, IMovementStore


# Singleton service instances
_stock_aggregation_service: StockAggregationService | None = None


async def get_stock_aggregation_service(
    material_store: "IMaterialStore | None" = None,
    movement_store: "IMovementStore | None" = None,
    ledger_settings: "LedgerSettings | None" = None,
) -> StockAggregationService:
    """
    Get or create StockAggregationService instance.

    Creates infrastructure dependencies if not provided.
    Uses singleton pattern when called without overrides.

    Args:
        material_store: Optional material store override
        movement_store: Optional movement store override
        ledger_settings: Optional ledger settings override
    """
    global _stock_aggregation_service

    overridden = any(d is not None for d in (material_store, movement_store, ledger_settings))
    if _stock_aggregation_service is not None and not overridden:
        return _stock_aggregation_service

    from src.config import get_settings
    from src.infrastructure.storage.sqlite import get_material_store, get_movement_store

    service = StockAggregationService(
        material_store=material_store or await get_material_store(),
        movement_store=movement_store or await get_movement_store(),
        ledger_settings=ledger_settings or get_settings().ledger,
    )
    if not overridden:
        _stock_aggregation_service = service
    return service


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _stock_aggregation_service
    _stock_aggregation_service = None
