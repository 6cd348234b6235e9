"""
Material domain entity.

A material is a stocked product of one tenant. Its `current_stock` is only
ever changed by the movement ledger.
"""

from decimal import Decimal
from enum import Enum

from pydantic import Field

from src.core.entities.catalog import Category, NamedEntity

LOW_STOCK_FACTOR = Decimal("1.2")

# Largest balance an SQLite INTEGER column holds
MAX_STOCK = 2**63 - 1


class StockStatus(str, Enum):
    """Derived stock health of a material."""

    CRITICAL = "critical"
    LOW = "low"
    ADEQUATE = "adequate"


def classify_stock(
    current_stock: int,
    minimum_stock: int,
    low_factor: Decimal = LOW_STOCK_FACTOR,
) -> StockStatus:
    """Classify a balance against its minimum.

    critical: current <= minimum
    low:      current <= minimum * low_factor
    adequate: otherwise
    """
    if current_stock <= minimum_stock:
        return StockStatus.CRITICAL
    if Decimal(current_stock) <= Decimal(minimum_stock) * low_factor:
        return StockStatus.LOW
    return StockStatus.ADEQUATE


class Material(NamedEntity):
    """A stocked material with its current balance."""

    description: str | None = None
    category_id: int | None = None
    unit: str
    current_stock: int = Field(default=0, ge=0, le=MAX_STOCK)
    minimum_stock: int = Field(default=0, ge=0)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)

    def stock_status(self, low_factor: Decimal) -> StockStatus:
        """Classify the balance with the configured low-stock factor."""
        return classify_stock(self.current_stock, self.minimum_stock, low_factor)

    @property
    def is_critical(self) -> bool:
        return self.current_stock <= self.minimum_stock

    @property
    def total_value(self) -> Decimal:
        """Stock value = unit_price * current_stock."""
        return self.unit_price * self.current_stock


class MaterialWithCategory(Material):
    """Material joined with its (possibly absent) category."""

    category: Category | None = None
