"""
Stock movement entities.

A movement is one entry (stock increase) or exit (stock decrease) composed of
one or more line items. Movements are immutable once posted.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from src.core.entities.material import MAX_STOCK

# A single line can never exceed what a balance can hold
MAX_QUANTITY = MAX_STOCK


class MovementDirection(str, Enum):
    """Direction of a stock movement."""

    ENTRY = "entry"
    EXIT = "exit"


class EntryOrigin(str, Enum):
    """Where material of an entry comes from."""

    SUPPLIER = "supplier"
    EMPLOYEE_RETURN = "employee_return"
    THIRD_PARTY_RETURN = "third_party_return"


class ExitDestination(str, Enum):
    """Who receives the material of an exit."""

    EMPLOYEE = "employee"
    THIRD_PARTY = "third_party"


class MovementItem(BaseModel):
    """One material line of a movement."""

    id: int | None = None
    movement_id: int | None = None
    material_id: int
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    # Entries
    unit_price: Decimal | None = None
    total_price: Decimal | None = None
    # Exits
    purpose: str | None = None
    tenant_id: int


class Movement(BaseModel):
    """Header of a stock movement with its line items."""

    id: int | None = None
    direction: MovementDirection
    occurred_at: datetime
    origin: EntryOrigin | None = None
    destination: ExitDestination | None = None
    supplier_id: int | None = None
    employee_id: int | None = None
    third_party_id: int | None = None
    notes: str | None = None
    tenant_id: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    items: list[MovementItem] = Field(default_factory=list)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_value(self) -> Decimal:
        """Sum of line totals (entries only; exits carry no price)."""
        return sum(
            (item.total_price for item in self.items if item.total_price is not None),
            Decimal("0"),
        )

    def signed_quantity(self, item: MovementItem) -> int:
        """Balance delta an item applies: +q for entries, -q for exits."""
        if self.direction == MovementDirection.ENTRY:
            return item.quantity
        return -item.quantity
