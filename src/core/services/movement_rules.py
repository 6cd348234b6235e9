"""
Counterparty rules of stock movements.

Pure checks on a movement header, run before anything is read from or
written to storage. Each violation raises a ValidationError naming the
offending field.
"""

from src.core.entities.movement import MAX_QUANTITY, EntryOrigin, ExitDestination
from src.core.exceptions import ValidationError

REFERENCE_FIELDS = ("supplier_id", "employee_id", "third_party_id")

# Counterparty reference each entry origin requires
ENTRY_ORIGIN_REFERENCE: dict[EntryOrigin, str] = {
    EntryOrigin.SUPPLIER: "supplier_id",
    EntryOrigin.EMPLOYEE_RETURN: "employee_id",
    EntryOrigin.THIRD_PARTY_RETURN: "third_party_id",
}

EXIT_DESTINATION_REFERENCE: dict[ExitDestination, str] = {
    ExitDestination.EMPLOYEE: "employee_id",
    ExitDestination.THIRD_PARTY: "third_party_id",
}


def check_entry_counterparty(
    origin: EntryOrigin | None, references: dict[str, int | None]
) -> str:
    """
    Check that an entry references exactly the counterparty of its origin.

    Returns:
        The reference field in use
    """
    if origin is None:
        raise ValidationError("origin", "entries require an origin")

    required = ENTRY_ORIGIN_REFERENCE[origin]
    if references.get(required) is None:
        raise ValidationError(required, f"required for origin '{origin.value}'")

    for field in REFERENCE_FIELDS:
        if field != required and references.get(field) is not None:
            raise ValidationError(
                field,
                f"not allowed for origin '{origin.value}'",
                references[field],
            )
    return required


def check_exit_counterparty(
    destination: ExitDestination | None, references: dict[str, int | None]
) -> str:
    """
    Check that an exit references one employee or one third party.

    A destination, when given, must match the reference supplied.

    Returns:
        The reference field in use
    """
    if references.get("supplier_id") is not None:
        raise ValidationError(
            "supplier_id", "exits cannot reference a supplier", references["supplier_id"]
        )

    present = [
        field for field in EXIT_DESTINATION_REFERENCE.values() if references.get(field) is not None
    ]
    if not present:
        raise ValidationError("employee_id", "exits require an employee or a third party")
    if len(present) > 1:
        raise ValidationError(
            "third_party_id", "exits reference either an employee or a third party, not both"
        )

    used = present[0]
    if destination is not None and EXIT_DESTINATION_REFERENCE[destination] != used:
        raise ValidationError(
            "destination",
            f"destination '{destination.value}' does not match {used}",
            destination.value,
        )
    return used


def check_purpose(purpose: str | None, index: int) -> str:
    """Exit lines carry a non-blank purpose; returns it stripped."""
    if purpose is None or not purpose.strip():
        raise ValidationError(f"items.{index}.purpose", "exit items require a purpose", purpose)
    return purpose.strip()


def check_quantity(quantity: int, index: int) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(
            f"items.{index}.quantity", "quantity must be a positive integer", quantity
        )
    if quantity > MAX_QUANTITY:
        raise ValidationError(
            f"items.{index}.quantity", f"quantity cannot exceed {MAX_QUANTITY}", quantity
        )
    return quantity
