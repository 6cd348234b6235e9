"""
Domain exceptions for the stock ledger.

Every failure carries a stable machine-readable code plus a human-readable
message, so callers can react without parsing text.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all stock ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(LedgerError):
    """Request is malformed or logically inconsistent."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )

    @classmethod
    def from_pydantic(cls, exc: Any) -> "ValidationError":
        """Build from the first error of a pydantic ValidationError."""
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "payload"
        return cls(field, error["msg"], error.get("input"))


class InsufficientStockError(LedgerError):
    """An exit would drive a material balance below zero."""

    def __init__(self, material_id: int, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for material {material_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "material_id": material_id,
                "requested": requested,
                "available": available,
                "shortfall": requested - available,
            },
        )


# Lookup Exceptions
class NotFoundError(LedgerError):
    """Entity does not exist in the caller's tenant scope.

    Raised the same way whether the row is absent or owned by another tenant.
    """

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity.replace('_', ' ').capitalize()} not found: {entity_id}",
            code=f"{entity.upper()}_NOT_FOUND",
            details={"entity": entity, "id": entity_id},
        )


class MaterialNotFoundError(NotFoundError):
    """Material not found in the tenant scope."""

    def __init__(self, material_id: Any):
        super().__init__("material", material_id)


class ReferenceInUseError(LedgerError):
    """Entity cannot be deleted while other rows reference it."""

    def __init__(self, entity: str, entity_id: Any, referenced_by: str):
        super().__init__(
            f"{entity.replace('_', ' ').capitalize()} {entity_id} is referenced by {referenced_by}",
            code="REFERENCE_IN_USE",
            details={"entity": entity, "id": entity_id, "referenced_by": referenced_by},
        )


# Storage Exceptions
class PersistenceError(LedgerError):
    """Storage failed while applying a change; the change was rolled back."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Persistence error during {operation}: {error}",
            code="PERSISTENCE_ERROR",
            details={"operation": operation, "error": error},
        )


# Access Exceptions
class AuthorizationError(LedgerError):
    """No tenant could be resolved for the caller."""

    def __init__(self, reason: str = "No authenticated principal"):
        super().__init__(
            f"Not authorized: {reason}",
            code="AUTHORIZATION_ERROR",
            details={"reason": reason},
        )


class ConfigurationError(LedgerError):
    """Settings loaded from the environment are invalid."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR")
