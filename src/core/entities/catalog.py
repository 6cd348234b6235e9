"""
Reference entities of the catalog.

Categories classify materials; suppliers, employees and third parties are
the counterparties of stock movements. All rows belong to one tenant.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator


class TenantOwned(BaseModel):
    """Fields shared by every tenant-scoped row."""

    id: int | None = None
    tenant_id: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class NamedEntity(TenantOwned):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class Category(NamedEntity):
    """Material classifier."""

    description: str | None = None


class Supplier(NamedEntity):
    """Counterparty of stock entries."""

    contact: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None


class Employee(NamedEntity):
    """Receives material on exits and may return it on entries."""

    department: str | None = None
    position: str | None = None
    email: str | None = None
    phone: str | None = None


class ThirdParty(NamedEntity):
    """External person or company receiving or returning material."""

    document: str | None = None
    document_type: str = "CPF"
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    is_active: bool = True
