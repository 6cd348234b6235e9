"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities.movement import MAX_QUANTITY, EntryOrigin, ExitDestination

# --- Catalog ---


class CreateCategoryRequest(BaseModel):
    """Request to create a material category."""

    name: str = Field(..., min_length=1, description="Category name", examples=["Electrical"])
    description: str | None = Field(default=None, description="Free-text description")


class UpdateCategoryRequest(BaseModel):
    """Partial category update. Only fields sent are changed."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None


class CreateSupplierRequest(BaseModel):
    """Request to create a supplier."""

    name: str = Field(..., min_length=1, description="Supplier name")
    contact: str | None = Field(default=None, description="Contact person")
    phone: str | None = None
    email: str | None = None
    address: str | None = None


class UpdateSupplierRequest(BaseModel):
    """Partial supplier update."""

    name: str | None = Field(default=None, min_length=1)
    contact: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None


class CreateEmployeeRequest(BaseModel):
    """Request to create an employee."""

    name: str = Field(..., min_length=1, description="Employee name")
    department: str | None = None
    position: str | None = None
    email: str | None = None
    phone: str | None = None


class UpdateEmployeeRequest(BaseModel):
    """Partial employee update."""

    name: str | None = Field(default=None, min_length=1)
    department: str | None = None
    position: str | None = None
    email: str | None = None
    phone: str | None = None


class CreateThirdPartyRequest(BaseModel):
    """Request to create a third party (person or company)."""

    name: str = Field(..., min_length=1, description="Third party name")
    document: str | None = Field(default=None, description="Tax document number")
    document_type: str = Field(default="CPF", description="Document type", examples=["CPF", "CNPJ"])
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    is_active: bool = True


class UpdateThirdPartyRequest(BaseModel):
    """Partial third party update."""

    name: str | None = Field(default=None, min_length=1)
    document: str | None = None
    document_type: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    is_active: bool | None = None


class CreateMaterialRequest(BaseModel):
    """Request to create a material.

    The balance always starts at zero; stock only arrives through entries.
    """

    name: str = Field(..., min_length=1, description="Material name")
    description: str | None = None
    category_id: int | None = Field(default=None, description="Category of the same tenant")
    unit: str = Field(..., min_length=1, description="Unit of measure", examples=["UN", "KG", "M"])
    minimum_stock: int = Field(default=0, ge=0, description="Critical threshold")
    unit_price: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)


class UpdateMaterialRequest(BaseModel):
    """Partial material update. current_stock is not editable here."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category_id: int | None = None
    unit: str | None = Field(default=None, min_length=1)
    minimum_stock: int | None = Field(default=None, ge=0)
    unit_price: Decimal | None = Field(default=None, ge=0, decimal_places=2)


# --- Movements ---


class EntryItemRequest(BaseModel):
    """One line of a stock entry."""

    material_id: int = Field(..., description="Material of the caller's tenant")
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY, description="Units received")
    unit_price: Decimal = Field(..., ge=0, description="Unit price paid on this entry")


class ExitItemRequest(BaseModel):
    """One line of a stock exit."""

    material_id: int = Field(..., description="Material of the caller's tenant")
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY, description="Units issued")
    purpose: str = Field(..., description="What the material is used for", examples=["office use"])


class PostEntryRequest(BaseModel):
    """Stock entry: material received from a supplier or returned."""

    model_config = ConfigDict(extra="forbid")

    direction: Literal["entry"] = "entry"
    origin: EntryOrigin = Field(..., description="Where the material comes from")
    occurred_at: datetime | None = Field(
        default=None,
        description="When the entry happened (defaults to now; naive values use tenant time)",
    )
    supplier_id: int | None = None
    employee_id: int | None = None
    third_party_id: int | None = None
    notes: str | None = None
    items: list[EntryItemRequest] = Field(..., min_length=1)


class PostExitRequest(BaseModel):
    """Stock exit: material issued to an employee or a third party."""

    model_config = ConfigDict(extra="forbid")

    direction: Literal["exit"] = "exit"
    destination: ExitDestination | None = Field(
        default=None,
        description="Optional classifier; must agree with the reference sent",
    )
    occurred_at: datetime | None = Field(
        default=None,
        description="When the exit happened (defaults to now; naive values use tenant time)",
    )
    employee_id: int | None = None
    third_party_id: int | None = None
    notes: str | None = None
    items: list[ExitItemRequest] = Field(..., min_length=1)
