"""Post Movement Use Case: validated, all-or-nothing stock entries and exits."""

from collections import defaultdict
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

import pydantic

from src.application.dto.requests import PostEntryRequest, PostExitRequest
from src.application.dto.responses import MovementResponse
from src.config import get_logger, get_settings
from src.config.settings import LedgerSettings
from src.core.entities.material import Material
from src.core.entities.movement import Movement, MovementDirection, MovementItem
from src.core.exceptions import (
    InsufficientStockError,
    LedgerError,
    MaterialNotFoundError,
    NotFoundError,
    ValidationError,
)
from src.core.interfaces.catalog_store import ICatalogStore
from src.core.interfaces.material_store import IMaterialStore
from src.core.interfaces.movement_store import IMovementStore
from src.core.services.movement_rules import (
    check_entry_counterparty,
    check_exit_counterparty,
    check_purpose,
    check_quantity,
)
from src.core.services.tenant_guard import require_tenant

logger = get_logger(__name__)

_REQUEST_MODELS: dict[MovementDirection, type[PostEntryRequest | PostExitRequest]] = {
    MovementDirection.ENTRY: PostEntryRequest,
    MovementDirection.EXIT: PostExitRequest,
}

# Reference field -> (entity name, store getter name)
_COUNTERPARTIES = {
    "supplier_id": ("supplier", "get_supplier_store"),
    "employee_id": ("employee", "get_employee_store"),
    "third_party_id": ("third_party", "get_third_party_store"),
}


class PostMovementUseCase:
    """
    Post a stock entry or exit.

    received -> validated -> applied -> committed, or rejected before any
    write, or failed after a full rollback.
    """

    def __init__(
        self,
        material_store: IMaterialStore | None = None,
        movement_store: IMovementStore | None = None,
        counterparty_stores: dict[str, ICatalogStore] | None = None,
        ledger_settings: LedgerSettings | None = None,
    ):
        self._material_store = material_store
        self._movement_store = movement_store
        # Keyed by reference field: supplier_id, employee_id, third_party_id
        self._counterparty_stores = dict(counterparty_stores or {})
        self._ledger_settings = ledger_settings

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from src.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    async def _get_movement_store(self) -> IMovementStore:
        if self._movement_store is None:
            from src.infrastructure.storage.sqlite import get_movement_store

            self._movement_store = await get_movement_store()
        return self._movement_store

    async def _get_counterparty_store(self, field: str) -> ICatalogStore:
        if field not in self._counterparty_stores:
            from src.infrastructure.storage import sqlite

            getter = getattr(sqlite, _COUNTERPARTIES[field][1])
            self._counterparty_stores[field] = await getter()
        return self._counterparty_stores[field]

    def _get_ledger_settings(self) -> LedgerSettings:
        if self._ledger_settings is None:
            self._ledger_settings = get_settings().ledger
        return self._ledger_settings

    async def execute(
        self, request: PostEntryRequest | PostExitRequest, tenant_id: int
    ) -> Movement:
        """Execute post movement use case."""
        tenant_id = require_tenant(tenant_id)
        direction = MovementDirection(request.direction)
        log = logger.bind(tenant_id=tenant_id, direction=direction.value)
        log.info("movement_received", items=len(request.items))

        # 1-2. Validate and check sufficiency; nothing is written on failure
        try:
            movement = self._build_movement(request, tenant_id)
            await self._check_counterparties(movement)
            materials = await self._check_materials(movement)
            log.info("movement_validated", materials=len(materials))

            if direction == MovementDirection.EXIT:
                self._check_sufficiency(movement, materials)
        except LedgerError as e:
            log.warning("movement_rejected", error_code=e.code, message=e.message)
            raise

        # 3-4. Apply atomically; the store rolls back before raising
        movement_store = await self._get_movement_store()
        try:
            movement = await movement_store.apply_movement(movement)
        except LedgerError as e:
            log.error("movement_failed", error_code=e.code, message=e.message)
            raise

        log.info(
            "movement_committed",
            movement_id=movement.id,
            total_quantity=movement.total_quantity,
        )
        return movement

    def _build_movement(
        self, request: PostEntryRequest | PostExitRequest, tenant_id: int
    ) -> Movement:
        """Check header and line rules and build the movement to apply."""
        if not request.items:
            raise ValidationError("items", "a movement needs at least one item")

        references = {
            "supplier_id": getattr(request, "supplier_id", None),
            "employee_id": request.employee_id,
            "third_party_id": request.third_party_id,
        }

        items: list[MovementItem] = []
        if isinstance(request, PostEntryRequest):
            check_entry_counterparty(request.origin, references)
            for index, line in enumerate(request.items):
                quantity = check_quantity(line.quantity, index)
                if line.unit_price is None or line.unit_price < 0:
                    raise ValidationError(
                        f"items.{index}.unit_price", "must be zero or more", line.unit_price
                    )
                items.append(
                    MovementItem(
                        material_id=line.material_id,
                        quantity=quantity,
                        unit_price=line.unit_price,
                        total_price=line.unit_price * quantity,
                        tenant_id=tenant_id,
                    )
                )
            origin, destination = request.origin, None
        else:
            check_exit_counterparty(request.destination, references)
            for index, line in enumerate(request.items):
                items.append(
                    MovementItem(
                        material_id=line.material_id,
                        quantity=check_quantity(line.quantity, index),
                        purpose=check_purpose(line.purpose, index),
                        tenant_id=tenant_id,
                    )
                )
            origin, destination = None, request.destination

        return Movement(
            direction=MovementDirection(request.direction),
            occurred_at=self._normalize_occurred_at(request.occurred_at, tenant_id),
            origin=origin,
            destination=destination,
            notes=request.notes,
            tenant_id=tenant_id,
            items=items,
            **references,
        )

    def _normalize_occurred_at(self, occurred_at: datetime | None, tenant_id: int) -> datetime:
        """UTC timestamp; naive values are read as the tenant's local time."""
        if occurred_at is None:
            return datetime.now(UTC)
        if occurred_at.tzinfo is None:
            zone = self._get_ledger_settings().zone_for(tenant_id)
            occurred_at = occurred_at.replace(tzinfo=zone)
        return occurred_at.astimezone(UTC)

    async def _check_counterparties(self, movement: Movement) -> None:
        for field, (entity, _) in _COUNTERPARTIES.items():
            ref_id = getattr(movement, field)
            if ref_id is None:
                continue
            store = await self._get_counterparty_store(field)
            if await store.get(ref_id, movement.tenant_id) is None:
                raise NotFoundError(entity, ref_id)

    async def _check_materials(self, movement: Movement) -> dict[int, Material]:
        """Every material must exist in the tenant; foreign ones look absent."""
        material_store = await self._get_material_store()
        ids = [item.material_id for item in movement.items]
        materials = await material_store.get_many(ids, movement.tenant_id)
        for material_id in ids:
            if material_id not in materials:
                raise MaterialNotFoundError(material_id)
        return materials

    @staticmethod
    def _check_sufficiency(movement: Movement, materials: dict[int, Material]) -> None:
        """Lines of one material are summed before comparing to its balance."""
        requested: dict[int, int] = defaultdict(int)
        for item in movement.items:
            requested[item.material_id] += item.quantity

        for material_id, quantity in requested.items():
            available = materials[material_id].current_stock
            if available < quantity:
                raise InsufficientStockError(material_id, quantity, available)

    def to_response(self, movement: Movement) -> MovementResponse:
        """Convert movement to API response."""
        return MovementResponse.model_validate(movement)


async def post_movement(
    direction: MovementDirection | str,
    header: Mapping[str, Any],
    items: Sequence[Mapping[str, Any]],
    tenant_id: int,
    use_case: PostMovementUseCase | None = None,
) -> Movement:
    """
    Post a movement from raw header and item mappings.

    Raises:
        AuthorizationError: missing tenant
        ValidationError: unknown direction or malformed header/items
    """
    tenant_id = require_tenant(tenant_id)

    try:
        direction = MovementDirection(direction)
    except ValueError as e:
        raise ValidationError("direction", "must be 'entry' or 'exit'", direction) from e

    try:
        request = _REQUEST_MODELS[direction].model_validate(
            {**header, "direction": direction.value, "items": list(items)}
        )
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e) from e

    use_case = use_case or PostMovementUseCase()
    return await use_case.execute(request, tenant_id)
