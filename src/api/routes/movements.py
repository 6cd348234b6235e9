"""Stock movement endpoints: post entries and exits, browse history."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_mov_store, get_post_movement_use_case, get_tenant_id
from src.application.dto.requests import PostEntryRequest, PostExitRequest
from src.application.dto.responses import (
    ErrorResponse,
    MovementListResponse,
    MovementResponse,
)
from src.application.use_cases.post_movement import PostMovementUseCase
from src.core.entities.movement import MovementDirection
from src.core.exceptions import NotFoundError
from src.infrastructure.storage.sqlite import SQLiteMovementStore

router = APIRouter(prefix="/api/movements", tags=["movements"])

POST_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "/entries",
    response_model=MovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses=POST_RESPONSES,
)
async def post_entry(
    request: PostEntryRequest,
    tenant_id: int = Depends(get_tenant_id),
    use_case: PostMovementUseCase = Depends(get_post_movement_use_case),
) -> MovementResponse:
    """Post a stock entry; every line raises its material balance."""
    movement = await use_case.execute(request, tenant_id)
    return use_case.to_response(movement)


@router.post(
    "/exits",
    response_model=MovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses=POST_RESPONSES,
)
async def post_exit(
    request: PostExitRequest,
    tenant_id: int = Depends(get_tenant_id),
    use_case: PostMovementUseCase = Depends(get_post_movement_use_case),
) -> MovementResponse:
    """Post a stock exit; rejected as a whole if any material runs short."""
    movement = await use_case.execute(request, tenant_id)
    return use_case.to_response(movement)


@router.get("", response_model=MovementListResponse)
async def list_movements(
    direction: MovementDirection | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    tenant_id: int = Depends(get_tenant_id),
    store: SQLiteMovementStore = Depends(get_mov_store),
) -> MovementListResponse:
    """List movements of the caller's tenant, newest first."""
    # One extra row tells whether another page exists
    movements = await store.list_movements(
        tenant_id, direction=direction, limit=limit + 1, offset=offset
    )
    return MovementListResponse(
        movements=[MovementResponse.model_validate(m) for m in movements[:limit]],
        limit=limit,
        offset=offset,
        has_more=len(movements) > limit,
    )


@router.get(
    "/{movement_id}",
    response_model=MovementResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_movement(
    movement_id: int,
    tenant_id: int = Depends(get_tenant_id),
    store: SQLiteMovementStore = Depends(get_mov_store),
) -> MovementResponse:
    """Get one movement with its items."""
    movement = await store.get_movement(movement_id, tenant_id)
    if movement is None:
        raise NotFoundError("movement", movement_id)
    return MovementResponse.model_validate(movement)
