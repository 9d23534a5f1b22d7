"""Inventory endpoints."""

from fastapi import APIRouter, Depends, status

from stockbook.api.dependencies import (
    get_add_inventory_use_case,
    get_list_inventory_use_case,
    get_preview_cost_use_case,
    get_session,
)
from stockbook.application.dto.requests import AddInventoryRequest, CostPreviewRequest
from stockbook.application.dto.responses import (
    AddInventoryResponse,
    CostPreviewResponse,
    ErrorResponse,
    InventoryListResponse,
)
from stockbook.application.use_cases import (
    AddInventoryUseCase,
    ListInventoryUseCase,
    PreviewCostUseCase,
)
from stockbook.core.entities import Session

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get(
    "",
    response_model=InventoryListResponse,
    responses={401: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def list_inventory(
    session: Session = Depends(get_session),
    use_case: ListInventoryUseCase = Depends(get_list_inventory_use_case),
) -> InventoryListResponse:
    """Current stock. An unexpected payload shape yields an empty, flagged list."""
    result = await use_case.execute(session)
    return use_case.to_response(result)


@router.post(
    "",
    response_model=AddInventoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def add_inventory(
    request: AddInventoryRequest,
    session: Session = Depends(get_session),
    use_case: AddInventoryUseCase = Depends(get_add_inventory_use_case),
) -> AddInventoryResponse:
    """Record a purchase. Cost per unit is computed by the backend."""
    result = await use_case.execute(session, request)
    return use_case.to_response(result)


@router.post("/cost-preview", response_model=CostPreviewResponse)
async def preview_cost(
    request: CostPreviewRequest,
    use_case: PreviewCostUseCase = Depends(get_preview_cost_use_case),
) -> CostPreviewResponse:
    """Cost per unit for the entry form; ₦0.00 until quantity is positive."""
    return use_case.to_response(use_case.execute(request))
