"""Order (sale) endpoints."""

from fastapi import APIRouter, Depends, status

from stockbook.api.dependencies import (
    get_list_orders_use_case,
    get_preview_profit_use_case,
    get_record_order_use_case,
    get_session,
)
from stockbook.application.dto.requests import ProfitPreviewRequest, RecordOrderRequest
from stockbook.application.dto.responses import (
    ErrorResponse,
    OrderListResponse,
    ProfitPreviewResponse,
    RecordOrderResponse,
)
from stockbook.application.use_cases import (
    ListOrdersUseCase,
    PreviewProfitUseCase,
    RecordOrderUseCase,
)
from stockbook.core.entities import Session

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get(
    "",
    response_model=OrderListResponse,
    responses={401: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def list_orders(
    session: Session = Depends(get_session),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
) -> OrderListResponse:
    result = await use_case.execute(session)
    return use_case.to_response(result)


@router.post(
    "",
    response_model=RecordOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def record_order(
    request: RecordOrderRequest,
    session: Session = Depends(get_session),
    use_case: RecordOrderUseCase = Depends(get_record_order_use_case),
) -> RecordOrderResponse:
    """Record a sale against an inventory item."""
    result = await use_case.execute(session, request)
    return use_case.to_response(result)


@router.post(
    "/profit-preview",
    response_model=ProfitPreviewResponse,
    responses={401: {"model": ErrorResponse}},
)
async def preview_profit(
    request: ProfitPreviewRequest,
    session: Session = Depends(get_session),
    use_case: PreviewProfitUseCase = Depends(get_preview_profit_use_case),
) -> ProfitPreviewResponse:
    """
    Profit summary for the order form.

    ``summary`` is null until an item is selected and both quantity and
    price are filled in. A negative total profit is reported as a loss.
    """
    result = await use_case.execute(session, request)
    return use_case.to_response(result)
