"""Order use cases: record a sale, list sales, preview sale profit."""

from dataclasses import dataclass

from stockbook.application.dto.requests import ProfitPreviewRequest, RecordOrderRequest
from stockbook.application.dto.responses import (
    OrderListResponse,
    ProfitPreviewResponse,
    RecordOrderResponse,
)
from stockbook.application.services import get_backend
from stockbook.application.use_cases.views import order_view, profit_summary_view
from stockbook.config import get_logger
from stockbook.core.entities import NewOrder, Order, Session
from stockbook.core.exceptions import ValidationError
from stockbook.core.interfaces import IBackendClient
from stockbook.core.money import is_blank, parse_required
from stockbook.core.services import (
    INVENTORY_LIST,
    ORDER_LIST,
    NormalizedList,
    ProfitSummary,
    normalize_list,
    normalize_object,
    summarize_sale,
)

logger = get_logger(__name__)


def build_new_order(request: RecordOrderRequest) -> NewOrder:
    """Validate the sale form; raises ValidationError before any network call."""
    item_id = request.inventory_item_id.strip()
    if not item_id:
        raise ValidationError("inventory_item_id", "is required")

    quantity = parse_required(request.quantity_sold, "quantity_sold")
    if quantity <= 0:
        raise ValidationError(
            "quantity_sold", "must be greater than zero", request.quantity_sold
        )

    return NewOrder(
        inventory_item_id=item_id,
        quantity_sold=quantity,
        selling_price_per_unit=parse_required(
            request.selling_price_per_unit, "selling_price_per_unit"
        ),
    )


@dataclass
class RecordOrderResult:
    submitted: NewOrder
    order: Order | None = None


class RecordOrderUseCase:
    """Record a sale. Profit figures on the stored order are the backend's."""

    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(self, session: Session, request: RecordOrderRequest) -> RecordOrderResult:
        new_order = build_new_order(request)
        logger.info(
            "record_order_started",
            inventory_item_id=new_order.inventory_item_id,
        )

        payload = await get_backend(self._backend).create_order(session, new_order)
        order = normalize_object(payload, Order, ("order", "data"))

        logger.info("record_order_complete", order_id=order.id if order else None)
        return RecordOrderResult(submitted=new_order, order=order)

    def to_response(self, result: RecordOrderResult) -> RecordOrderResponse:
        return RecordOrderResponse(order=order_view(result.order) if result.order else None)


class ListOrdersUseCase:
    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(self, session: Session) -> NormalizedList[Order]:
        payload = await get_backend(self._backend).list_orders(session)
        return normalize_list(payload, ORDER_LIST)

    def to_response(self, result: NormalizedList[Order]) -> OrderListResponse:
        return OrderListResponse(
            orders=[order_view(order) for order in result.items],
            total=len(result.items),
            malformed=result.malformed,
        )


class PreviewProfitUseCase:
    """
    Live profit summary for the order form.

    Uses the selected item's stored cost per unit. Returns None while the
    form is incomplete or the item is not in the current inventory.
    """

    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(
        self, session: Session, request: ProfitPreviewRequest
    ) -> ProfitSummary | None:
        item_id = (request.inventory_item_id or "").strip()
        if (
            not item_id
            or is_blank(request.quantity_sold)
            or is_blank(request.selling_price_per_unit)
        ):
            return None

        payload = await get_backend(self._backend).list_inventory(session)
        inventory = normalize_list(payload, INVENTORY_LIST)
        item = next((i for i in inventory.items if i.id == item_id), None)
        if item is None:
            logger.info("profit_preview_item_missing", inventory_item_id=item_id)

        return summarize_sale(item, request.quantity_sold, request.selling_price_per_unit)

    def to_response(self, result: ProfitSummary | None) -> ProfitPreviewResponse:
        return ProfitPreviewResponse(
            summary=profit_summary_view(result) if result is not None else None
        )
