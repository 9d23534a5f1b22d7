"""Inventory use cases: add a purchase, list stock, preview cost per unit."""

from dataclasses import dataclass

from stockbook.application.dto.requests import AddInventoryRequest, CostPreviewRequest
from stockbook.application.dto.responses import (
    AddInventoryResponse,
    CostPreviewResponse,
    InventoryListResponse,
)
from stockbook.application.services import get_backend
from stockbook.application.use_cases.views import inventory_view
from stockbook.config import get_logger, get_settings
from stockbook.core.entities import InventoryItem, NewInventoryItem, Session, Unit
from stockbook.core.exceptions import ValidationError
from stockbook.core.interfaces import IBackendClient
from stockbook.core.money import format_currency, parse_optional, parse_required
from stockbook.core.services import (
    INVENTORY_LIST,
    CostPreview,
    NormalizedList,
    normalize_list,
    normalize_object,
    preview_cost,
)

logger = get_logger(__name__)


def build_new_item(request: AddInventoryRequest) -> NewInventoryItem:
    """Validate the entry form; raises ValidationError before any network call."""
    name = request.name.strip()
    if not name:
        raise ValidationError("name", "is required")

    unit_text = request.unit.strip().lower()
    if not unit_text:
        raise ValidationError("unit", "is required")
    try:
        unit = Unit(unit_text)
    except ValueError:
        raise ValidationError(
            "unit", f"must be one of {', '.join(u.value for u in Unit)}", request.unit
        ) from None

    quantity = parse_required(request.quantity, "quantity")
    if quantity <= 0:
        raise ValidationError("quantity", "must be greater than zero", request.quantity)

    return NewInventoryItem(
        name=name,
        quantity=quantity,
        unit=unit,
        total_amount=parse_required(request.total_amount, "total_amount"),
        shipping_fee=parse_optional(request.shipping_fee, "shipping_fee"),
    )


@dataclass
class AddInventoryResult:
    """Result of adding an inventory item."""

    submitted: NewInventoryItem
    item: InventoryItem | None = None  # backend echo, when it sent one


class AddInventoryUseCase:
    """Submit a purchase. The backend computes and stores cost per unit."""

    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(self, session: Session, request: AddInventoryRequest) -> AddInventoryResult:
        new_item = build_new_item(request)
        logger.info(
            "add_inventory_started",
            name=new_item.name,
            unit=new_item.unit.value,
        )

        backend = get_backend(self._backend)
        payload = await backend.add_inventory(session, new_item)
        item = normalize_object(payload, InventoryItem, ("item", "data", "inventory"))

        logger.info("add_inventory_complete", item_id=item.id if item else None)
        return AddInventoryResult(submitted=new_item, item=item)

    def to_response(self, result: AddInventoryResult) -> AddInventoryResponse:
        return AddInventoryResponse(
            item=inventory_view(result.item) if result.item else None
        )


class ListInventoryUseCase:
    """Current stock, normalized from whatever shape the backend used."""

    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(self, session: Session) -> NormalizedList[InventoryItem]:
        backend = get_backend(self._backend)
        payload = await backend.list_inventory(session)
        return normalize_list(payload, INVENTORY_LIST)

    def to_response(self, result: NormalizedList[InventoryItem]) -> InventoryListResponse:
        return InventoryListResponse(
            items=[inventory_view(item) for item in result.items],
            total=len(result.items),
            malformed=result.malformed,
        )


class PreviewCostUseCase:
    """Live cost-per-unit caption. Display only, nothing is submitted."""

    def execute(self, request: CostPreviewRequest) -> CostPreview:
        return preview_cost(
            request.quantity,
            request.total_amount,
            request.shipping_fee,
            request.unit,
        )

    def to_response(self, result: CostPreview) -> CostPreviewResponse:
        symbol = get_settings().display.currency_symbol
        display = format_currency(result.value, symbol)
        return CostPreviewResponse(
            cost_per_unit=float(result.value) if result.value is not None else None,
            rounded=float(result.rounded),
            display=display,
            caption=f"{display} per {result.unit}",
            is_computable=result.is_computable,
            is_estimate_only=result.is_estimate_only,
        )
