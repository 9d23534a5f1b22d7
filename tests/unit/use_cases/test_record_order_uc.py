"""Unit tests for the order use cases."""

from decimal import Decimal

import pytest

from stockbook.application.dto.requests import ProfitPreviewRequest, RecordOrderRequest
from stockbook.application.use_cases.record_order import (
    ListOrdersUseCase,
    PreviewProfitUseCase,
    RecordOrderUseCase,
    build_new_order,
)
from stockbook.core.exceptions import ValidationError


@pytest.fixture
def order_payload():
    return {
        "_id": "o-1",
        "inventoryItem": {"_id": "inv-1", "itemName": "Palm oil", "unit": "kg"},
        "quantitySold": 5,
        "sellingPricePerUnit": 100,
        "totalSellingAmount": 500,
        "profitPerUnit": -10,
        "totalProfit": -50,
    }


class TestBuildNewOrder:
    def test_valid(self):
        order = build_new_order(
            RecordOrderRequest(
                inventory_item_id=" inv-1 ", quantity_sold="5", selling_price_per_unit=150
            )
        )
        assert order.inventory_item_id == "inv-1"
        assert order.quantity_sold == Decimal("5")
        assert order.selling_price_per_unit == Decimal("150")

    @pytest.mark.parametrize(
        "fields,field",
        [
            ({"inventory_item_id": ""}, "inventory_item_id"),
            ({"quantity_sold": "0"}, "quantity_sold"),
            ({"quantity_sold": ""}, "quantity_sold"),
            ({"selling_price_per_unit": "free"}, "selling_price_per_unit"),
        ],
    )
    def test_rejects(self, fields, field):
        values = {
            "inventory_item_id": "inv-1",
            "quantity_sold": "5",
            "selling_price_per_unit": "150",
            **fields,
        }
        with pytest.raises(ValidationError) as exc_info:
            build_new_order(RecordOrderRequest(**values))
        assert exc_info.value.details["field"] == field


class TestRecordOrder:
    async def test_records_sale(self, mock_backend, session, order_payload):
        mock_backend.create_order.return_value = {"order": order_payload}
        use_case = RecordOrderUseCase(backend=mock_backend)

        result = await use_case.execute(
            session,
            RecordOrderRequest(
                inventory_item_id="inv-1", quantity_sold="5", selling_price_per_unit="100"
            ),
        )

        response = use_case.to_response(result)
        assert response.order.id == "o-1"
        assert response.order.item_name == "Palm oil"
        assert response.order.is_loss
        assert response.order.total_profit == -50.0

    async def test_invalid_form_never_calls_backend(self, mock_backend, session):
        use_case = RecordOrderUseCase(backend=mock_backend)

        with pytest.raises(ValidationError):
            await use_case.execute(session, RecordOrderRequest(inventory_item_id="inv-1"))
        mock_backend.create_order.assert_not_awaited()


class TestListOrders:
    async def test_bare_array(self, mock_backend, session, order_payload):
        mock_backend.list_orders.return_value = [order_payload, {"quantitySold": 1}]
        use_case = ListOrdersUseCase(backend=mock_backend)

        response = use_case.to_response(await use_case.execute(session))

        assert response.total == 1
        assert response.malformed


class TestPreviewProfit:
    async def test_incomplete_form_skips_backend(self, mock_backend, session):
        use_case = PreviewProfitUseCase(backend=mock_backend)

        result = await use_case.execute(
            session, ProfitPreviewRequest(inventory_item_id="inv-1", quantity_sold="2")
        )

        assert result is None
        mock_backend.list_inventory.assert_not_awaited()

    async def test_uses_stored_cost(self, mock_backend, session, inventory_payload):
        mock_backend.list_inventory.return_value = inventory_payload
        use_case = PreviewProfitUseCase(backend=mock_backend)

        result = await use_case.execute(
            session,
            ProfitPreviewRequest(
                inventory_item_id="inv-1", quantity_sold="5", selling_price_per_unit="150"
            ),
        )

        assert result.cost_per_unit == Decimal("110")
        assert result.total_profit == Decimal("200")
        response = use_case.to_response(result)
        assert response.summary.outcome == "profit"
        assert response.summary.severity == "success"

    async def test_loss_is_a_summary(self, mock_backend, session, inventory_payload):
        mock_backend.list_inventory.return_value = inventory_payload
        use_case = PreviewProfitUseCase(backend=mock_backend)

        result = await use_case.execute(
            session,
            ProfitPreviewRequest(
                inventory_item_id="inv-1", quantity_sold="2", selling_price_per_unit="100"
            ),
        )

        assert result.is_loss
        assert result.total_profit == Decimal("-20")

    async def test_unknown_item(self, mock_backend, session, inventory_payload):
        mock_backend.list_inventory.return_value = inventory_payload
        use_case = PreviewProfitUseCase(backend=mock_backend)

        result = await use_case.execute(
            session,
            ProfitPreviewRequest(
                inventory_item_id="gone", quantity_sold="2", selling_price_per_unit="100"
            ),
        )

        assert result is None
        assert use_case.to_response(result).summary is None
