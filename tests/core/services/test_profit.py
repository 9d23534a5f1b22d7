"""Tests for sale profit calculation."""

from decimal import Decimal

import pytest

from stockbook.core.entities import InventoryItem
from stockbook.core.services import ProfitOutcome, calculate_profit, summarize_sale


@pytest.fixture
def palm_oil() -> InventoryItem:
    return InventoryItem.model_validate(
        {
            "_id": "inv-1",
            "itemName": "Palm oil",
            "quantity": 10,
            "unit": "kg",
            "totalAmount": 1000,
            "shippingFee": 100,
            "costPerUnit": 110,
        }
    )


class TestCalculateProfit:
    def test_profitable_sale(self):
        summary = calculate_profit(Decimal("110"), Decimal("5"), Decimal("150"))
        assert summary.total_selling_amount == Decimal("750")
        assert summary.profit_per_unit == Decimal("40")
        assert summary.total_profit == Decimal("200")
        assert summary.total_cost == Decimal("550")
        assert summary.outcome == ProfitOutcome.PROFIT

    def test_loss_is_a_valid_outcome(self):
        summary = calculate_profit(Decimal("110"), Decimal("5"), Decimal("90"))
        assert summary.total_profit == Decimal("-100")
        assert summary.is_loss
        assert summary.outcome.severity == "destructive"
        assert summary.display()["total_profit"] == "-₦100.00"

    def test_break_even(self):
        summary = calculate_profit(Decimal("110"), Decimal("2"), Decimal("110"))
        assert summary.outcome == ProfitOutcome.BREAK_EVEN
        assert summary.outcome.severity == "neutral"


class TestSummarizeSale:
    def test_uses_item_cost(self, palm_oil):
        summary = summarize_sale(palm_oil, "5", "150")
        assert summary is not None
        assert summary.total_profit == Decimal("200")

    @pytest.mark.parametrize(
        "quantity,price",
        [("", "150"), ("5", ""), (None, "150"), ("five", "150"), ("0", "150"), ("5", "-1")],
    )
    def test_incomplete_form(self, palm_oil, quantity, price):
        assert summarize_sale(palm_oil, quantity, price) is None

    def test_no_item_selected(self):
        assert summarize_sale(None, "5", "150") is None

    def test_free_sale_is_allowed(self, palm_oil):
        summary = summarize_sale(palm_oil, "1", "0")
        assert summary is not None
        assert summary.is_loss
