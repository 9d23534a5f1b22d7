"""Tests for cost-per-unit calculation."""

from decimal import Decimal

import pytest

from stockbook.core.services import cost_per_unit, preview_cost


class TestCostPerUnit:
    def test_includes_shipping(self):
        # 10 kg bought for 1000 with 100 shipping
        assert cost_per_unit(10, 1000, 100) == Decimal("110")

    def test_blank_shipping_counts_as_zero(self):
        assert cost_per_unit("4", "2000", "") == Decimal("500")

    def test_full_precision(self):
        assert cost_per_unit(3, 10) == Decimal("10") / Decimal("3")

    @pytest.mark.parametrize("quantity", [0, -2, "", None, "abc"])
    def test_no_cost_without_positive_quantity(self, quantity):
        assert cost_per_unit(quantity, 1000, 100) is None

    def test_negative_amounts(self):
        assert cost_per_unit(1, -5) is None
        assert cost_per_unit(1, 5, -1) is None


class TestCostPreview:
    def test_caption(self):
        preview = preview_cost(10, 1000, 100, unit="kg")
        assert preview.is_computable
        assert preview.rounded == Decimal("110.00")
        assert preview.caption == "₦110.00 per kg"

    def test_zero_quantity_shows_zero(self):
        preview = preview_cost(0, 1000)
        assert not preview.is_computable
        assert preview.display == "₦0.00"
        assert preview.rounded == Decimal("0.00")

    def test_always_estimate(self):
        assert preview_cost(1, 1).is_estimate_only

    def test_huge_cost_still_displays(self):
        # 1000 spread over a vanishing quantity gives a 29-digit cost
        preview = preview_cost("0.0000000000000000000000001", "1000", None, "kg")
        assert preview.is_computable
        assert preview.rounded == Decimal("10000000000000000000000000000.00")
        assert preview.display.startswith("₦10,000,000,000")
        assert preview.caption.endswith(" per kg")
