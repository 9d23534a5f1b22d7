"""Sale profit calculation against an item's authoritative cost basis."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from stockbook.core.entities import InventoryItem
from stockbook.core.money import ZERO, format_currency, is_blank, to_decimal


class ProfitOutcome(str, Enum):
    """Sign of a sale's profit. A loss is a valid state, not an error."""

    PROFIT = "profit"
    LOSS = "loss"
    BREAK_EVEN = "break_even"

    @property
    def severity(self) -> str:
        """Visual channel the summary is rendered on."""
        return {
            ProfitOutcome.PROFIT: "success",
            ProfitOutcome.LOSS: "destructive",
        }.get(self, "neutral")


@dataclass(frozen=True)
class ProfitSummary:
    """Derived figures for one sale."""

    cost_per_unit: Decimal
    quantity_sold: Decimal
    selling_price_per_unit: Decimal
    total_selling_amount: Decimal
    profit_per_unit: Decimal
    total_profit: Decimal

    @property
    def total_cost(self) -> Decimal:
        return self.quantity_sold * self.cost_per_unit

    @property
    def outcome(self) -> ProfitOutcome:
        if self.total_profit > 0:
            return ProfitOutcome.PROFIT
        if self.total_profit < 0:
            return ProfitOutcome.LOSS
        return ProfitOutcome.BREAK_EVEN

    @property
    def is_loss(self) -> bool:
        return self.outcome == ProfitOutcome.LOSS

    def display(self) -> dict[str, str]:
        return {
            "cost_per_unit": format_currency(self.cost_per_unit),
            "total_selling_amount": format_currency(self.total_selling_amount),
            "profit_per_unit": format_currency(self.profit_per_unit),
            "total_profit": format_currency(self.total_profit),
        }


def calculate_profit(
    cost_per_unit: Decimal,
    quantity_sold: Decimal,
    selling_price_per_unit: Decimal,
) -> ProfitSummary:
    """
    total_selling_amount = quantity_sold * selling_price_per_unit
    profit_per_unit      = selling_price_per_unit - cost_per_unit
    total_profit         = quantity_sold * profit_per_unit
    """
    total_selling_amount = quantity_sold * selling_price_per_unit
    profit_per_unit = selling_price_per_unit - cost_per_unit
    return ProfitSummary(
        cost_per_unit=cost_per_unit,
        quantity_sold=quantity_sold,
        selling_price_per_unit=selling_price_per_unit,
        total_selling_amount=total_selling_amount,
        profit_per_unit=profit_per_unit,
        total_profit=quantity_sold * profit_per_unit,
    )


def summarize_sale(
    item: InventoryItem | None,
    quantity_sold: Any,
    selling_price_per_unit: Any,
) -> ProfitSummary | None:
    """
    Order-form summary, or None while the form is incomplete.

    Needs a selected item plus a positive quantity and a non-negative
    price that both parse as numbers. Absent is not the same as zero.
    """
    if item is None or is_blank(quantity_sold) or is_blank(selling_price_per_unit):
        return None

    qty = to_decimal(quantity_sold)
    price = to_decimal(selling_price_per_unit)
    if qty is None or price is None or qty <= 0 or price < ZERO:
        return None

    return calculate_profit(item.cost_per_unit, qty, price)
