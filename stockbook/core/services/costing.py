"""
Cost-per-unit calculation for inventory purchases.

The same function backs the entry-form preview and any server-side
consumer, so the two can never disagree.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from stockbook.core.money import ZERO, format_currency, round_money, to_decimal


def cost_per_unit(
    quantity: Any,
    total_amount: Any,
    shipping_fee: Any = ZERO,
) -> Decimal | None:
    """
    (total_amount + shipping_fee) / quantity, at full precision.

    Returns None when there is no meaningful cost: quantity <= 0, a
    non-numeric input, or a negative amount. A blank shipping fee counts
    as zero.
    """
    qty = to_decimal(quantity)
    amount = to_decimal(total_amount)
    fee = to_decimal(shipping_fee)
    if fee is None:
        fee = ZERO

    if qty is None or amount is None or qty <= 0:
        return None
    if amount < 0 or fee < 0:
        return None

    return (amount + fee) / qty


@dataclass(frozen=True)
class CostPreview:
    """Cost-per-unit as shown under the inventory entry form."""

    value: Decimal | None
    unit: str = "unit"
    # Preview only; persisted records carry raw inputs
    is_estimate_only: bool = True

    @property
    def is_computable(self) -> bool:
        return self.value is not None

    @property
    def rounded(self) -> Decimal:
        """Two-decimal value; 0.00 when not computable (display only)."""
        return round_money(self.value) if self.value is not None else round_money(ZERO)

    @property
    def display(self) -> str:
        return format_currency(self.value)

    @property
    def caption(self) -> str:
        return f"{self.display} per {self.unit}"


def preview_cost(
    quantity: Any,
    total_amount: Any,
    shipping_fee: Any = None,
    unit: str | None = None,
) -> CostPreview:
    """Preview for possibly half-filled form input."""
    return CostPreview(
        value=cost_per_unit(quantity, total_amount, shipping_fee),
        unit=unit or "unit",
    )
