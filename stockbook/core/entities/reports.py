"""Reporting aggregates."""

from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from stockbook.core.money import to_decimal


class MonthlyProfit(BaseModel):
    """
    Current month's rollup as computed by the backend.

    total_profit is displayed as given, never recomputed from revenue and cost.
    month/year only label the period; the backend owns the period boundaries.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    total_revenue: Decimal = Field(
        validation_alias=AliasChoices("totalRevenue", "total_revenue")
    )
    total_cost: Decimal = Field(validation_alias=AliasChoices("totalCost", "total_cost"))
    total_profit: Decimal = Field(
        validation_alias=AliasChoices("totalProfit", "total_profit")
    )
    month: str = ""
    year: int = 0

    @field_validator("total_revenue", "total_cost", "total_profit", mode="before")
    @classmethod
    def coerce_numeric(cls, v: Any) -> Decimal:
        result = to_decimal(v)
        if result is None:
            raise ValueError("expected a number")
        return result

    @property
    def is_loss(self) -> bool:
        return self.total_profit < 0

    @property
    def period_label(self) -> str:
        return f"{self.month} {self.year}".strip()
