"""Inventory domain entities."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from stockbook.core.money import ZERO, as_float, to_decimal


class Unit(str, Enum):
    """Units an inventory purchase can be measured in."""

    KG = "kg"
    LITRE = "litre"
    ML = "ml"
    PACKS = "packs"
    BOTTLES = "bottles"
    CARTONS = "cartons"

    @property
    def label(self) -> str:
        return _UNIT_LABELS[self]


_UNIT_LABELS = {
    Unit.KG: "Kilogram (kg)",
    Unit.LITRE: "Litre",
    Unit.ML: "Millilitre (ml)",
    Unit.PACKS: "Packs",
    Unit.BOTTLES: "Bottles",
    Unit.CARTONS: "Cartons",
}


def coerce_amount(v: Any) -> Decimal:
    """Numeric field from the backend: must be a finite, non-negative number."""
    result = to_decimal(v)
    if result is None:
        raise ValueError(f"expected a number, got {type(v).__name__}")
    if result < 0:
        raise ValueError("must not be negative")
    return result


def coerce_optional_amount(v: Any) -> Decimal | None:
    if v is None or v == "":
        return None
    return coerce_amount(v)


def coerce_timestamp(v: Any) -> datetime | None:
    """Parse ISO timestamps; anything unreadable becomes None."""
    if v is None or isinstance(v, datetime):
        return v
    if isinstance(v, str) and v.strip():
        try:
            return datetime.fromisoformat(v.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


class InventoryItem(BaseModel):
    """
    A purchased stock line as returned by the backend.

    cost_per_unit is authoritative server data; it is never recomputed here.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str = Field(validation_alias=AliasChoices("itemName", "name"))
    quantity: Decimal
    unit: Unit
    total_amount: Decimal = Field(
        default=ZERO, validation_alias=AliasChoices("totalAmount", "total_amount")
    )
    shipping_fee: Decimal = Field(
        default=ZERO, validation_alias=AliasChoices("shippingFee", "shipping_fee")
    )
    cost_per_unit: Decimal = Field(
        default=ZERO, validation_alias=AliasChoices("costPerUnit", "cost_per_unit")
    )
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )

    @field_validator("id", "name", mode="before")
    @classmethod
    def require_text(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list, bool)):
            raise ValueError("missing identity field")
        text = str(v).strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v: Any) -> Decimal:
        return coerce_amount(v)

    @field_validator("total_amount", "shipping_fee", "cost_per_unit", mode="before")
    @classmethod
    def coerce_money(cls, v: Any) -> Decimal:
        # Backend omits these on some list payloads
        if v is None or v == "":
            return ZERO
        return coerce_amount(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> datetime | None:
        return coerce_timestamp(v)


class NewInventoryItem(BaseModel):
    """Purchase entry submitted to the backend.

    Carries only raw inputs so the backend computes cost per unit itself.
    """

    name: str
    quantity: Decimal
    unit: Unit
    total_amount: Decimal
    shipping_fee: Decimal = ZERO

    def to_payload(self) -> dict[str, Any]:
        return {
            "itemName": self.name,
            "quantity": as_float(self.quantity),
            "unit": self.unit.value,
            "totalAmount": as_float(self.total_amount),
            "shippingFee": as_float(self.shipping_fee),
        }
