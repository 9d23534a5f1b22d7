"""Sales order domain entities."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from stockbook.core.entities.inventory import coerce_amount, coerce_timestamp
from stockbook.core.money import as_float, to_decimal


class OrderItemSummary(BaseModel):
    """Inventory fields the backend embeds in an order."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    name: str = Field(default="", validation_alias=AliasChoices("itemName", "name"))
    unit: str = ""
    cost_per_unit: Decimal | None = Field(
        default=None, validation_alias=AliasChoices("costPerUnit", "cost_per_unit")
    )

    @field_validator("cost_per_unit", mode="before")
    @classmethod
    def lenient_cost(cls, v: Any) -> Decimal | None:
        return to_decimal(v)


class Order(BaseModel):
    """A recorded sale. Derived totals are as reported by the backend."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    inventory_item_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("inventoryItemId", "inventory_item_id"),
    )
    inventory_item: OrderItemSummary | None = Field(
        default=None, validation_alias=AliasChoices("inventoryItem", "inventory_item")
    )
    quantity_sold: Decimal = Field(
        validation_alias=AliasChoices("quantitySold", "quantity_sold")
    )
    selling_price_per_unit: Decimal = Field(
        validation_alias=AliasChoices("sellingPricePerUnit", "selling_price_per_unit")
    )
    total_selling_amount: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices("totalSellingAmount", "total_selling_amount"),
    )
    profit_per_unit: Decimal | None = Field(
        default=None, validation_alias=AliasChoices("profitPerUnit", "profit_per_unit")
    )
    total_profit: Decimal | None = Field(
        default=None, validation_alias=AliasChoices("totalProfit", "total_profit")
    )
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )

    @model_validator(mode="before")
    @classmethod
    def split_item_reference(cls, data: Any) -> Any:
        """inventoryItem is either a populated object or a bare id."""
        if isinstance(data, dict):
            ref = data.get("inventoryItem")
            if isinstance(ref, str):
                data = {k: v for k, v in data.items() if k != "inventoryItem"}
                data.setdefault("inventoryItemId", ref)
            elif isinstance(ref, dict) and not data.get("inventoryItemId"):
                ref_id = ref.get("_id") or ref.get("id")
                if ref_id:
                    data = {**data, "inventoryItemId": str(ref_id)}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def require_id(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list, bool)) or not str(v).strip():
            raise ValueError("missing identity field")
        return str(v).strip()

    @field_validator("quantity_sold", "selling_price_per_unit", mode="before")
    @classmethod
    def coerce_required(cls, v: Any) -> Decimal:
        return coerce_amount(v)

    @field_validator(
        "total_selling_amount", "profit_per_unit", "total_profit", mode="before"
    )
    @classmethod
    def coerce_derived(cls, v: Any) -> Decimal | None:
        # Profit figures may legitimately be negative
        if v is None or v == "":
            return None
        result = to_decimal(v)
        if result is None:
            raise ValueError("expected a number")
        return result

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> datetime | None:
        return coerce_timestamp(v)

    @property
    def is_loss(self) -> bool:
        return self.total_profit is not None and self.total_profit < 0


class NewOrder(BaseModel):
    """Sale submitted to the backend."""

    inventory_item_id: str
    quantity_sold: Decimal
    selling_price_per_unit: Decimal

    def to_payload(self) -> dict[str, Any]:
        return {
            "inventoryItemId": self.inventory_item_id,
            "quantitySold": as_float(self.quantity_sold),
            "sellingPricePerUnit": as_float(self.selling_price_per_unit),
        }
