"""
Invoice domain entities.

Invoices are server-owned; the dashboard holds read-only projections whose
status may only move forward (pending -> paid), never back.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from stockbook.core.entities.inventory import (
    coerce_amount,
    coerce_optional_amount,
    coerce_timestamp,
)
from stockbook.core.exceptions import InvoiceStateError
from stockbook.core.money import ZERO


class InvoiceStatus(str, Enum):
    """Invoice payment status. OVERDUE is only ever asserted by the backend."""

    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> "InvoiceStatus":
        """Map a raw backend status onto the known set."""
        if isinstance(value, InvoiceStatus):
            return value
        if not isinstance(value, str):
            return cls.OTHER
        text = value.strip().lower()
        if text == "unpaid":
            return cls.PENDING
        try:
            return cls(text)
        except ValueError:
            return cls.OTHER

    @property
    def badge(self) -> str:
        """Badge variant used by the invoice table."""
        return {
            InvoiceStatus.PAID: "default",
            InvoiceStatus.PENDING: "secondary",
            InvoiceStatus.OVERDUE: "destructive",
        }.get(self, "outline")


class ClientInfo(BaseModel):
    """Invoice recipient."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    email: str = ""

    @field_validator("name", "email", mode="before")
    @classmethod
    def coerce_string(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()


class InvoiceLineItem(BaseModel):
    """Optional itemized breakdown row."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    quantity: Decimal = ZERO
    unit_price: Decimal = Field(
        default=ZERO, validation_alias=AliasChoices("unitPrice", "unit_price")
    )
    total: Decimal = ZERO

    @field_validator("quantity", "unit_price", "total", mode="before")
    @classmethod
    def coerce_numeric(cls, v: Any) -> Decimal:
        return coerce_amount(v)


class Invoice(BaseModel):
    """Invoice projection with backend field-name variants folded together."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    invoice_number: str = Field(
        validation_alias=AliasChoices("invoiceNumber", "invoice_number")
    )
    id: str | None = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    order_id: str | None = Field(
        default=None, validation_alias=AliasChoices("orderId", "order_id")
    )
    client: ClientInfo = Field(default_factory=ClientInfo)
    status: InvoiceStatus = Field(
        default=InvoiceStatus.PENDING,
        validation_alias=AliasChoices("paymentStatus", "status"),
    )
    issued_date: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("issuedDate", "issuedAt", "issued_date"),
    )
    due_date: datetime | None = Field(
        default=None, validation_alias=AliasChoices("dueDate", "due_date")
    )
    total_amount: Decimal = Field(
        validation_alias=AliasChoices("totalAmount", "total", "total_amount")
    )
    items: list[InvoiceLineItem] = Field(default_factory=list)
    subtotal: Decimal | None = None
    shipping_cost: Decimal | None = Field(
        default=None, validation_alias=AliasChoices("shippingCost", "shipping_cost")
    )
    payment_link: str | None = Field(
        default=None, validation_alias=AliasChoices("paymentLink", "payment_link")
    )

    @field_validator("invoice_number", mode="before")
    @classmethod
    def require_number(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list, bool)) or not str(v).strip():
            raise ValueError("missing invoice number")
        return str(v).strip()

    @field_validator("id", "order_id", mode="before")
    @classmethod
    def coerce_reference(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        if isinstance(v, dict):
            v = v.get("_id") or v.get("id")
            return str(v) if v else None
        return str(v)

    @field_validator("client", mode="before")
    @classmethod
    def default_client(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, ClientInfo)) else {}

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> InvoiceStatus:
        return InvoiceStatus.parse(v)

    @field_validator("issued_date", "due_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> datetime | None:
        return coerce_timestamp(v)

    @field_validator("total_amount", mode="before")
    @classmethod
    def coerce_total(cls, v: Any) -> Decimal:
        return coerce_amount(v)

    @field_validator("subtotal", "shipping_cost", mode="before")
    @classmethod
    def coerce_optional(cls, v: Any) -> Decimal | None:
        return coerce_optional_amount(v)

    @field_validator("items", mode="before")
    @classmethod
    def default_items(cls, v: Any) -> Any:
        return v if isinstance(v, list) else []

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    @property
    def effective_subtotal(self) -> Decimal:
        return self.subtotal if self.subtotal is not None else self.total_amount

    @property
    def effective_shipping_cost(self) -> Decimal:
        return self.shipping_cost if self.shipping_cost is not None else ZERO

    def with_status(self, status: InvoiceStatus) -> "Invoice":
        """Return a copy in the new status; paid invoices never regress."""
        if self.is_paid and status != InvoiceStatus.PAID:
            raise InvoiceStateError(self.invoice_number, self.status.value, status.value)
        return self.model_copy(update={"status": status})
