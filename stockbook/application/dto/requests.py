"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
Numeric form fields arrive as typed by the user (text or number) and are
parsed strictly by the use cases, so a blank field and zero stay distinct.
"""

from pydantic import BaseModel, Field

FormNumber = str | int | float | None


class LoginRequest(BaseModel):
    """Credentials for dashboard login."""

    email: str = Field(..., min_length=1, examples=["owner@example.com"])
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """New dashboard account."""

    name: str = Field(..., min_length=1, examples=["Ada Obi"])
    email: str = Field(..., min_length=1, examples=["ada@example.com"])
    password: str = Field(..., min_length=1)


class AddInventoryRequest(BaseModel):
    """Purchase entry from the inventory form."""

    name: str = Field(default="", description="Item name", examples=["Palm oil"])
    quantity: FormNumber = Field(default=None, description="Quantity purchased")
    unit: str = Field(
        default="",
        description="kg, litre, ml, packs, bottles or cartons",
        examples=["kg"],
    )
    total_amount: FormNumber = Field(default=None, description="Total purchase amount")
    shipping_fee: FormNumber = Field(
        default=None, description="Shipping fee; blank counts as zero"
    )


class CostPreviewRequest(BaseModel):
    """Half-filled inventory form, for the live cost-per-unit caption."""

    quantity: FormNumber = None
    total_amount: FormNumber = None
    shipping_fee: FormNumber = None
    unit: str | None = None


class RecordOrderRequest(BaseModel):
    """Sale entry from the order form."""

    inventory_item_id: str = Field(default="", description="Selected inventory item")
    quantity_sold: FormNumber = Field(default=None, description="Quantity sold")
    selling_price_per_unit: FormNumber = Field(
        default=None, description="Selling price per unit"
    )


class ProfitPreviewRequest(BaseModel):
    """Order form state for the live profit summary."""

    inventory_item_id: str | None = None
    quantity_sold: FormNumber = None
    selling_price_per_unit: FormNumber = None


class GenerateInvoiceRequest(BaseModel):
    """Invoice generation for a recorded order."""

    order_id: str = Field(..., min_length=1, description="Order to invoice")
    client_name: str = Field(default="", description="Invoice recipient name")
    client_email: str = Field(default="", description="Invoice recipient email")

