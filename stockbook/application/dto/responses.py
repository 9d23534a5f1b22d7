"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization. Money goes out both as
a float (two decimals) and as a display string; the display string is for
rendering only.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

NO_DATA_MESSAGE = "No Data Available"


# --- Session ---


class UserResponse(BaseModel):
    id: str = ""
    name: str = ""
    email: str = ""


class SessionResponse(BaseModel):
    """Token and profile returned by login/register."""

    token: str
    user: UserResponse


# --- Inventory ---


class InventoryItemResponse(BaseModel):
    """Inventory row view."""

    id: str
    name: str
    quantity: float
    unit: str
    unit_label: str
    total_amount: float
    shipping_fee: float
    cost_per_unit: float
    cost_per_unit_display: str
    created_at: datetime | None = None


class AddInventoryResponse(BaseModel):
    """Backend echo of the saved item, when it sent one."""

    item: InventoryItemResponse | None = None
    message: str = "Inventory item added successfully"


class InventoryListResponse(BaseModel):
    items: list[InventoryItemResponse] = Field(default_factory=list)
    total: int = 0
    malformed: bool = Field(
        default=False, description="Backend payload had an unexpected shape"
    )


class CostPreviewResponse(BaseModel):
    """Live cost-per-unit caption for the inventory form."""

    cost_per_unit: float | None = Field(
        default=None, description="Full-precision value, null when not computable"
    )
    rounded: float
    display: str
    caption: str
    is_computable: bool
    is_estimate_only: bool = True


# --- Orders ---


class OrderResponse(BaseModel):
    """Order row view; derived figures are the backend's."""

    id: str
    inventory_item_id: str | None = None
    item_name: str = ""
    unit: str = ""
    quantity_sold: float
    selling_price_per_unit: float
    total_selling_amount: float | None = None
    profit_per_unit: float | None = None
    total_profit: float | None = None
    total_profit_display: str = ""
    is_loss: bool = False
    created_at: datetime | None = None


class RecordOrderResponse(BaseModel):
    order: OrderResponse | None = None
    message: str = "Order created successfully"


class OrderListResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)
    total: int = 0
    malformed: bool = False


class ProfitSummaryResponse(BaseModel):
    """Order-form profit summary."""

    cost_per_unit: float
    quantity_sold: float
    selling_price_per_unit: float
    total_cost: float
    total_selling_amount: float
    profit_per_unit: float
    total_profit: float
    outcome: str
    severity: str
    display: dict[str, str] = Field(default_factory=dict)


class ProfitPreviewResponse(BaseModel):
    """Null summary means the form is not complete yet."""

    summary: ProfitSummaryResponse | None = None


# --- Reports ---


class MonthlyProfitResponse(BaseModel):
    """Monthly rollup card. ``available`` is false when there is no data."""

    available: bool
    message: str | None = None
    period: str | None = None
    total_revenue: float | None = None
    total_cost: float | None = None
    total_profit: float | None = None
    total_revenue_display: str | None = None
    total_cost_display: str | None = None
    total_profit_display: str | None = None
    is_loss: bool = False


# --- Invoices ---


class InvoiceLineItemResponse(BaseModel):
    name: str
    quantity: float
    unit_price: float
    total: float


class InvoiceResponse(BaseModel):
    """Invoice view, used by the table and the public payment page."""

    invoice_number: str
    id: str | None = None
    order_id: str | None = None
    client_name: str = ""
    client_email: str = ""
    status: str
    status_badge: str
    is_paid: bool
    issued_date: datetime | None = None
    due_date: datetime | None = None
    total_amount: float
    total_display: str
    subtotal: float
    shipping_cost: float
    items: list[InvoiceLineItemResponse] = Field(default_factory=list)
    payment_link: str | None = None


class GenerateInvoiceResponse(BaseModel):
    invoice: InvoiceResponse | None = None
    message: str = "Invoice generated successfully"


class InvoicePageResponse(BaseModel):
    """One page of the invoice table."""

    invoices: list[InvoiceResponse] = Field(default_factory=list)
    page: int
    page_size: int
    total: int
    total_pages: int
    has_more: bool
    malformed: bool = False


# --- Dashboard ---


class SectionResponse(BaseModel):
    """One dashboard section: data, or the error that section hit."""

    loaded: bool
    data: Any = None
    error: "ErrorResponse | None" = None
    ticket: int = 0


class DashboardOverviewResponse(BaseModel):
    inventory: SectionResponse
    orders: SectionResponse
    invoices: SectionResponse
    monthly_profit: SectionResponse
    refreshed_at: datetime = Field(default_factory=datetime.now)


# --- Payments ---


class CheckoutResponse(BaseModel):
    """Everything the page needs to open the payment widget."""

    invoice_number: str
    reference: str
    amount_subunits: int
    amount_display: str
    config: dict[str, Any]


class ReconciliationResponse(BaseModel):
    status: str
    invoice_number: str
    reference: str = ""
    is_paid: bool
    message: str
    invoice: InvoiceResponse | None = None


class PaymentCancelledResponse(BaseModel):
    invoice_number: str
    title: str = "Payment Cancelled"
    message: str = "Payment was cancelled. You can try again anytime."


class PaymentReceiptResponse(BaseModel):
    """Payment success page."""

    found: bool
    reference: str | None = None
    invoice_number: str | None = None
    amount: float | None = None
    amount_display: str | None = None
    status: str | None = None
    message: str


# --- Health ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float


class BackendHealthResponse(BaseModel):
    """Upstream connectivity and payment widget readiness."""

    available: bool
    base_url: str
    status_code: int | None = None
    error: str | None = None
    response_time_ms: float | None = None
    payment_configured: bool
    payment_ready: bool


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. BACKEND_UNAVAILABLE)
    - message: human-readable description
    - hint: suggested recovery action
    - retryable/severity: how the UI should present it
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    retryable: bool = Field(default=False, description="Same action may succeed later")
    severity: str = Field(default="error", description="error or critical")
    timestamp: datetime = Field(default_factory=datetime.now)


SectionResponse.model_rebuild()
