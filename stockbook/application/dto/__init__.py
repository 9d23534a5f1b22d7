"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from stockbook.application.dto.requests import (
    AddInventoryRequest,
    CostPreviewRequest,
    GenerateInvoiceRequest,
    LoginRequest,
    ProfitPreviewRequest,
    RecordOrderRequest,
    RegisterRequest,
)
from stockbook.application.dto.responses import (
    NO_DATA_MESSAGE,
    AddInventoryResponse,
    BackendHealthResponse,
    CheckoutResponse,
    CostPreviewResponse,
    DashboardOverviewResponse,
    ErrorResponse,
    GenerateInvoiceResponse,
    HealthResponse,
    InventoryItemResponse,
    InventoryListResponse,
    InvoiceLineItemResponse,
    InvoicePageResponse,
    InvoiceResponse,
    MonthlyProfitResponse,
    OrderListResponse,
    OrderResponse,
    PaymentCancelledResponse,
    PaymentReceiptResponse,
    ProfitPreviewResponse,
    ProfitSummaryResponse,
    ReconciliationResponse,
    RecordOrderResponse,
    SectionResponse,
    SessionResponse,
    UserResponse,
)

__all__ = [
    # Requests
    "LoginRequest",
    "RegisterRequest",
    "AddInventoryRequest",
    "CostPreviewRequest",
    "RecordOrderRequest",
    "ProfitPreviewRequest",
    "GenerateInvoiceRequest",
    # Responses
    "NO_DATA_MESSAGE",
    "SessionResponse",
    "UserResponse",
    "InventoryItemResponse",
    "AddInventoryResponse",
    "InventoryListResponse",
    "CostPreviewResponse",
    "OrderResponse",
    "OrderListResponse",
    "RecordOrderResponse",
    "ProfitSummaryResponse",
    "ProfitPreviewResponse",
    "MonthlyProfitResponse",
    "InvoiceResponse",
    "InvoiceLineItemResponse",
    "InvoicePageResponse",
    "GenerateInvoiceResponse",
    "SectionResponse",
    "DashboardOverviewResponse",
    "CheckoutResponse",
    "ReconciliationResponse",
    "PaymentCancelledResponse",
    "PaymentReceiptResponse",
    "HealthResponse",
    "BackendHealthResponse",
    "ErrorResponse",
]
