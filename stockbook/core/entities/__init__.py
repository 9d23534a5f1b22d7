"""Core domain entities."""

from stockbook.core.entities.inventory import InventoryItem, NewInventoryItem, Unit
from stockbook.core.entities.invoice import (
    ClientInfo,
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
)
from stockbook.core.entities.order import NewOrder, Order, OrderItemSummary
from stockbook.core.entities.payment import (
    CheckoutConfig,
    CheckoutField,
    CheckoutMetadata,
    PaymentCallback,
    ReconciliationRequest,
)
from stockbook.core.entities.reports import MonthlyProfit
from stockbook.core.entities.session import AuthResponse, Session, User

__all__ = [
    # Inventory entities
    "InventoryItem",
    "NewInventoryItem",
    "Unit",
    # Order entities
    "Order",
    "OrderItemSummary",
    "NewOrder",
    # Invoice entities
    "Invoice",
    "InvoiceLineItem",
    "InvoiceStatus",
    "ClientInfo",
    # Reporting
    "MonthlyProfit",
    # Payment entities
    "PaymentCallback",
    "CheckoutConfig",
    "CheckoutField",
    "CheckoutMetadata",
    "ReconciliationRequest",
    # Session entities
    "Session",
    "User",
    "AuthResponse",
]
