"""Application use cases.

Each use case takes its collaborators optionally; when omitted they are
resolved from application.services on first use.
"""

from stockbook.application.use_cases.authenticate import LoginUseCase, RegisterUseCase
from stockbook.application.use_cases.check_backend import CheckBackendUseCase
from stockbook.application.use_cases.dashboard_overview import (
    DashboardOverviewUseCase,
    DashboardRegistry,
    DashboardState,
    SectionState,
    get_dashboard_registry,
)
from stockbook.application.use_cases.load_monthly_profit import LoadMonthlyProfitUseCase
from stockbook.application.use_cases.manage_inventory import (
    AddInventoryResult,
    AddInventoryUseCase,
    ListInventoryUseCase,
    PreviewCostUseCase,
)
from stockbook.application.use_cases.manage_invoices import (
    DownloadInvoiceUseCase,
    GenerateInvoiceResult,
    GenerateInvoiceUseCase,
    InvoiceDocument,
    InvoicePage,
    ListInvoicesUseCase,
)
from stockbook.application.use_cases.pay_invoice import (
    CancelPaymentUseCase,
    CheckoutResult,
    GetPaymentInvoiceUseCase,
    HandlePaymentCallbackUseCase,
    PaymentReceiptUseCase,
    StartCheckoutUseCase,
)
from stockbook.application.use_cases.record_order import (
    ListOrdersUseCase,
    PreviewProfitUseCase,
    RecordOrderResult,
    RecordOrderUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "RegisterUseCase",
    # Inventory
    "AddInventoryUseCase",
    "AddInventoryResult",
    "ListInventoryUseCase",
    "PreviewCostUseCase",
    # Orders
    "RecordOrderUseCase",
    "RecordOrderResult",
    "ListOrdersUseCase",
    "PreviewProfitUseCase",
    # Reports
    "LoadMonthlyProfitUseCase",
    "DashboardOverviewUseCase",
    "DashboardRegistry",
    "DashboardState",
    "SectionState",
    "get_dashboard_registry",
    # Invoices
    "GenerateInvoiceUseCase",
    "GenerateInvoiceResult",
    "ListInvoicesUseCase",
    "InvoicePage",
    "DownloadInvoiceUseCase",
    "InvoiceDocument",
    # Payments
    "GetPaymentInvoiceUseCase",
    "StartCheckoutUseCase",
    "CheckoutResult",
    "HandlePaymentCallbackUseCase",
    "CancelPaymentUseCase",
    "PaymentReceiptUseCase",
    # Health
    "CheckBackendUseCase",
]
