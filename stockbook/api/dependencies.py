"""
Dependency injection container for FastAPI.

Provides the request session and use case instances to route handlers.
Tests replace these through ``app.dependency_overrides``.
"""

from fastapi import Header

from stockbook.application.use_cases import (
    AddInventoryUseCase,
    CancelPaymentUseCase,
    CheckBackendUseCase,
    DashboardOverviewUseCase,
    DownloadInvoiceUseCase,
    GenerateInvoiceUseCase,
    GetPaymentInvoiceUseCase,
    HandlePaymentCallbackUseCase,
    ListInventoryUseCase,
    ListInvoicesUseCase,
    ListOrdersUseCase,
    LoadMonthlyProfitUseCase,
    LoginUseCase,
    PaymentReceiptUseCase,
    PreviewCostUseCase,
    PreviewProfitUseCase,
    RecordOrderUseCase,
    RegisterUseCase,
    StartCheckoutUseCase,
)
from stockbook.core.entities import Session


def get_session(authorization: str | None = Header(default=None)) -> Session:
    """Session snapshot for this request, from the Bearer header.

    Never fails here; operations that need a token refuse on their own.
    """
    return Session.from_bearer(authorization)


# Auth
def get_login_use_case() -> LoginUseCase:
    return LoginUseCase()


def get_register_use_case() -> RegisterUseCase:
    return RegisterUseCase()


# Inventory
def get_add_inventory_use_case() -> AddInventoryUseCase:
    return AddInventoryUseCase()


def get_list_inventory_use_case() -> ListInventoryUseCase:
    return ListInventoryUseCase()


def get_preview_cost_use_case() -> PreviewCostUseCase:
    return PreviewCostUseCase()


# Orders
def get_record_order_use_case() -> RecordOrderUseCase:
    return RecordOrderUseCase()


def get_list_orders_use_case() -> ListOrdersUseCase:
    return ListOrdersUseCase()


def get_preview_profit_use_case() -> PreviewProfitUseCase:
    return PreviewProfitUseCase()


# Dashboard
def get_monthly_profit_use_case() -> LoadMonthlyProfitUseCase:
    return LoadMonthlyProfitUseCase()


def get_dashboard_overview_use_case() -> DashboardOverviewUseCase:
    return DashboardOverviewUseCase()


# Invoices
def get_generate_invoice_use_case() -> GenerateInvoiceUseCase:
    return GenerateInvoiceUseCase()


def get_list_invoices_use_case() -> ListInvoicesUseCase:
    return ListInvoicesUseCase()


def get_download_invoice_use_case() -> DownloadInvoiceUseCase:
    return DownloadInvoiceUseCase()


# Payments
def get_payment_invoice_use_case() -> GetPaymentInvoiceUseCase:
    return GetPaymentInvoiceUseCase()


def get_start_checkout_use_case() -> StartCheckoutUseCase:
    return StartCheckoutUseCase()


def get_payment_callback_use_case() -> HandlePaymentCallbackUseCase:
    return HandlePaymentCallbackUseCase()


def get_cancel_payment_use_case() -> CancelPaymentUseCase:
    return CancelPaymentUseCase()


def get_payment_receipt_use_case() -> PaymentReceiptUseCase:
    return PaymentReceiptUseCase()


# Health
def get_check_backend_use_case() -> CheckBackendUseCase:
    return CheckBackendUseCase()
