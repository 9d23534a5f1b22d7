"""API test fixtures: the app with use cases wired to a mock backend."""

from collections.abc import AsyncIterator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from stockbook.api import dependencies as deps
from stockbook.api.main import app
from stockbook.application.use_cases import (
    AddInventoryUseCase,
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
    PreviewProfitUseCase,
    RecordOrderUseCase,
    RegisterUseCase,
    StartCheckoutUseCase,
)
from stockbook.application.use_cases.dashboard_overview import DashboardRegistry
from stockbook.config.settings import PaystackSettings
from stockbook.infrastructure.payments import PaystackGateway



@pytest.fixture
def gateway() -> PaystackGateway:
    """Paystack handle whose script download always succeeds."""
    return PaystackGateway(
        settings=PaystackSettings(public_key="pk_test_123"),
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="")),
    )


@pytest.fixture
async def api_client(mock_backend, gateway) -> AsyncIterator[AsyncClient]:
    backend = mock_backend
    app.dependency_overrides.update(
        {
            deps.get_login_use_case: lambda: LoginUseCase(backend),
            deps.get_register_use_case: lambda: RegisterUseCase(backend),
            deps.get_add_inventory_use_case: lambda: AddInventoryUseCase(backend),
            deps.get_list_inventory_use_case: lambda: ListInventoryUseCase(backend),
            deps.get_record_order_use_case: lambda: RecordOrderUseCase(backend),
            deps.get_list_orders_use_case: lambda: ListOrdersUseCase(backend),
            deps.get_preview_profit_use_case: lambda: PreviewProfitUseCase(backend),
            deps.get_monthly_profit_use_case: lambda: LoadMonthlyProfitUseCase(backend),
            deps.get_dashboard_overview_use_case: lambda: DashboardOverviewUseCase(
                backend, DashboardRegistry()
            ),
            deps.get_generate_invoice_use_case: lambda: GenerateInvoiceUseCase(backend),
            deps.get_list_invoices_use_case: lambda: ListInvoicesUseCase(backend),
            deps.get_download_invoice_use_case: lambda: DownloadInvoiceUseCase(backend),
            deps.get_payment_invoice_use_case: lambda: GetPaymentInvoiceUseCase(backend),
            deps.get_start_checkout_use_case: lambda: StartCheckoutUseCase(backend, gateway),
            deps.get_payment_callback_use_case: lambda: HandlePaymentCallbackUseCase(backend),
            deps.get_check_backend_use_case: lambda: CheckBackendUseCase(backend, gateway),
        }
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
