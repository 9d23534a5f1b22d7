"""
Public invoice payment flow.

A client opens the payment page for an invoice number, the page loads the
payment widget with a checkout config built here, and the widget's success
callback is reconciled against the backend for that same invoice number.
"""

from dataclasses import dataclass
from typing import Any

from stockbook.application.dto.responses import (
    CheckoutResponse,
    PaymentCancelledResponse,
    PaymentReceiptResponse,
    ReconciliationResponse,
)
from stockbook.application.services import get_backend, get_gateway, get_invoice_reconciler
from stockbook.application.use_cases.views import invoice_view
from stockbook.config import get_logger, get_settings
from stockbook.core.entities import CheckoutConfig, Invoice, PaymentCallback, Session
from stockbook.core.exceptions import (
    BackendError,
    BackendRejectedError,
    InvoiceStateError,
    PaymentConfigurationError,
    ValidationError,
)
from stockbook.core.interfaces import IBackendClient, IPaymentGateway
from stockbook.core.money import format_currency, round_money, to_decimal
from stockbook.core.services import (
    InvoiceReconciler,
    ReconciliationOutcome,
    checkout_amount,
    normalize_object,
)

logger = get_logger(__name__)


def _require_number(invoice_number: str) -> str:
    number = invoice_number.strip()
    if not number:
        raise ValidationError("invoice_number", "is required")
    return number


class GetPaymentInvoiceUseCase:
    """Fetch an invoice by number for the public payment page."""

    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(self, invoice_number: str, session: Session | None = None) -> Invoice:
        number = _require_number(invoice_number)
        payload = await get_backend(self._backend).get_invoice(number, session)
        invoice = normalize_object(payload, Invoice, ("invoice", "data"))
        if invoice is None:
            logger.warning("payment_invoice_malformed", invoice_number=number)
            raise BackendRejectedError("get_invoice", 404, "Invoice not found")
        return invoice


@dataclass
class CheckoutResult:
    invoice: Invoice
    amount_subunits: int
    config: CheckoutConfig


class StartCheckoutUseCase:
    """
    Build the payment widget config for an invoice.

    Refuses before any backend call when the widget has no public key,
    and loads the widget handle on first use.
    """

    def __init__(
        self,
        backend: IBackendClient | None = None,
        gateway: IPaymentGateway | None = None,
    ):
        self._backend = backend
        self._gateway = gateway

    async def execute(self, invoice_number: str) -> CheckoutResult:
        gateway = get_gateway(self._gateway)
        if not gateway.is_configured:
            raise PaymentConfigurationError()
        if not gateway.is_ready:
            await gateway.load()

        invoice = await GetPaymentInvoiceUseCase(self._backend).execute(invoice_number)
        if invoice.is_paid:
            raise InvoiceStateError(invoice.invoice_number, invoice.status.value, "checkout")

        amount = checkout_amount(invoice)
        reference = gateway.new_reference(invoice.invoice_number)
        config = gateway.build_checkout(invoice, amount, reference)

        logger.info(
            "checkout_started",
            invoice_number=invoice.invoice_number,
            reference=reference,
            amount_subunits=amount,
        )
        return CheckoutResult(invoice=invoice, amount_subunits=amount, config=config)

    def to_response(self, result: CheckoutResult) -> CheckoutResponse:
        return CheckoutResponse(
            invoice_number=result.invoice.invoice_number,
            reference=result.config.ref,
            amount_subunits=result.amount_subunits,
            amount_display=format_currency(
                result.invoice.total_amount, get_settings().display.currency_symbol
            ),
            config=result.config.to_payload(),
        )


class HandlePaymentCallbackUseCase:
    """Reconcile a widget success callback for the invoice in the URL."""

    def __init__(
        self,
        backend: IBackendClient | None = None,
        reconciler: InvoiceReconciler | None = None,
    ):
        self._backend = backend
        self._reconciler = reconciler

    async def _current_invoice(self, invoice_number: str, session: Session | None) -> Invoice | None:
        """Projection used to refuse a stale acknowledgement; optional."""
        try:
            return await GetPaymentInvoiceUseCase(self._backend).execute(invoice_number, session)
        except BackendError as e:
            logger.warning(
                "current_invoice_unavailable",
                invoice_number=invoice_number,
                error=e.message,
            )
            return None

    async def execute(
        self,
        invoice_number: str,
        payload: Any,
        session: Session | None = None,
    ) -> ReconciliationOutcome:
        number = _require_number(invoice_number)
        callback = PaymentCallback.from_payload(payload)
        reconciler = self._reconciler or get_invoice_reconciler(self._backend)

        current = None
        if callback.has_reference:
            current = await self._current_invoice(number, session)
        return await reconciler.reconcile(number, callback, session=session, current=current)

    def to_response(self, result: ReconciliationOutcome) -> ReconciliationResponse:
        return ReconciliationResponse(
            status=result.status.value,
            invoice_number=result.invoice_number,
            reference=result.reference,
            is_paid=result.is_paid,
            message=result.message,
            invoice=invoice_view(result.invoice) if result.invoice else None,
        )


class CancelPaymentUseCase:
    """Widget closed without paying. Nothing is sent to the backend."""

    def execute(self, invoice_number: str) -> PaymentCancelledResponse:
        number = _require_number(invoice_number)
        logger.info("payment_cancelled", invoice_number=number)
        return PaymentCancelledResponse(invoice_number=number)


class PaymentReceiptUseCase:
    """Success page details, read from the redirect's query parameters."""

    def execute(
        self,
        reference: str | None,
        invoice_number: str | None = None,
        amount: str | None = None,
    ) -> PaymentReceiptResponse:
        reference = (reference or "").strip()
        if not reference:
            return PaymentReceiptResponse(
                found=False, message="No payment details were found."
            )

        value = to_decimal(amount)
        return PaymentReceiptResponse(
            found=True,
            reference=reference,
            invoice_number=(invoice_number or "").strip() or None,
            amount=float(round_money(value)) if value is not None else None,
            amount_display=(
                format_currency(value, get_settings().display.currency_symbol)
                if value is not None
                else None
            ),
            status="success",
            message=(
                "Your payment has been processed successfully. "
                "Thank you for your business!"
            ),
        )
