"""Tests for payment callback reconciliation."""

from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import pytest
from structlog.testing import capture_logs

from stockbook.core.entities import (
    Invoice,
    PaymentCallback,
    ReconciliationRequest,
    Session,
)
from stockbook.core.exceptions import (
    BackendRejectedError,
    BackendUnavailableError,
    InvalidPaymentAmountError,
    PaymentRecordingError,
)
from stockbook.core.interfaces import IBackendClient
from stockbook.core.services import (
    InvoiceReconciler,
    ReconciliationStatus,
    checkout_amount,
)


class FakeBackend:
    """Applies a (invoice, reference) pair at most once, like the real backend."""

    def __init__(self, invoice: dict[str, Any]):
        self.invoice = dict(invoice)
        self.applied: set[tuple[str, str]] = set()
        self.calls: list[tuple[str, ReconciliationRequest]] = []

    async def mark_invoice_paid(
        self, invoice_number: str, request: ReconciliationRequest, session: Session | None = None
    ) -> dict[str, Any]:
        self.calls.append((invoice_number, request))
        self.applied.add((invoice_number, request.payment_reference))
        self.invoice["status"] = "paid"
        return {"success": True, "invoice": dict(self.invoice)}


@pytest.fixture
def callback() -> PaymentCallback:
    return PaymentCallback.from_payload(
        {"reference": "INV-001-1715000000000-abc123xyz", "status": "success", "trans": "987"}
    )


@pytest.fixture
def fake_backend(invoice_payload) -> FakeBackend:
    return FakeBackend(invoice_payload)


class TestCallbackParsing:
    def test_transaction_alias(self):
        cb = PaymentCallback.from_payload({"reference": "r", "transaction": 55})
        assert cb.transaction_id == "55"

    def test_non_dict_payload(self):
        assert not PaymentCallback.from_payload("nope").has_reference


class TestReconcile:
    async def test_empty_reference_makes_no_call(self, mock_backend):
        reconciler = InvoiceReconciler(mock_backend)
        with capture_logs() as logs:
            outcome = await reconciler.reconcile(
                "INV-001", PaymentCallback.from_payload({"reference": "", "status": "success"})
            )

        assert outcome.status == ReconciliationStatus.INVALID_CALLBACK
        assert not outcome.submitted
        mock_backend.mark_invoice_paid.assert_not_called()
        assert any(log["event"] == "payment_callback_invalid" for log in logs)

    async def test_submits_for_flow_invoice(self, fake_backend, callback):
        outcome = await InvoiceReconciler(fake_backend).reconcile("INV-001", callback)

        assert outcome.status == ReconciliationStatus.RECONCILED
        assert outcome.is_paid
        assert outcome.invoice.is_paid
        invoice_number, request = fake_backend.calls[0]
        assert invoice_number == "INV-001"
        assert request.to_payload() == {
            "paymentReference": "INV-001-1715000000000-abc123xyz",
            "paymentData": {
                "reference": "INV-001-1715000000000-abc123xyz",
                "status": "success",
                "trans": "987",
            },
            "transactionId": "987",
            "status": "success",
        }

    async def test_same_callback_twice_is_idempotent(self, fake_backend, callback):
        reconciler = InvoiceReconciler(fake_backend)
        first = await reconciler.reconcile("INV-001", callback)
        second = await reconciler.reconcile("INV-001", callback)

        assert first.status == second.status == ReconciliationStatus.RECONCILED
        assert len(fake_backend.calls) == 2
        assert fake_backend.applied == {("INV-001", callback.reference)}
        assert first.invoice == second.invoice

    async def test_ack_without_invoice_body(self, mock_backend, callback):
        mock_backend.mark_invoice_paid.return_value = {"success": True, "message": "ok"}
        outcome = await InvoiceReconciler(mock_backend).reconcile("INV-001", callback)
        assert outcome.status == ReconciliationStatus.RECONCILED

    async def test_ack_reporting_failure(self, mock_backend, callback):
        mock_backend.mark_invoice_paid.return_value = {"success": False}
        outcome = await InvoiceReconciler(mock_backend).reconcile("INV-001", callback)
        assert outcome.status == ReconciliationStatus.UNCONFIRMED
        assert not outcome.is_paid

    async def test_ack_still_pending(self, mock_backend, callback, invoice_payload):
        mock_backend.mark_invoice_paid.return_value = {"invoice": invoice_payload}
        outcome = await InvoiceReconciler(mock_backend).reconcile("INV-001", callback)
        assert outcome.status == ReconciliationStatus.UNCONFIRMED

    async def test_ack_for_other_invoice(self, mock_backend, callback, invoice_payload):
        mock_backend.mark_invoice_paid.return_value = {
            "invoice": {**invoice_payload, "invoiceNumber": "INV-999", "status": "paid"}
        }
        outcome = await InvoiceReconciler(mock_backend).reconcile("INV-001", callback)
        assert outcome.status == ReconciliationStatus.UNCONFIRMED

    async def test_stale_ack_never_unpays(self, mock_backend, callback, invoice_payload):
        current = Invoice.model_validate({**invoice_payload, "status": "paid"})
        mock_backend.mark_invoice_paid.return_value = {"invoice": invoice_payload}

        outcome = await InvoiceReconciler(mock_backend).reconcile(
            "INV-001", callback, current=current
        )
        assert outcome.invoice.is_paid
        assert outcome.status == ReconciliationStatus.RECONCILED

    @pytest.mark.parametrize(
        "error",
        [
            BackendUnavailableError("mark_invoice_paid", "connection refused"),
            BackendRejectedError("mark_invoice_paid", 500, "boom"),
        ],
    )
    async def test_backend_failure_is_critical(self, callback, error):
        backend = AsyncMock(spec=IBackendClient)
        backend.mark_invoice_paid.side_effect = error

        with pytest.raises(PaymentRecordingError) as exc_info:
            await InvoiceReconciler(backend).reconcile("INV-001", callback)

        exc = exc_info.value
        assert exc.severity == "critical"
        assert not exc.retryable
        assert "contact support" in exc.message
        assert exc.details["reference"] == callback.reference


class TestCheckoutAmount:
    def test_kobo(self, invoice_payload):
        invoice = Invoice.model_validate({**invoice_payload, "totalAmount": "1234.56"})
        assert checkout_amount(invoice) == 123456

    @pytest.mark.parametrize("total", [0, "0.001"])
    def test_rejects_non_positive(self, invoice_payload, total):
        invoice = Invoice.model_validate({**invoice_payload, "totalAmount": total})
        with pytest.raises(InvalidPaymentAmountError):
            checkout_amount(invoice)

    def test_amount_is_decimal(self, invoice_payload):
        invoice = Invoice.model_validate(invoice_payload)
        assert invoice.total_amount == Decimal("750")
