"""
Invoice payment reconciliation.

Turns a payment-widget success callback into an invoice status update on
the backend. The gateway only confirms that money moved; whether the
invoice is paid is decided by the backend's acknowledgement.

Layer-pure: depends on core entities, interfaces and exceptions only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from stockbook.config import get_logger
from stockbook.core.entities import (
    Invoice,
    PaymentCallback,
    ReconciliationRequest,
    Session,
)
from stockbook.core.exceptions import (
    InvalidPaymentAmountError,
    PaymentRecordingError,
    StockbookError,
)
from stockbook.core.interfaces import IBackendClient
from stockbook.core.money import to_subunit
from stockbook.core.services.response_normalizer import normalize_object

logger = get_logger(__name__)


class ReconciliationStatus(str, Enum):
    """Result of handling one gateway callback."""

    RECONCILED = "reconciled"
    UNCONFIRMED = "unconfirmed"
    INVALID_CALLBACK = "invalid_callback"


@dataclass
class ReconciliationOutcome:
    """What happened to one callback."""

    status: ReconciliationStatus
    invoice_number: str
    reference: str = ""
    invoice: Invoice | None = None
    message: str = ""

    @property
    def submitted(self) -> bool:
        return self.status != ReconciliationStatus.INVALID_CALLBACK

    @property
    def is_paid(self) -> bool:
        return self.status == ReconciliationStatus.RECONCILED


def checkout_amount(invoice: Invoice) -> int:
    """Invoice total in kobo; refuses anything that would charge zero or less."""
    if invoice.total_amount <= 0:
        raise InvalidPaymentAmountError(invoice.invoice_number, invoice.total_amount)

    subunits = to_subunit(invoice.total_amount)
    if subunits <= 0:
        raise InvalidPaymentAmountError(invoice.invoice_number, invoice.total_amount)
    return subunits


class InvoiceReconciler:
    """
    Reconciles gateway callbacks against the backend.

    No client-side duplicate suppression: the backend guarantees that the
    same (invoice number, reference) pair applied twice has the effect of
    applying it once, so a user who reopens the payment flow after a
    network blip can always finish reconciling.
    """

    def __init__(self, backend: IBackendClient):
        self._backend = backend

    async def reconcile(
        self,
        invoice_number: str,
        callback: PaymentCallback,
        session: Session | None = None,
        current: Invoice | None = None,
    ) -> ReconciliationOutcome:
        """
        Submit a callback for the invoice that started the payment flow.

        Args:
            invoice_number: Invoice that initiated the flow (never read from
                the callback payload)
            callback: Gateway success callback
            session: Optional session; the pay endpoint is public
            current: Projection held by the caller, used to refuse regressions

        Raises:
            PaymentRecordingError: the backend call failed after the gateway
                reported success
        """
        if not callback.has_reference:
            logger.warning(
                "payment_callback_invalid",
                invoice_number=invoice_number,
                status=callback.status,
                reason="missing reference",
            )
            return ReconciliationOutcome(
                status=ReconciliationStatus.INVALID_CALLBACK,
                invoice_number=invoice_number,
                message="Invalid payment response",
            )

        request = ReconciliationRequest.from_callback(callback)
        logger.info(
            "reconciliation_submitted",
            invoice_number=invoice_number,
            reference=request.payment_reference,
            transaction_id=request.transaction_id,
            gateway_status=request.status,
        )

        try:
            ack = await self._backend.mark_invoice_paid(invoice_number, request, session)
        except StockbookError as e:
            logger.error(
                "reconciliation_failed",
                invoice_number=invoice_number,
                reference=request.payment_reference,
                error=e.message,
                code=e.code,
            )
            raise PaymentRecordingError(
                invoice_number, request.payment_reference, e.message
            ) from e

        return self._interpret_ack(invoice_number, request.payment_reference, ack, current)

    def _interpret_ack(
        self,
        invoice_number: str,
        reference: str,
        ack: Any,
        current: Invoice | None,
    ) -> ReconciliationOutcome:
        invoice = normalize_object(ack, Invoice, ("invoice", "data"))

        if invoice is not None and invoice.invoice_number != invoice_number:
            logger.warning(
                "reconciliation_invoice_mismatch",
                expected=invoice_number,
                received=invoice.invoice_number,
                reference=reference,
            )
            return ReconciliationOutcome(
                status=ReconciliationStatus.UNCONFIRMED,
                invoice_number=invoice_number,
                reference=reference,
                invoice=current,
                message="Backend acknowledged a different invoice",
            )

        if invoice is not None and current is not None and current.is_paid and not invoice.is_paid:
            # A stale acknowledgement never un-pays an invoice
            logger.warning(
                "reconciliation_stale_ack",
                invoice_number=invoice_number,
                acked_status=invoice.status.value,
            )
            invoice = current

        if invoice is not None:
            confirmed = invoice.is_paid
        else:
            confirmed = not (isinstance(ack, dict) and ack.get("success") is False)

        status = (
            ReconciliationStatus.RECONCILED if confirmed else ReconciliationStatus.UNCONFIRMED
        )
        logger.info(
            "reconciliation_acknowledged",
            invoice_number=invoice_number,
            reference=reference,
            status=status.value,
        )
        return ReconciliationOutcome(
            status=status,
            invoice_number=invoice_number,
            reference=reference,
            invoice=invoice,
            message="Payment recorded" if confirmed else "Payment received, awaiting confirmation",
        )
