"""
Public invoice payment endpoints.

These are reachable from the link sent to the client and need no login.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from stockbook.api.dependencies import (
    get_cancel_payment_use_case,
    get_payment_callback_use_case,
    get_payment_invoice_use_case,
    get_payment_receipt_use_case,
    get_session,
    get_start_checkout_use_case,
)
from stockbook.application.dto.responses import (
    CheckoutResponse,
    ErrorResponse,
    InvoiceResponse,
    PaymentCancelledResponse,
    PaymentReceiptResponse,
    ReconciliationResponse,
)
from stockbook.application.use_cases import (
    CancelPaymentUseCase,
    GetPaymentInvoiceUseCase,
    HandlePaymentCallbackUseCase,
    PaymentReceiptUseCase,
    StartCheckoutUseCase,
)
from stockbook.application.use_cases.views import invoice_view
from stockbook.core.entities import Session

router = APIRouter(prefix="/api/payments", tags=["payments"])


# Registered before /{invoice_number} so "success" is not read as an invoice number
@router.get("/success", response_model=PaymentReceiptResponse)
async def payment_success(
    reference: str | None = Query(default=None),
    invoice: str | None = Query(default=None, description="Invoice number"),
    amount: str | None = Query(default=None),
    use_case: PaymentReceiptUseCase = Depends(get_payment_receipt_use_case),
) -> PaymentReceiptResponse:
    return use_case.execute(reference, invoice, amount)


@router.get(
    "/{invoice_number}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def get_payment_invoice(
    invoice_number: str,
    session: Session = Depends(get_session),
    use_case: GetPaymentInvoiceUseCase = Depends(get_payment_invoice_use_case),
) -> InvoiceResponse:
    """Invoice details for the payment page."""
    invoice = await use_case.execute(invoice_number, session)
    return invoice_view(invoice)


@router.post(
    "/{invoice_number}/checkout",
    response_model=CheckoutResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def start_checkout(
    invoice_number: str,
    use_case: StartCheckoutUseCase = Depends(get_start_checkout_use_case),
) -> CheckoutResponse:
    """Payment widget setup for the invoice, amount in kobo."""
    result = await use_case.execute(invoice_number)
    return use_case.to_response(result)


@router.post(
    "/{invoice_number}/callback",
    response_model=ReconciliationResponse,
    responses={502: {"model": ErrorResponse}},
)
async def payment_callback(
    invoice_number: str,
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
    use_case: HandlePaymentCallbackUseCase = Depends(get_payment_callback_use_case),
) -> ReconciliationResponse:
    """
    Reconcile the widget's success callback with the backend.

    A callback that is not a JSON object, or has no reference, is answered
    with ``invalid_callback`` and nothing is sent to the backend. If the
    backend cannot record a successful payment the response is a critical
    502.
    """
    raw = payload if payload is not None else {}
    result = await use_case.execute(invoice_number, raw, session)
    return use_case.to_response(result)


@router.post("/{invoice_number}/cancel", response_model=PaymentCancelledResponse)
async def cancel_payment(
    invoice_number: str,
    use_case: CancelPaymentUseCase = Depends(get_cancel_payment_use_case),
) -> PaymentCancelledResponse:
    return use_case.execute(invoice_number)
