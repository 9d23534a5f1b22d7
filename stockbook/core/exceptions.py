"""
Domain exceptions for the Stockbook dashboard.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class StockbookError(Exception):
    """Base exception for all Stockbook errors."""

    # Whether the user can reasonably try the same action again
    retryable: bool = False
    severity: str = "error"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
            "severity": self.severity,
        }


# Validation Exceptions
class ValidationError(StockbookError):
    """Input validation failed before reaching the backend."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Session Exceptions
class AuthenticationRequiredError(StockbookError):
    """Authenticated call attempted without a session token."""

    def __init__(self, operation: str):
        super().__init__(
            f"Authentication token not found for {operation}",
            code="AUTHENTICATION_REQUIRED",
            details={"operation": operation},
        )


# Backend Exceptions
class BackendError(StockbookError):
    """Base exception for upstream backend calls."""

    pass


class BackendUnavailableError(BackendError):
    """Transport-level failure talking to the backend."""

    retryable = True

    def __init__(self, operation: str, reason: str | None = None):
        super().__init__(
            f"Backend unavailable during {operation}" + (f" - {reason}" if reason else ""),
            code="BACKEND_UNAVAILABLE",
            details={"operation": operation, "reason": reason},
        )


class BackendRejectedError(BackendError):
    """Backend answered with a non-2xx status."""

    def __init__(self, operation: str, status_code: int, message: str):
        super().__init__(
            message,
            code="BACKEND_REJECTED",
            details={"operation": operation, "status_code": status_code},
        )
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


# Invoice Exceptions
class InvoiceStateError(StockbookError):
    """Illegal invoice status transition."""

    def __init__(self, invoice_number: str, current: str, requested: str):
        super().__init__(
            f"Invoice {invoice_number} cannot move from {current} to {requested}",
            code="INVOICE_STATE_CONFLICT",
            details={
                "invoice_number": invoice_number,
                "current": current,
                "requested": requested,
            },
        )


# Payment Exceptions
class PaymentError(StockbookError):
    """Base exception for payment operations."""

    pass


class PaymentConfigurationError(PaymentError):
    """Payment widget is not configured (missing public key)."""

    def __init__(self, reason: str = "Payment system is not properly configured."):
        super().__init__(reason, code="PAYMENT_NOT_CONFIGURED")


class PaymentNotReadyError(PaymentError):
    """Payment widget handle has not been loaded yet."""

    retryable = True

    def __init__(self, reason: str | None = None):
        super().__init__(
            "Payment system is not ready. Please refresh the page and try again.",
            code="PAYMENT_NOT_READY",
            details={"reason": reason},
        )


class InvalidPaymentAmountError(PaymentError):
    """Invoice total cannot be charged."""

    def __init__(self, invoice_number: str, amount: Any):
        super().__init__(
            f"Invalid payment amount for invoice {invoice_number}: {amount}",
            code="INVALID_PAYMENT_AMOUNT",
            details={"invoice_number": invoice_number, "amount": str(amount)},
        )


class PaymentRecordingError(PaymentError):
    """Gateway took the payment but the invoice record was not updated."""

    severity = "critical"

    def __init__(self, invoice_number: str, reference: str, reason: str):
        super().__init__(
            "Payment was successful, but there was an issue updating the invoice. "
            "Please contact support.",
            code="PAYMENT_RECORDING_FAILED",
            details={
                "invoice_number": invoice_number,
                "reference": reference,
                "reason": reason,
            },
        )
