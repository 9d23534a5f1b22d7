"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
- retryable/severity: how the dashboard should present the failure
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stockbook.application.dto.responses import ErrorResponse
from stockbook.config import get_logger
from stockbook.core.exceptions import (
    AuthenticationRequiredError,
    BackendRejectedError,
    BackendUnavailableError,
    InvalidPaymentAmountError,
    InvoiceStateError,
    PaymentConfigurationError,
    PaymentNotReadyError,
    PaymentRecordingError,
    StockbookError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationRequiredError: status.HTTP_401_UNAUTHORIZED,
    BackendUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    PaymentConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    PaymentNotReadyError: status.HTTP_503_SERVICE_UNAVAILABLE,
    InvalidPaymentAmountError: status.HTTP_400_BAD_REQUEST,
    PaymentRecordingError: status.HTTP_502_BAD_GATEWAY,
    InvoiceStateError: status.HTTP_409_CONFLICT,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "VALIDATION_ERROR": "Check the highlighted field and submit again.",
    "AUTHENTICATION_REQUIRED": "Log in again to continue.",
    "BACKEND_UNAVAILABLE": "The backend could not be reached. Check your connection and retry.",
    "PAYMENT_NOT_CONFIGURED": "Set PAYSTACK_PUBLIC_KEY and restart the service.",
    "PAYMENT_NOT_READY": "Refresh the page and try again.",
    "INVALID_PAYMENT_AMOUNT": "This invoice has no payable amount. Contact the issuer.",
    "PAYMENT_RECORDING_FAILED": (
        "Your payment went through. Contact support with the payment reference "
        "so the invoice can be updated."
    ),
    "INVOICE_STATE_CONFLICT": "Reload the invoice to see its current status.",
    "INVOICE_NOT_FOUND": "Check the invoice number in the payment link.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Log in again to continue.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The resource changed. Reload and try again.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    502: "The backend returned an error. Retry later.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def status_for(exc: Exception) -> int:
    """HTTP status for an exception."""
    if isinstance(exc, BackendRejectedError):
        # Pass the backend's client errors through; anything else is a bad gateway
        if 400 <= exc.status_code < 500:
            return exc.status_code
        return status.HTTP_502_BAD_GATEWAY

    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_code_for(exc: Exception) -> str:
    if isinstance(exc, BackendRejectedError) and exc.is_not_found:
        operation = exc.details.get("operation", "")
        if "invoice" in operation:
            return "INVOICE_NOT_FOUND"
    if isinstance(exc, StockbookError):
        return exc.code
    return exc.__class__.__name__


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = status_for(exc)
    error_code = error_code_for(exc)
    request_id = getattr(request.state, "request_id", None)

    if isinstance(exc, StockbookError):
        log = logger.error if status_code >= 500 else logger.warning
        log(
            "request_error",
            request_id=request_id,
            path=request.url.path,
            error_type=error_code,
            error=exc.message,
            severity=exc.severity,
            details=exc.details,
        )
        message = exc.message
        retryable = exc.retryable
        severity = exc.severity
    else:
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=error_code,
            error=str(exc),
            traceback=traceback.format_exc(),
        )
        message = "An unexpected error occurred"
        retryable = False
        severity = "error"

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        path=request.url.path,
        retryable=retryable,
        severity=severity,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Last line of defence for exceptions no handler claimed.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(StockbookError)
    async def domain_exception_handler(
        request: Request,
        exc: StockbookError,
    ) -> JSONResponse:
        """Handle domain errors raised by use cases."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    """Machine-readable error code for a bare HTTPException."""
    return {
        400: "BAD_REQUEST",
        401: "AUTHENTICATION_REQUIRED",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "UNPROCESSABLE_ENTITY",
    }.get(status_code, "HTTP_ERROR")
