"""
Service factory functions for dependency injection.

Wires infrastructure implementations to core services. Use cases import
from here rather than from infrastructure directly.
"""

from typing import TYPE_CHECKING

from stockbook.core.services import InvoiceReconciler

if TYPE_CHECKING:
    from stockbook.core.interfaces import IBackendClient, IPaymentGateway


def get_backend(backend: "IBackendClient | None" = None) -> "IBackendClient":
    """Return the given backend, or the shared HTTP client."""
    if backend is not None:
        return backend

    # Lazy import infrastructure to avoid circular imports
    from stockbook.infrastructure.backend import get_backend_client

    return get_backend_client()


def get_gateway(gateway: "IPaymentGateway | None" = None) -> "IPaymentGateway":
    """Return the given gateway, or the shared Paystack handle."""
    if gateway is not None:
        return gateway

    from stockbook.infrastructure.payments import get_payment_gateway

    return get_payment_gateway()


def get_invoice_reconciler(backend: "IBackendClient | None" = None) -> InvoiceReconciler:
    """Create an InvoiceReconciler over the given or shared backend."""
    return InvoiceReconciler(backend=get_backend(backend))
