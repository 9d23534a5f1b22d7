"""Core interfaces (ports) for dependency injection."""

from stockbook.core.interfaces.backend import (
    BackendHealth,
    DocumentDownload,
    IBackendClient,
)
from stockbook.core.interfaces.payments import IPaymentGateway

__all__ = [
    "IBackendClient",
    "BackendHealth",
    "DocumentDownload",
    "IPaymentGateway",
]
