"""Upstream REST backend client."""

from stockbook.infrastructure.backend.client import (
    HttpBackendClient,
    close_backend_client,
    get_backend_client,
)

__all__ = [
    "HttpBackendClient",
    "get_backend_client",
    "close_backend_client",
]
