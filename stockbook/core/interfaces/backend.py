"""
Abstract interface for the upstream REST backend.

List endpoints return the raw decoded payload; shape normalization is done
by the caller so that malformed responses can be reported, not raised.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from stockbook.core.entities import (
    AuthResponse,
    ClientInfo,
    NewInventoryItem,
    NewOrder,
    ReconciliationRequest,
    Session,
)


@dataclass
class BackendHealth:
    """Upstream reachability."""

    available: bool
    base_url: str
    status_code: int | None = None
    error: str | None = None
    response_time_ms: float | None = None


@dataclass
class DocumentDownload:
    """Binary invoice document."""

    content: bytes
    media_type: str = "application/pdf"


class IBackendClient(ABC):
    """
    Contract with the inventory/orders/invoices REST backend.

    Implementations: HttpBackendClient
    """

    # Auth
    @abstractmethod
    async def login(self, email: str, password: str) -> AuthResponse:
        """POST /api/auth/login."""
        pass

    @abstractmethod
    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        """POST /api/auth/register."""
        pass

    # Inventory
    @abstractmethod
    async def add_inventory(self, session: Session, item: NewInventoryItem) -> Any:
        """POST /api/inventory."""
        pass

    @abstractmethod
    async def list_inventory(self, session: Session) -> Any:
        """GET /api/inventory (shape not fixed)."""
        pass

    # Orders
    @abstractmethod
    async def create_order(self, session: Session, order: NewOrder) -> Any:
        """POST /api/orders/create."""
        pass

    @abstractmethod
    async def list_orders(self, session: Session) -> Any:
        """GET /api/orders (shape not fixed)."""
        pass

    @abstractmethod
    async def get_monthly_profit(self, session: Session) -> Any:
        """GET /api/orders/profit/monthly; None when the body is empty."""
        pass

    # Invoices
    @abstractmethod
    async def generate_invoice(
        self, session: Session, order_id: str, client: ClientInfo
    ) -> Any:
        """POST /api/invoices/generate."""
        pass

    @abstractmethod
    async def list_invoices(self, session: Session) -> Any:
        """GET /api/invoices (shape not fixed)."""
        pass

    @abstractmethod
    async def get_invoice(
        self, invoice_number: str, session: Session | None = None
    ) -> Any:
        """GET /api/invoices/{invoiceNumber}. Public."""
        pass

    @abstractmethod
    async def mark_invoice_paid(
        self,
        invoice_number: str,
        request: ReconciliationRequest,
        session: Session | None = None,
    ) -> Any:
        """POST /api/invoices/pay/{invoiceNumber}. Must be idempotent upstream."""
        pass

    @abstractmethod
    async def download_invoice(
        self, session: Session, invoice_id: str
    ) -> DocumentDownload:
        """GET /api/invoices/{id}/download."""
        pass

    @abstractmethod
    async def check_health(self) -> BackendHealth:
        """Check that the backend is reachable."""
        pass
