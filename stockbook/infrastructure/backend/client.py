"""
HTTP client for the inventory/orders/invoices REST backend.

Idempotent calls (reads and the mark-paid reconciliation) retry transport
failures with exponential backoff; creating records is never retried.
"""

import time
from typing import Any
from urllib.parse import quote

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from stockbook.config import get_logger, get_settings
from stockbook.core.entities import (
    AuthResponse,
    ClientInfo,
    NewInventoryItem,
    NewOrder,
    ReconciliationRequest,
    Session,
)
from stockbook.core.exceptions import BackendRejectedError, BackendUnavailableError
from stockbook.core.interfaces import BackendHealth, DocumentDownload, IBackendClient

logger = get_logger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Backend's ``message`` when it sent one, else a status-code message."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}: {response.reason_phrase}"


class HttpBackendClient(IBackendClient):
    """
    httpx-based backend client.

    The session is passed explicitly on every call and read once, at
    dispatch. Authenticated calls without a token fail before sending.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.backend.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.backend.timeout
        self.max_retries = max(
            1, max_retries if max_retries is not None else settings.backend.max_retries
        )
        self.retry_delay = (
            retry_delay if retry_delay is not None else settings.backend.retry_delay
        )
        self.retry_multiplier = settings.backend.retry_multiplier
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    # Plumbing

    @staticmethod
    def _auth_headers(
        session: Session | None, operation: str, required: bool = True
    ) -> dict[str, str]:
        if required:
            token = (session or Session.anonymous()).require_token(operation)
        else:
            token = session.token if session else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _get_retry_decorator(self) -> Any:
        """Get tenacity retry decorator with current settings."""
        return retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(
                multiplier=self.retry_delay,
                min=self.retry_delay,
                max=self.retry_delay * (self.retry_multiplier**3),
            ),
            retry=retry_if_exception_type(BackendUnavailableError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "backend_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        headers: dict[str, str],
        json: Any = None,
    ) -> httpx.Response:
        start_time = time.time()
        try:
            response = await self._client.request(method, path, headers=headers, json=json)
        except httpx.TimeoutException as e:
            raise BackendUnavailableError(operation, f"timed out after {self.timeout}s") from e
        except httpx.TransportError as e:
            raise BackendUnavailableError(operation, str(e) or type(e).__name__) from e

        logger.info(
            "backend_call",
            operation=operation,
            method=method,
            path=path,
            status=response.status_code,
            elapsed_ms=int((time.time() - start_time) * 1000),
        )

        if not response.is_success:
            raise BackendRejectedError(operation, response.status_code, _error_message(response))
        return response

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        headers: dict[str, str],
        json: Any = None,
        idempotent: bool = False,
    ) -> httpx.Response:
        if not idempotent:
            return await self._send(operation, method, path, headers, json)
        return await self._get_retry_decorator()(self._send)(
            operation, method, path, headers, json
        )

    @staticmethod
    def _decode(operation: str, response: httpx.Response) -> Any:
        """JSON body, or None for an empty/undecodable one."""
        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning(
                "backend_invalid_json",
                operation=operation,
                preview=response.text[:200],
            )
            return None

    async def _json(
        self,
        operation: str,
        method: str,
        path: str,
        headers: dict[str, str],
        json: Any = None,
        idempotent: bool = False,
    ) -> Any:
        response = await self._request(operation, method, path, headers, json, idempotent)
        return self._decode(operation, response)

    async def _authenticate(self, operation: str, path: str, body: dict) -> AuthResponse:
        response = await self._request(operation, "POST", path, {}, body)
        data = self._decode(operation, response)
        if not isinstance(data, dict) or not data.get("token"):
            raise BackendRejectedError(
                operation, response.status_code, "Invalid authentication response"
            )
        return AuthResponse.model_validate(data)

    # Auth

    async def login(self, email: str, password: str) -> AuthResponse:
        return await self._authenticate(
            "login", "/api/auth/login", {"email": email, "password": password}
        )

    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        return await self._authenticate(
            "register",
            "/api/auth/register",
            {"name": name, "email": email, "password": password},
        )

    # Inventory

    async def add_inventory(self, session: Session, item: NewInventoryItem) -> Any:
        headers = self._auth_headers(session, "add_inventory")
        return await self._json(
            "add_inventory", "POST", "/api/inventory", headers, item.to_payload()
        )

    async def list_inventory(self, session: Session) -> Any:
        headers = self._auth_headers(session, "list_inventory")
        return await self._json(
            "list_inventory", "GET", "/api/inventory", headers, idempotent=True
        )

    # Orders

    async def create_order(self, session: Session, order: NewOrder) -> Any:
        headers = self._auth_headers(session, "create_order")
        return await self._json(
            "create_order", "POST", "/api/orders/create", headers, order.to_payload()
        )

    async def list_orders(self, session: Session) -> Any:
        headers = self._auth_headers(session, "list_orders")
        return await self._json("list_orders", "GET", "/api/orders", headers, idempotent=True)

    async def get_monthly_profit(self, session: Session) -> Any:
        headers = self._auth_headers(session, "monthly_profit")
        return await self._json(
            "monthly_profit", "GET", "/api/orders/profit/monthly", headers, idempotent=True
        )

    # Invoices

    async def generate_invoice(
        self, session: Session, order_id: str, client: ClientInfo
    ) -> Any:
        headers = self._auth_headers(session, "generate_invoice")
        body = {"orderId": order_id, "client": {"name": client.name, "email": client.email}}
        return await self._json(
            "generate_invoice", "POST", "/api/invoices/generate", headers, body
        )

    async def list_invoices(self, session: Session) -> Any:
        headers = self._auth_headers(session, "list_invoices")
        return await self._json(
            "list_invoices", "GET", "/api/invoices", headers, idempotent=True
        )

    async def get_invoice(
        self, invoice_number: str, session: Session | None = None
    ) -> Any:
        headers = self._auth_headers(session, "get_invoice", required=False)
        return await self._json(
            "get_invoice",
            "GET",
            f"/api/invoices/{quote(invoice_number, safe='')}",
            headers,
            idempotent=True,
        )

    async def mark_invoice_paid(
        self,
        invoice_number: str,
        request: ReconciliationRequest,
        session: Session | None = None,
    ) -> Any:
        headers = self._auth_headers(session, "mark_invoice_paid", required=False)
        # Safe to retry: the backend applies a (invoice, reference) pair once
        return await self._json(
            "mark_invoice_paid",
            "POST",
            f"/api/invoices/pay/{quote(invoice_number, safe='')}",
            headers,
            request.to_payload(),
            idempotent=True,
        )

    async def download_invoice(self, session: Session, invoice_id: str) -> DocumentDownload:
        headers = self._auth_headers(session, "download_invoice")
        response = await self._request(
            "download_invoice",
            "GET",
            f"/api/invoices/{quote(invoice_id, safe='')}/download",
            headers,
            idempotent=True,
        )
        media_type = response.headers.get("content-type", "application/pdf").split(";")[0]
        return DocumentDownload(content=response.content, media_type=media_type)

    async def check_health(self) -> BackendHealth:
        start_time = time.time()
        try:
            response = await self._client.get("/", timeout=10)
        except httpx.HTTPError as e:
            return BackendHealth(
                available=False, base_url=self.base_url, error=str(e) or type(e).__name__
            )

        return BackendHealth(
            available=response.status_code < 500,
            base_url=self.base_url,
            status_code=response.status_code,
            response_time_ms=round((time.time() - start_time) * 1000, 2),
        )


# Singleton instance
_backend_client: HttpBackendClient | None = None


def get_backend_client() -> HttpBackendClient:
    """Get or create the shared backend client."""
    global _backend_client
    if _backend_client is None:
        _backend_client = HttpBackendClient()
    return _backend_client


async def close_backend_client() -> None:
    """Close the shared backend client."""
    global _backend_client
    if _backend_client is not None:
        await _backend_client.aclose()
        _backend_client = None
