"""Upstream connectivity check."""

from stockbook.application.dto.responses import BackendHealthResponse
from stockbook.application.services import get_backend, get_gateway
from stockbook.config import get_logger
from stockbook.core.interfaces import IBackendClient, IPaymentGateway

logger = get_logger(__name__)


class CheckBackendUseCase:
    """Report backend reachability and payment widget readiness."""

    def __init__(
        self,
        backend: IBackendClient | None = None,
        gateway: IPaymentGateway | None = None,
    ):
        self._backend = backend
        self._gateway = gateway

    async def execute(self) -> BackendHealthResponse:
        health = await get_backend(self._backend).check_health()
        gateway = get_gateway(self._gateway)

        if not health.available:
            logger.warning(
                "backend_unreachable",
                base_url=health.base_url,
                status=health.status_code,
                error=health.error,
            )

        return BackendHealthResponse(
            available=health.available,
            base_url=health.base_url,
            status_code=health.status_code,
            error=health.error,
            response_time_ms=health.response_time_ms,
            payment_configured=gateway.is_configured,
            payment_ready=gateway.is_ready,
        )
