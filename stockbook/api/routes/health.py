"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from stockbook.api.dependencies import get_check_backend_use_case
from stockbook.application.dto.responses import BackendHealthResponse, HealthResponse
from stockbook.application.use_cases import CheckBackendUseCase
from stockbook.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/backend", response_model=BackendHealthResponse)
async def backend_health(
    use_case: CheckBackendUseCase = Depends(get_check_backend_use_case),
) -> BackendHealthResponse:
    """
    Upstream backend connectivity.

    Also reports whether the payment widget is configured and loaded.
    """
    return await use_case.execute()
