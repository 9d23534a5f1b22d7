"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockbook.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stockbook.api.middleware.error_handler import setup_exception_handlers
from stockbook.api.routes import (
    auth_router,
    dashboard_router,
    health_router,
    inventory_router,
    invoices_router,
    orders_router,
    payments_router,
)
from stockbook.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Loads the payment widget handle on startup and closes the backend
    client on shutdown.
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        backend=settings.backend.base_url,
        debug=settings.api.debug,
    )

    from stockbook.infrastructure.payments import get_payment_gateway

    gateway = get_payment_gateway()
    if not gateway.is_configured:
        logger.warning("payment_widget_not_configured")
    elif settings.paystack.preload_on_start:
        # Checkout retries the load on demand if this fails
        ready = await gateway.load()
        logger.info("payment_widget_preloaded", ready=ready)

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    from stockbook.infrastructure.backend import close_backend_client

    await close_backend_client()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Inventory, sales, invoicing and invoice payment for the Stockbook dashboard",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(inventory_router)
    app.include_router(orders_router)
    app.include_router(dashboard_router)
    app.include_router(invoices_router)
    app.include_router(payments_router)

    # Root health endpoint (for container health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "stockbook.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
