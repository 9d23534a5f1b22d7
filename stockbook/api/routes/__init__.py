"""API route modules."""

from stockbook.api.routes.auth import router as auth_router
from stockbook.api.routes.dashboard import router as dashboard_router
from stockbook.api.routes.health import router as health_router
from stockbook.api.routes.inventory import router as inventory_router
from stockbook.api.routes.invoices import router as invoices_router
from stockbook.api.routes.orders import router as orders_router
from stockbook.api.routes.payments import router as payments_router

__all__ = [
    "health_router",
    "auth_router",
    "inventory_router",
    "orders_router",
    "dashboard_router",
    "invoices_router",
    "payments_router",
]
