"""Payment widget integration."""

from stockbook.infrastructure.payments.paystack import (
    PaystackGateway,
    get_payment_gateway,
    reset_payment_gateway,
)

__all__ = [
    "PaystackGateway",
    "get_payment_gateway",
    "reset_payment_gateway",
]
