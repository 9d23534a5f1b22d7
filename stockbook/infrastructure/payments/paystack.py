"""
Paystack inline widget handle.

The widget is a third-party script. The handle is scoped to this object
and loaded explicitly; a checkout can only be built once it reports ready.
"""

import secrets
import string
import time

import httpx

from stockbook.config import get_logger, get_settings
from stockbook.config.settings import PaystackSettings
from stockbook.core.entities import (
    CheckoutConfig,
    CheckoutField,
    CheckoutMetadata,
    Invoice,
)
from stockbook.core.exceptions import (
    InvalidPaymentAmountError,
    PaymentConfigurationError,
    PaymentNotReadyError,
    ValidationError,
)
from stockbook.core.interfaces import IPaymentGateway

logger = get_logger(__name__)

_BASE36 = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 9


class PaystackGateway(IPaymentGateway):
    """Paystack widget readiness and checkout configuration."""

    def __init__(
        self,
        settings: PaystackSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings().paystack
        self._transport = transport
        self._ready = False

    @property
    def is_configured(self) -> bool:
        return self.settings.is_configured

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def load(self) -> bool:
        if self._ready:
            return True

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.load_timeout, transport=self._transport
            ) as client:
                response = await client.get(self.settings.script_url)
        except httpx.HTTPError as e:
            logger.warning(
                "payment_widget_load_failed",
                script_url=self.settings.script_url,
                error=str(e) or type(e).__name__,
            )
            return False

        if response.status_code != 200:
            logger.warning(
                "payment_widget_load_failed",
                script_url=self.settings.script_url,
                status=response.status_code,
            )
            return False

        self._ready = True
        logger.info("payment_widget_loaded", script_url=self.settings.script_url)
        return True

    def new_reference(self, invoice_number: str) -> str:
        """``{invoiceNumber}-{epoch millis}-{9 random base36 chars}``."""
        millis = int(time.time() * 1000)
        suffix = "".join(secrets.choice(_BASE36) for _ in range(_SUFFIX_LENGTH))
        return f"{invoice_number}-{millis}-{suffix}"

    def build_checkout(
        self, invoice: Invoice, amount_subunits: int, reference: str
    ) -> CheckoutConfig:
        if not self.is_configured:
            raise PaymentConfigurationError("Paystack public key is not configured")
        if not self._ready:
            raise PaymentNotReadyError("payment widget has not loaded")
        if not invoice.client.email:
            raise ValidationError("client.email", "is required for payment")
        if amount_subunits <= 0:
            raise InvalidPaymentAmountError(invoice.invoice_number, invoice.total_amount)

        metadata = CheckoutMetadata(
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            client_name=invoice.client.name,
            custom_fields=[
                CheckoutField(
                    display_name="Invoice Number",
                    variable_name="invoice_number",
                    value=invoice.invoice_number,
                ),
                CheckoutField(
                    display_name="Client Name",
                    variable_name="client_name",
                    value=invoice.client.name,
                ),
            ],
        )
        return CheckoutConfig(
            key=self.settings.public_key.strip(),
            email=invoice.client.email,
            amount=amount_subunits,
            currency=self.settings.currency,
            ref=reference,
            metadata=metadata,
        )


# Singleton instance
_gateway: PaystackGateway | None = None


def get_payment_gateway() -> PaystackGateway:
    """Get or create the shared payment gateway handle."""
    global _gateway
    if _gateway is None:
        _gateway = PaystackGateway()
    return _gateway


def reset_payment_gateway() -> None:
    """Drop the shared handle (for testing)."""
    global _gateway
    _gateway = None
