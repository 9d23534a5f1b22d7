"""Abstract interface for the payment widget handle."""

from abc import ABC, abstractmethod

from stockbook.core.entities import CheckoutConfig, Invoice


class IPaymentGateway(ABC):
    """
    Scoped handle on the third-party payment widget.

    Must be loaded before a checkout can be built.
    Implementations: PaystackGateway
    """

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when a public key is set."""
        pass

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """True once the widget script/handle has been loaded."""
        pass

    @abstractmethod
    async def load(self) -> bool:
        """Load the widget handle. Returns readiness; never raises."""
        pass

    @abstractmethod
    def new_reference(self, invoice_number: str) -> str:
        """Generate a unique payment reference for an invoice."""
        pass

    @abstractmethod
    def build_checkout(
        self, invoice: Invoice, amount_subunits: int, reference: str
    ) -> CheckoutConfig:
        """Build the widget setup config. Raises PaymentError subclasses."""
        pass
