"""Payment gateway integration values."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaymentCallback(BaseModel):
    """Success callback from the payment widget.

    ``raw`` keeps the untouched gateway payload; it is forwarded to the
    backend as-is.
    """

    model_config = ConfigDict(frozen=True)

    reference: str = ""
    status: str = ""
    transaction_id: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "PaymentCallback":
        """Read a callback without ever failing on its shape."""
        if not isinstance(payload, dict):
            return cls()

        reference = payload.get("reference")
        status = payload.get("status")
        transaction = payload.get("trans") or payload.get("transaction")
        return cls(
            reference=str(reference).strip() if reference is not None else "",
            status=str(status).strip() if status is not None else "",
            transaction_id=str(transaction) if transaction else None,
            raw=dict(payload),
        )

    @property
    def has_reference(self) -> bool:
        return bool(self.reference)


class CheckoutField(BaseModel):
    """Custom field shown on the gateway's receipt."""

    display_name: str
    variable_name: str
    value: str


class CheckoutMetadata(BaseModel):
    invoice_id: str | None = None
    invoice_number: str
    client_name: str = ""
    custom_fields: list[CheckoutField] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "invoiceId": self.invoice_id,
            "invoiceNumber": self.invoice_number,
            "clientName": self.client_name,
            "custom_fields": [f.model_dump() for f in self.custom_fields],
        }


class CheckoutConfig(BaseModel):
    """Everything the widget's ``setup`` call needs. ``amount`` is in kobo."""

    model_config = ConfigDict(frozen=True)

    key: str
    email: str
    amount: int
    currency: str
    ref: str
    metadata: CheckoutMetadata

    def to_payload(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "email": self.email,
            "amount": self.amount,
            "currency": self.currency,
            "ref": self.ref,
            "metadata": self.metadata.to_payload(),
        }


class ReconciliationRequest(BaseModel):
    """Body of ``POST /api/invoices/pay/{invoiceNumber}``."""

    model_config = ConfigDict(frozen=True)

    payment_reference: str
    payment_data: dict[str, Any] = Field(default_factory=dict)
    transaction_id: str | None = None
    status: str = ""

    @classmethod
    def from_callback(cls, callback: PaymentCallback) -> "ReconciliationRequest":
        return cls(
            payment_reference=callback.reference,
            payment_data=callback.raw,
            transaction_id=callback.transaction_id,
            status=callback.status,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "paymentReference": self.payment_reference,
            "paymentData": self.payment_data,
            "transactionId": self.transaction_id,
            "status": self.status,
        }
