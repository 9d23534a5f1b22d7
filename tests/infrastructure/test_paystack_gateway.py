"""Tests for the Paystack widget handle."""

import re

import httpx
import pytest

from stockbook.config.settings import PaystackSettings
from stockbook.core.entities import Invoice
from stockbook.core.exceptions import (
    InvalidPaymentAmountError,
    PaymentConfigurationError,
    PaymentNotReadyError,
    ValidationError,
)
from stockbook.infrastructure.payments import PaystackGateway


def _gateway(status: int = 200, public_key: str = "pk_test_123") -> PaystackGateway:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text="/* inline.js */")

    return PaystackGateway(
        settings=PaystackSettings(public_key=public_key),
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def invoice(invoice_payload) -> Invoice:
    return Invoice.model_validate(invoice_payload)


class TestLoad:
    async def test_load_success(self):
        gateway = _gateway()
        assert not gateway.is_ready

        assert await gateway.load() is True
        assert gateway.is_ready

    async def test_load_failure_never_raises(self):
        gateway = _gateway(status=503)

        assert await gateway.load() is False
        assert not gateway.is_ready

    async def test_transport_error_never_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline")

        gateway = PaystackGateway(
            settings=PaystackSettings(public_key="pk_test_123"),
            transport=httpx.MockTransport(handler),
        )
        assert await gateway.load() is False


class TestReference:
    def test_format(self):
        reference = _gateway().new_reference("INV-001")
        assert re.fullmatch(r"INV-001-\d{13}-[0-9a-z]{9}", reference)

    def test_unique(self):
        gateway = _gateway()
        assert gateway.new_reference("INV-001") != gateway.new_reference("INV-001")


class TestBuildCheckout:
    async def test_config(self, invoice):
        gateway = _gateway()
        await gateway.load()

        config = gateway.build_checkout(invoice, 75000, "INV-001-1-abc")

        assert config.key == "pk_test_123"
        assert config.email == "chidi@example.com"
        assert config.amount == 75000
        assert config.currency == "NGN"
        payload = config.to_payload()
        assert payload["metadata"]["invoiceNumber"] == "INV-001"
        assert payload["metadata"]["custom_fields"] == [
            {
                "display_name": "Invoice Number",
                "variable_name": "invoice_number",
                "value": "INV-001",
            },
            {
                "display_name": "Client Name",
                "variable_name": "client_name",
                "value": "Chidi Okafor",
            },
        ]

    def test_unconfigured(self, invoice):
        gateway = _gateway(public_key="")
        with pytest.raises(PaymentConfigurationError):
            gateway.build_checkout(invoice, 75000, "ref")

    def test_not_loaded(self, invoice):
        with pytest.raises(PaymentNotReadyError):
            _gateway().build_checkout(invoice, 75000, "ref")

    async def test_missing_email(self, invoice_payload):
        invoice = Invoice.model_validate({**invoice_payload, "client": {"name": "Chidi"}})
        gateway = _gateway()
        await gateway.load()

        with pytest.raises(ValidationError):
            gateway.build_checkout(invoice, 75000, "ref")

    async def test_zero_amount(self, invoice):
        gateway = _gateway()
        await gateway.load()

        with pytest.raises(InvalidPaymentAmountError):
            gateway.build_checkout(invoice, 0, "ref")
