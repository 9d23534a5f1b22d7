"""Tests for list/object response shape normalization."""

import pytest
from structlog.testing import capture_logs

from stockbook.core.entities import Invoice
from stockbook.core.services import (
    INVENTORY_LIST,
    INVOICE_LIST,
    ORDER_LIST,
    PayloadSource,
    normalize_list,
    normalize_object,
)

ITEM = {"_id": "inv-1", "itemName": "Palm oil", "quantity": 10, "unit": "kg"}
INVOICE = {"invoiceNumber": "INV-001", "totalAmount": 750}


class TestNormalizeList:
    def test_bare_array(self):
        result = normalize_list([ITEM], INVENTORY_LIST)
        assert [i.id for i in result.items] == ["inv-1"]
        assert result.source == PayloadSource.ARRAY
        assert not result.malformed

    @pytest.mark.parametrize("key", ["items", "data", "inventory"])
    def test_inventory_keys(self, key):
        result = normalize_list({key: [ITEM]}, INVENTORY_LIST)
        assert len(result.items) == 1
        assert result.key == key

    @pytest.mark.parametrize("key", ["invoices", "data"])
    def test_invoice_keys(self, key):
        result = normalize_list({key: [INVOICE]}, INVOICE_LIST)
        assert result.items[0].invoice_number == "INV-001"

    def test_key_order(self):
        payload = {"data": [INVOICE], "invoices": [{**INVOICE, "invoiceNumber": "INV-002"}]}
        result = normalize_list(payload, INVOICE_LIST)
        assert result.items[0].invoice_number == "INV-002"

    def test_single_inventory_object(self):
        result = normalize_list(ITEM, INVENTORY_LIST)
        assert result.source == PayloadSource.SINGLE_OBJECT
        assert len(result.items) == 1

    def test_single_object_not_allowed_for_orders(self):
        result = normalize_list({"_id": "o-1"}, ORDER_LIST)
        assert result.items == []
        assert result.malformed

    @pytest.mark.parametrize("payload", [None, 42, "oops", {"unexpected": {"a": 1}}])
    def test_scalar_or_unknown_is_empty_and_flagged(self, payload):
        with capture_logs() as logs:
            result = normalize_list(payload, INVOICE_LIST)
        assert result.items == []
        assert result.malformed
        assert any(log["event"] == "list_response_malformed" for log in logs)

    def test_empty_list_is_not_malformed(self):
        result = normalize_list({"invoices": []}, INVOICE_LIST)
        assert result.items == []
        assert not result.malformed

    def test_invalid_entries_dropped(self):
        result = normalize_list([INVOICE, {"invoiceNumber": ""}, "junk"], INVOICE_LIST)
        assert len(result.items) == 1
        assert result.dropped == 2
        assert result.received == 3
        assert result.malformed


class TestNormalizeObject:
    def test_wrapped(self):
        invoice = normalize_object({"data": INVOICE}, Invoice)
        assert invoice.invoice_number == "INV-001"

    def test_bare(self):
        assert normalize_object(INVOICE, Invoice).invoice_number == "INV-001"

    def test_custom_keys(self):
        invoice = normalize_object({"success": True, "invoice": INVOICE}, Invoice, ("invoice",))
        assert invoice is not None

    @pytest.mark.parametrize("payload", [None, [], "x", {"message": "ok"}])
    def test_unreadable(self, payload):
        assert normalize_object(payload, Invoice) is None
