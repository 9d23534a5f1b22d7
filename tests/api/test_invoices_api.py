"""API tests for invoice and dashboard endpoints."""

from stockbook.core.exceptions import BackendRejectedError, BackendUnavailableError
from stockbook.core.interfaces import DocumentDownload

AUTH = {"Authorization": "Bearer tok-123"}


class TestInvoiceEndpoints:
    async def test_page(self, api_client, mock_backend, invoice_payload):
        mock_backend.list_invoices.return_value = {
            "invoices": [
                {**invoice_payload, "invoiceNumber": f"INV-{n:03d}"} for n in range(1, 8)
            ]
        }

        response = await api_client.get(
            "/api/invoices", headers=AUTH, params={"page": 2, "page_size": 5}
        )

        assert response.status_code == 200
        data = response.json()
        assert [i["invoice_number"] for i in data["invoices"]] == ["INV-006", "INV-007"]
        assert data["total_pages"] == 2
        assert data["has_more"] is False

    async def test_generate_requires_valid_email(self, api_client, mock_backend):
        response = await api_client.post(
            "/api/invoices",
            headers=AUTH,
            json={"order_id": "o-1", "client_name": "Chidi", "client_email": "chidi"},
        )

        assert response.status_code == 400
        assert "valid email" in response.json()["message"]
        mock_backend.generate_invoice.assert_not_awaited()

    async def test_generate(self, api_client, mock_backend, invoice_payload):
        mock_backend.generate_invoice.return_value = {"invoice": invoice_payload}

        response = await api_client.post(
            "/api/invoices",
            headers=AUTH,
            json={
                "order_id": "o-1",
                "client_name": "Chidi Okafor",
                "client_email": "chidi@example.com",
            },
        )

        assert response.status_code == 201
        assert response.json()["invoice"]["status"] == "pending"

    async def test_missing_order_id_is_422(self, api_client):
        response = await api_client.post("/api/invoices", headers=AUTH, json={})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_download(self, api_client, mock_backend):
        mock_backend.download_invoice.return_value = DocumentDownload(
            content=b"%PDF-1.4 test", media_type="application/pdf"
        )

        response = await api_client.get(
            "/api/invoices/i-1/download",
            headers=AUTH,
            params={"invoice_number": "INV-001"},
        )

        assert response.status_code == 200
        assert response.content == b"%PDF-1.4 test"
        assert response.headers["content-type"] == "application/pdf"
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="invoice-INV-001.pdf"'
        )

    async def test_download_not_found(self, api_client, mock_backend):
        mock_backend.download_invoice.side_effect = BackendRejectedError(
            "download_invoice", 404, "Invoice not found"
        )

        response = await api_client.get("/api/invoices/nope/download", headers=AUTH)

        assert response.status_code == 404
        assert response.json()["error_code"] == "INVOICE_NOT_FOUND"


class TestDashboardEndpoints:
    async def test_monthly_no_data(self, api_client, mock_backend):
        mock_backend.get_monthly_profit.return_value = {"data": None}

        response = await api_client.get("/api/dashboard/monthly", headers=AUTH)

        assert response.status_code == 200
        assert response.json()["available"] is False
        assert response.json()["message"] == "No Data Available"

    async def test_overview_isolates_failures(
        self, api_client, mock_backend, inventory_payload
    ):
        mock_backend.list_inventory.return_value = inventory_payload
        mock_backend.list_orders.side_effect = BackendUnavailableError("list_orders")
        mock_backend.list_invoices.return_value = []
        mock_backend.get_monthly_profit.return_value = None

        response = await api_client.get("/api/dashboard/overview", headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["inventory"]["loaded"] is True
        assert data["inventory"]["data"]["total"] == 2
        assert data["orders"]["loaded"] is False
        assert data["orders"]["error"]["error_code"] == "BACKEND_UNAVAILABLE"
        assert data["monthly_profit"]["data"]["available"] is False

    async def test_overview_requires_login(self, api_client):
        response = await api_client.get("/api/dashboard/overview")
        assert response.status_code == 401
