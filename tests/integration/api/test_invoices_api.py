"""Integration tests for the invoicing API endpoints"""

import pytest
from datetime import date
from decimal import Decimal
from httpx import AsyncClient

HEADERS = {"X-User-Id": "owner_1"}

PAYLOAD = {
    "client_id": "client_1",
    "issue_date": "2024-03-01",
    "due_date": "2024-03-31",
    "tax_rate": "16",
    "discount_amount": "10",
    "notes": "Thank you",
    "items": [
        {"description": "Design work", "quantity": "2", "unit_price": "50"},
        {"description": "Hosting", "quantity": "1", "unit_price": "30", "discount": "5"},
    ],
}


async def create_invoice(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/api/invoices", json={**PAYLOAD, **overrides}, headers=HEADERS)
    assert response.status_code == 201, response.text
    return response.json()


class TestInvoicesAPIIntegration:
    """Integration test suite for invoice endpoints"""

    @pytest.mark.asyncio
    async def test_create_invoice(self, client: AsyncClient, owner, billed_client):
        """POST /invoices computes totals and allocates the number"""
        data = await create_invoice(client)

        assert data["invoice_number"] == "INV-007"
        assert data["status"] == "DRAFT"
        assert data["currency"] == "USD"
        assert Decimal(data["subtotal"]) == Decimal("125")
        assert Decimal(data["tax_amount"]) == Decimal("20")
        assert Decimal(data["total"]) == Decimal("135")
        assert [item["order"] for item in data["items"]] == [0, 1]
        assert data["client"]["name"] == "Acme Corp"

    @pytest.mark.asyncio
    async def test_create_without_items(self, client: AsyncClient, owner, billed_client):
        response = await client.post("/api/invoices", json={**PAYLOAD, "items": []}, headers=HEADERS)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["field"] == "items"

    @pytest.mark.asyncio
    async def test_create_with_bad_quantity(self, client: AsyncClient, owner, billed_client):
        items = [{"description": "X", "quantity": "0", "unit_price": "1"}]

        response = await client.post("/api/invoices", json={**PAYLOAD, "items": items}, headers=HEADERS)

        assert response.status_code == 400
        assert response.json()["error"]["field"] == "items[0].quantity"

    @pytest.mark.asyncio
    async def test_malformed_body(self, client: AsyncClient, owner, billed_client):
        response = await client.post(
            "/api/invoices", json={**PAYLOAD, "issue_date": "yesterday"}, headers=HEADERS
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_missing_identity(self, client: AsyncClient):
        response = await client.get("/api/invoices")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    @pytest.mark.asyncio
    async def test_get_and_list(self, client: AsyncClient, owner, billed_client):
        created = await create_invoice(client)

        response = await client.get(f"/api/invoices/{created['id']}", headers=HEADERS)
        assert response.status_code == 200
        assert response.json()["invoice_number"] == "INV-007"

        response = await client.get("/api/invoices", params={"status": "DRAFT"}, headers=HEADERS)
        assert response.status_code == 200
        rows = response.json()["invoices"]
        assert len(rows) == 1
        assert rows[0]["client_name"] == "Acme Corp"

        response = await client.get("/api/invoices", params={"status": "PAID"}, headers=HEADERS)
        assert response.json()["invoices"] == []

    @pytest.mark.asyncio
    async def test_list_limit_out_of_range(self, client: AsyncClient, owner):
        response = await client.get("/api/invoices", params={"limit": 500}, headers=HEADERS)

        assert response.status_code == 400
        assert response.json()["error"]["field"] == "limit"

    @pytest.mark.asyncio
    async def test_get_unknown_invoice(self, client: AsyncClient, owner):
        response = await client.get("/api/invoices/does-not-exist", headers=HEADERS)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVOICE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_then_send_then_frozen(self, client: AsyncClient, owner, billed_client):
        created = await create_invoice(client)
        items = [{"description": "Audit", "quantity": "1", "unit_price": "80"}]

        response = await client.put(
            f"/api/invoices/{created['id']}",
            json={**PAYLOAD, "tax_rate": "0", "discount_amount": "0", "items": items},
            headers=HEADERS,
        )
        assert response.status_code == 200
        assert Decimal(response.json()["total"]) == Decimal("80")

        response = await client.patch(
            f"/api/invoices/{created['id']}/status", json={"status": "SENT"}, headers=HEADERS
        )
        assert response.status_code == 200
        assert response.json()["status"] == "SENT"

        response = await client.put(f"/api/invoices/{created['id']}", json=PAYLOAD, headers=HEADERS)
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATE"

    @pytest.mark.asyncio
    async def test_illegal_status_change(self, client: AsyncClient, owner, billed_client):
        created = await create_invoice(client)

        response = await client.patch(
            f"/api/invoices/{created['id']}/status", json={"status": "PAID"}, headers=HEADERS
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_duplicate(self, client: AsyncClient, owner, billed_client):
        created = await create_invoice(client)

        response = await client.post(f"/api/invoices/{created['id']}/duplicate", headers=HEADERS)

        assert response.status_code == 201
        copy = response.json()
        assert copy["invoice_number"] == "INV-008"
        assert copy["issue_date"] == date.today().isoformat()
        assert Decimal(copy["total"]) == Decimal("135")

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, owner, billed_client):
        created = await create_invoice(client)

        response = await client.delete(f"/api/invoices/{created['id']}", headers=HEADERS)
        assert response.status_code == 200

        response = await client.get(f"/api/invoices/{created['id']}", headers=HEADERS)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_download_pdf(self, client: AsyncClient, owner, billed_client):
        created = await create_invoice(client)

        response = await client.get(f"/api/invoices/{created['id']}/pdf", headers=HEADERS)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "factura-INV-007.pdf" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_pdf_unknown_currency(self, client: AsyncClient, owner, billed_client):
        created = await create_invoice(client, currency="ZZZ")

        response = await client.get(f"/api/invoices/{created['id']}/pdf", headers=HEADERS)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "RENDER_ERROR"


class TestClientsAndProfileAPIIntegration:
    @pytest.mark.asyncio
    async def test_client_crud(self, client: AsyncClient, owner):
        response = await client.post(
            "/api/clients", json={"name": "Globex", "email": "ap@globex.test"}, headers=HEADERS
        )
        assert response.status_code == 201
        client_id = response.json()["id"]

        response = await client.put(
            f"/api/clients/{client_id}", json={"name": "Globex Corp", "city": "Lima"}, headers=HEADERS
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Globex Corp"

        response = await client.get("/api/clients", headers=HEADERS)
        assert [c["name"] for c in response.json()] == ["Globex Corp"]

        response = await client.delete(f"/api/clients/{client_id}", headers=HEADERS)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_client_requires_name(self, client: AsyncClient, owner):
        response = await client.post("/api/clients", json={"name": "  "}, headers=HEADERS)

        assert response.status_code == 400
        assert response.json()["error"]["field"] == "name"

    @pytest.mark.asyncio
    async def test_profile(self, client: AsyncClient, owner):
        response = await client.put(
            "/api/users/profile", json={"invoice_prefix": "FAC", "default_currency": "eur"}, headers=HEADERS
        )
        assert response.status_code == 200
        assert response.json()["default_currency"] == "EUR"

        response = await client.get("/api/users/profile", headers=HEADERS)
        assert response.json()["next_invoice_number"] == "FAC-007"


class TestDashboardAPIIntegration:
    @pytest.mark.asyncio
    async def test_stats_and_chart(self, client: AsyncClient, owner, billed_client):
        today = date.today().isoformat()
        created = await create_invoice(client, issue_date=today, due_date=today)
        await client.patch(f"/api/invoices/{created['id']}/status", json={"status": "SENT"}, headers=HEADERS)

        response = await client.get("/api/dashboard/stats", headers=HEADERS)
        assert response.status_code == 200
        stats = response.json()
        assert stats["count_month"] == 1
        assert Decimal(stats["total_month"]) == Decimal("135")
        assert Decimal(stats["total_pending"]) == Decimal("135")
        assert stats["client_count"] == 1

        await client.patch(f"/api/invoices/{created['id']}/status", json={"status": "PAID"}, headers=HEADERS)
        response = await client.get("/api/dashboard/chart", headers=HEADERS)
        points = response.json()["points"]
        assert len(points) == 6
        assert Decimal(points[-1]["total"]) == Decimal("135")


class TestClientDeletionGuard:
    @pytest.mark.asyncio
    async def test_client_with_invoices_cannot_be_deleted(self, client: AsyncClient, owner, billed_client):
        await create_invoice(client)

        response = await client.delete("/api/clients/client_1", headers=HEADERS)

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "PERSISTENCE_ERROR"

        response = await client.get("/api/clients/client_1", headers=HEADERS)
        assert response.status_code == 200
