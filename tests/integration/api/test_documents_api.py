"""Integration tests for Document API endpoints"""

import base64
import pytest
from decimal import Decimal
from httpx import AsyncClient


INVOICE_PAYLOAD = {
    "kind": "invoice",
    "customer_name": "John Doe",
    "plate": "T 123 ABC",
    "items": [
        {"kind": "part", "description": "Oil filter", "quantity": "1", "unit_cost": "25.00"},
        {"kind": "service", "description": "Oil change", "labor_hours": "1.5", "labor_rate": "50.00"},
    ],
    "discount_percent": "10",
    "tax_percent": "18",
    "other_charges": "5.00",
    "amount_paid": "20.00",
}

ESTIMATE_PAYLOAD = {
    "kind": "estimate",
    "customer_name": "Global Motors",
    "currency": "USD",
    "items": [
        {"kind": "service", "description": "Engine overhaul", "labor_hours": "8", "labor_rate": "50"},
        {"kind": "part", "description": "Gasket set", "quantity": "1", "unit_cost": "200"},
    ],
    "discount_percent": "5",
    "tax_percent": "18",
}


class TestDocumentTotalsAPI:
    @pytest.mark.asyncio
    async def test_invoice_totals(self, client: AsyncClient):
        """POST /totals returns the full breakdown"""
        payload = {
            "kind": "invoice",
            "items": [{"description": "Brake job", "quantity": "1", "unit_cost": "100.00"}],
            "discount_percent": "10",
            "tax_percent": "10",
            "amount_paid": "50.00",
        }

        response = await client.post("/billing/documents/totals", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["discount_amount"]) == Decimal("10.00")
        assert Decimal(data["tax_amount"]) == Decimal("9.00")
        assert Decimal(data["grand_total"]) == Decimal("99.00")
        assert Decimal(data["balance_due"]) == Decimal("49.00")

    @pytest.mark.asyncio
    async def test_estimate_totals_ignore_payment_fields(self, client: AsyncClient):
        payload = {
            "kind": "estimate",
            "items": [{"description": "Diagnostics", "labor_hours": "1", "labor_rate": "40"}],
        }

        response = await client.post("/billing/documents/totals", json=payload)

        assert response.status_code == 200
        assert response.json()["balance_due"] is None

    @pytest.mark.asyncio
    async def test_oversized_numbers_are_priced_not_rejected(self, client: AsyncClient):
        payload = {
            "kind": "invoice",
            "items": [{"description": "Fleet contract", "quantity": "1e30", "unit_cost": "1"}],
            "tax_percent": "1e27",
        }

        response = await client.post("/billing/documents/totals", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["subtotal_items"]) == Decimal("1e30")
        assert Decimal(data["tax_amount"]) == Decimal("1e55")

    @pytest.mark.asyncio
    async def test_unknown_kind(self, client: AsyncClient):
        response = await client.post("/billing/documents/totals", json={"kind": "receipt", "items": []})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_new_invoice_defaults(self, client: AsyncClient):
        response = await client.get("/billing/documents/new", params={"kind": "invoice"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unpaid"
        assert len(data["items"]) == 1
        assert data["items"][0]["kind"] == "service"


class TestDocumentLifecycleAPI:
    @pytest.mark.asyncio
    async def test_create_and_get_invoice(self, client: AsyncClient):
        create = await client.post("/billing/documents", json=INVOICE_PAYLOAD)

        assert create.status_code == 201
        created = create.json()
        assert created["number"].startswith("INV-")
        assert created["status"] == "unpaid"
        assert Decimal(created["totals"]["grand_total"]) == Decimal("111.20")
        assert Decimal(created["totals"]["balance_due"]) == Decimal("91.20")

        fetched = await client.get(f"/billing/documents/{created['number']}")

        assert fetched.status_code == 200
        data = fetched.json()
        assert [li["description"] for li in data["line_items"]] == ["Oil filter", "Oil change"]
        assert Decimal(data["totals"]["grand_total"]) == Decimal("111.20")

    @pytest.mark.asyncio
    async def test_numbers_are_sequential(self, client: AsyncClient):
        first = await client.post("/billing/documents", json=INVOICE_PAYLOAD)
        second = await client.post("/billing/documents", json=INVOICE_PAYLOAD)

        first_seq = int(first.json()["number"].split("-")[-1])
        second_seq = int(second.json()["number"].split("-")[-1])
        assert second_seq == first_seq + 1

    @pytest.mark.asyncio
    async def test_create_without_items(self, client: AsyncClient):
        payload = {**INVOICE_PAYLOAD, "items": []}

        response = await client.post("/billing/documents", json=payload)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "items" in error["details"]

    @pytest.mark.asyncio
    async def test_get_unknown_document(self, client: AsyncClient):
        response = await client.get("/billing/documents/INV-1999-000001")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "DOCUMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_items_and_adjustments(self, client: AsyncClient):
        created = (await client.post("/billing/documents", json=INVOICE_PAYLOAD)).json()

        response = await client.put(
            f"/billing/documents/{created['number']}",
            json={
                "items": [{"kind": "part", "description": "Tyre", "quantity": "4", "unit_cost": "80"}],
                "discount_percent": "0",
                "tax_percent": "0",
                "other_charges": "0",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["line_items"]) == 1
        assert Decimal(data["totals"]["grand_total"]) == Decimal("320.00")
        assert Decimal(data["totals"]["balance_due"]) == Decimal("300.00")

    @pytest.mark.asyncio
    async def test_cancelled_invoice_is_read_only(self, client: AsyncClient):
        created = (await client.post("/billing/documents", json=INVOICE_PAYLOAD)).json()
        number = created["number"]

        cancel = await client.put(f"/billing/documents/{number}", json={"status": "cancelled"})
        edit = await client.put(f"/billing/documents/{number}", json={"remarks": "late edit"})

        assert cancel.status_code == 200
        assert edit.status_code == 400
        assert edit.json()["error"]["code"] == "INVALID_DOCUMENT_STATUS"


class TestConvertEstimateAPI:
    @pytest.mark.asyncio
    async def test_convert_estimate(self, client: AsyncClient):
        estimate = (await client.post("/billing/documents", json=ESTIMATE_PAYLOAD)).json()
        assert estimate["number"].startswith("QUO-")
        assert estimate["totals"]["balance_due"] is None

        response = await client.post(f"/billing/documents/{estimate['number']}/convert")

        assert response.status_code == 201
        invoice = response.json()
        assert invoice["kind"] == "invoice"
        assert invoice["status"] == "unpaid"
        assert invoice["reference"] == estimate["number"]
        assert invoice["currency"] == "USD"
        assert Decimal(invoice["totals"]["grand_total"]) == Decimal("672.60")
        assert Decimal(invoice["totals"]["balance_due"]) == Decimal("672.60")

        converted = (await client.get(f"/billing/documents/{estimate['number']}")).json()
        assert converted["status"] == "converted_to_invoice"

        again = await client.post(f"/billing/documents/{estimate['number']}/convert")
        assert again.status_code == 400
        assert again.json()["error"]["code"] == "INVALID_DOCUMENT_STATUS"


class TestDocumentPdfAPI:
    @pytest.mark.asyncio
    async def test_pdf_as_base64(self, client: AsyncClient):
        created = (await client.post("/billing/documents", json=INVOICE_PAYLOAD)).json()

        response = await client.get(f"/billing/documents/{created['number']}/pdf")

        assert response.status_code == 200
        data = response.json()
        assert data["number"] == created["number"]
        assert base64.b64decode(data["pdf_base64"]).startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_pdf_download(self, client: AsyncClient):
        created = (await client.post("/billing/documents", json=ESTIMATE_PAYLOAD)).json()

        response = await client.get(f"/billing/documents/{created['number']}/pdf/download")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_pdf_unknown_document(self, client: AsyncClient):
        response = await client.get("/billing/documents/QUO-1999-000001/pdf")

        assert response.status_code == 404
