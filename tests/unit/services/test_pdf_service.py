"""Unit tests for ReportLabPdfService"""

from datetime import date, datetime
from decimal import Decimal

from src.adapter.services.pdf_service import ReportLabPdfService, _quantity
from src.domain.document import Document, DocumentKind, EstimateStatus, InvoiceStatus
from src.domain.line_item import LineItem, LineItemKind
from src.domain.pricing import document_totals


def _document(kind: DocumentKind, status: str) -> Document:
    return Document(
        id=1,
        number="INV-2024-000001" if kind == DocumentKind.INVOICE else "QUO-2024-000001",
        kind=kind,
        status=status,
        currency="TZS",
        issue_date=date(2024, 3, 1),
        due_date=date(2024, 3, 8) if kind == DocumentKind.INVOICE else None,
        customer_name="Smith & Sons <Fleet>",
        plate="T 123 ABC",
        discount_percent=Decimal("5"),
        tax_percent=Decimal("18"),
        other_charges=Decimal("10.00") if kind == DocumentKind.INVOICE else Decimal("0"),
        amount_paid=Decimal("0"),
        remarks="Replace rear pads at next service",
        terms="Payment due within 7 days.",
        created_at=datetime(2024, 3, 1, 9, 0, 0),
        updated_at=datetime(2024, 3, 1, 9, 0, 0),
    )


def _items():
    return [
        LineItem(
            id=1,
            document_id=1,
            position=0,
            kind=LineItemKind.SERVICE,
            description="Front brake service",
            quantity=Decimal("1"),
            unit_cost=Decimal("0"),
            labor_hours=Decimal("1.5"),
            labor_rate=Decimal("50"),
        ),
        LineItem(
            id=2,
            document_id=1,
            position=1,
            kind=LineItemKind.PART,
            description="Brake pads & shims",
            part_number="BP-2201",
            quantity=Decimal("2"),
            unit_cost=Decimal("45.00"),
            labor_hours=Decimal("0"),
            labor_rate=Decimal("0"),
        ),
    ]


class TestReportLabPdfService:
    def test_invoice_pdf(self):
        document = _document(DocumentKind.INVOICE, InvoiceStatus.UNPAID.value)
        items = _items()

        pdf_bytes = ReportLabPdfService().generate_document(
            document=document,
            line_items=items,
            totals=document_totals(document, items),
            company_name="Mwanza Auto Garage",
        )

        assert pdf_bytes.startswith(b"%PDF")
        assert len(pdf_bytes) > 1000

    def test_estimate_pdf(self):
        document = _document(DocumentKind.ESTIMATE, EstimateStatus.DRAFT.value)
        items = _items()

        pdf_bytes = ReportLabPdfService().generate_document(
            document=document,
            line_items=items,
            totals=document_totals(document, items),
        )

        assert pdf_bytes.startswith(b"%PDF")

    def test_quantity_format(self):
        assert _quantity(Decimal("2")) == "2"
        assert _quantity(Decimal("1.5")) == "1.5"
        assert _quantity(Decimal("0")) == "0"
        assert _quantity(Decimal("1250")) == "1,250"
