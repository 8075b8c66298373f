"""Unit tests for Document domain rules"""

from datetime import timedelta
from decimal import Decimal
from src.domain.document import (
    Document,
    DocumentKind,
    EstimateStatus,
    InvoiceStatus,
    is_read_only,
    status_belongs_to,
    validate_document_submission,
)
from src.domain.line_item import LineItem
from src.domain.payment import Payment

SUPPORTED = ("TZS", "USD")


def line(description="Oil change"):
    return LineItem(description=description, quantity=Decimal("1"), unit_cost=Decimal("10"))


class TestDocumentStatus:
    def test_statuses_belong_to_their_kind(self):
        assert status_belongs_to(DocumentKind.ESTIMATE, "approved")
        assert status_belongs_to(DocumentKind.INVOICE, "partially_paid")
        assert not status_belongs_to(DocumentKind.ESTIMATE, "paid")
        assert not status_belongs_to(DocumentKind.INVOICE, "draft")

    def test_converted_and_cancelled_are_read_only(self):
        converted = Document(
            number="QUO-2024-000001",
            kind=DocumentKind.ESTIMATE,
            status=EstimateStatus.CONVERTED_TO_INVOICE.value,
            customer_name="Jane",
        )
        cancelled = Document(
            number="INV-2024-000001",
            kind=DocumentKind.INVOICE,
            status=InvoiceStatus.CANCELLED.value,
            customer_name="Jane",
        )
        open_invoice = Document(
            number="INV-2024-000002",
            kind=DocumentKind.INVOICE,
            status=InvoiceStatus.PARTIALLY_PAID.value,
            customer_name="Jane",
        )

        assert is_read_only(converted)
        assert is_read_only(cancelled)
        assert not is_read_only(open_invoice)


class TestValidateDocumentSubmission:
    def test_valid_submission(self):
        errors = validate_document_submission(
            DocumentKind.INVOICE, "John Doe", "TZS", [line()], SUPPORTED, status="unpaid"
        )
        assert errors == {}

    def test_requires_at_least_one_item(self):
        errors = validate_document_submission(DocumentKind.ESTIMATE, "John Doe", "TZS", [], SUPPORTED)
        assert errors == {"items": "At least one line item is required."}

    def test_every_item_needs_a_description(self):
        errors = validate_document_submission(
            DocumentKind.ESTIMATE, "John Doe", "TZS", [line(), line("  ")], SUPPORTED
        )
        assert errors == {"items.1.description": "Line item description is required."}

    def test_customer_name_required(self):
        errors = validate_document_submission(DocumentKind.ESTIMATE, " ", "TZS", [line()], SUPPORTED)
        assert errors == {"customer_name": "Customer Name is required."}

    def test_unsupported_currency(self):
        errors = validate_document_submission(DocumentKind.ESTIMATE, "John", "EUR", [line()], SUPPORTED)
        assert errors == {"currency": "Unsupported currency: EUR"}

    def test_status_must_match_kind(self):
        errors = validate_document_submission(
            DocumentKind.ESTIMATE, "John", "TZS", [line()], SUPPORTED, status="paid"
        )
        assert "status" in errors
        assert "converted_to_invoice" in errors["status"]


class TestTimestamps:
    def test_defaults_are_timezone_aware_utc(self):
        document = Document(number="INV-2024-000001", kind=DocumentKind.INVOICE, customer_name="Jane")
        payment = Payment(
            number="PAY-2024-000001",
            receipt_number="RCPT-2024-000001",
            invoice_reference="INV-2024-000001",
        )
        stamps = [document.created_at, document.updated_at, line().created_at, payment.paid_at, payment.created_at]

        for stamp in stamps:
            assert stamp.tzinfo is not None
            assert stamp.utcoffset() == timedelta(0)
