"""Unit tests for CreateDocument use case

Tests cover:
- Estimate and invoice creation with number generation
- Estimates never store other charges or an amount paid
- Submission validation errors
- Rollback on repository failure
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.create_document import CreateDocument
from src.app.use_cases.billing.dtos import (
    CreateEstimateCommandDTO,
    CreateInvoiceCommandDTO,
    LineItemDTO,
)
from src.domain.document import DocumentKind


def _persist_document(document):
    document.id = 1
    document.created_at = datetime(2024, 3, 1, 9, 0, 0)
    document.updated_at = datetime(2024, 3, 1, 9, 0, 0)
    return document


def _persist_items(document_id, items):
    for position, item in enumerate(items):
        item.id = position + 1
        item.document_id = document_id
        item.position = position
    return items


@pytest.fixture
def mock_document_repo():
    repo = MagicMock()
    repo.generate_number = AsyncMock(return_value="INV-2024-000001")
    repo.create = AsyncMock(side_effect=_persist_document)
    return repo


@pytest.fixture
def mock_line_item_repo():
    repo = MagicMock()
    repo.replace_for_document = AsyncMock(side_effect=_persist_items)
    return repo


@pytest.fixture
def create_use_case(mock_uow, mock_document_repo, mock_line_item_repo):
    return CreateDocument(
        uow=mock_uow,
        document_repo=mock_document_repo,
        line_item_repo=mock_line_item_repo,
        default_currency="TZS",
        supported_currencies=("TZS", "USD"),
        terms={
            DocumentKind.ESTIMATE: "Quote valid for 30 days.",
            DocumentKind.INVOICE: "Payment due within 7 days.",
        },
    )


@pytest.fixture
def invoice_command():
    return CreateInvoiceCommandDTO(
        customer_name="John Doe",
        plate="T 123 ABC",
        items=[
            LineItemDTO(kind="part", description="Oil filter", quantity="1", unit_cost="25.00"),
            LineItemDTO(kind="service", description="Oil change", labor_hours="1.5", labor_rate="50.00"),
        ],
        discount_percent="10",
        tax_percent="18",
        other_charges="5.00",
        amount_paid="20.00",
    )


@pytest.mark.asyncio
class TestCreateDocumentSuccess:
    async def test_create_invoice(
        self, create_use_case, mock_uow, mock_document_repo, mock_line_item_repo, invoice_command
    ):
        """
        Given: Valid invoice with two line items
        When: CreateDocument is executed
        Then: Invoice is saved unpaid with derived totals
        """
        result = await create_use_case.execute(invoice_command)

        assert result.is_ok()
        response = result.value
        assert response.number == "INV-2024-000001"
        assert response.kind == "invoice"
        assert response.status == "unpaid"
        assert response.currency == "TZS"
        assert response.terms == "Payment due within 7 days."
        assert [li.position for li in response.line_items] == [0, 1]
        assert response.line_items[1].line_subtotal == Decimal("75.00")

        # 100.00 - 10.00 = 90.00; tax 16.20; + 5.00 = 111.20; paid 20.00
        assert response.totals.subtotal_items == Decimal("100.00")
        assert response.totals.tax_amount == Decimal("16.20")
        assert response.totals.grand_total == Decimal("111.20")
        assert response.totals.balance_due == Decimal("91.20")

        mock_document_repo.generate_number.assert_called_once_with("INV")
        mock_line_item_repo.replace_for_document.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_create_estimate_drops_invoice_only_fields(
        self, create_use_case, mock_document_repo
    ):
        mock_document_repo.generate_number = AsyncMock(return_value="QUO-2024-000001")
        command = CreateEstimateCommandDTO(
            customer_name="Jane",
            currency="usd",
            items=[LineItemDTO(description="Diagnostics", labor_hours="1", labor_rate="40")],
        )

        result = await create_use_case.execute(command)

        assert result.is_ok()
        saved = mock_document_repo.create.call_args.args[0]
        assert saved.kind == DocumentKind.ESTIMATE
        assert saved.status == "draft"
        assert saved.currency == "USD"
        assert saved.other_charges == Decimal("0")
        assert saved.amount_paid == Decimal("0")
        assert result.value.totals.balance_due is None
        mock_document_repo.generate_number.assert_called_once_with("QUO")


@pytest.mark.asyncio
class TestCreateDocumentValidation:
    async def test_empty_items_rejected(self, create_use_case, mock_uow, mock_document_repo):
        command = CreateInvoiceCommandDTO(customer_name="John Doe", items=[])

        result = await create_use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.details == {"items": "At least one line item is required."}
        mock_document_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_missing_customer_and_description(self, create_use_case):
        command = CreateEstimateCommandDTO(items=[LineItemDTO(description="")])

        result = await create_use_case.execute(command)

        assert result.is_err()
        assert set(result.error.details) == {"customer_name", "items.0.description"}

    async def test_status_of_other_kind_rejected(self, create_use_case):
        command = CreateEstimateCommandDTO(
            customer_name="Jane",
            status="paid",
            items=[LineItemDTO(description="Diagnostics")],
        )

        result = await create_use_case.execute(command)

        assert result.is_err()
        assert "status" in result.error.details


@pytest.mark.asyncio
class TestCreateDocumentFailure:
    async def test_repository_failure_rolls_back(
        self, create_use_case, mock_uow, mock_document_repo, invoice_command
    ):
        mock_document_repo.create = AsyncMock(side_effect=Exception("Database connection lost"))

        result = await create_use_case.execute(invoice_command)

        assert result.is_err()
        assert result.error.code == "CREATE_DOCUMENT_FAILED"
        assert "Database connection lost" in result.error.reason
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
