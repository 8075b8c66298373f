"""ConvertEstimateToInvoice Use Case

Turns an approved (or otherwise open) estimate into an unpaid invoice.
"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.document import (
    Document,
    DocumentKind,
    EstimateStatus,
    InvoiceStatus,
    NUMBER_PREFIX,
)
from src.domain.line_item import LineItem
from src.domain.pricing import ZERO, document_totals
from .dtos import DocumentResponseDTO
from .errors import document_not_found
from .mappers import to_document_response

logger = logging.getLogger(__name__)


class ConvertEstimateToInvoice:
    """
    Use Case: Convert an estimate into an invoice

    Business Rules:
    1. Only estimates can be converted
    2. Rejected or already converted estimates cannot be converted
    3. The invoice copies customer, vehicle, line items and percentages
    4. The invoice starts unpaid with no other charges and references the estimate
    5. The estimate is marked converted_to_invoice in the same transaction

    Flow:
    1. Retrieve estimate and its line items
    2. Check kind and status
    3. Generate invoice number and create invoice
    4. Copy line items
    5. Mark estimate converted
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_item_repo: LineItemRepository,
        invoice_terms: Optional[str] = None,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.invoice_terms = invoice_terms

    async def execute(self, number: str) -> Result[DocumentResponseDTO]:
        """
        Execute estimate conversion

        Args:
            number: Estimate number

        Returns:
            Result[DocumentResponseDTO]: Success with the new invoice or error
        """
        try:
            # Step 1: Retrieve estimate
            estimate = await self.document_repo.get_by_number(number)
            if not estimate:
                return Return.err(document_not_found(number))

            # Step 2: Check kind and status
            if DocumentKind(estimate.kind) != DocumentKind.ESTIMATE:
                return Return.err(
                    Error(
                        code="INVALID_DOCUMENT_KIND",
                        message=f"Document {number} is not an estimate",
                        reason="Only estimates can be converted to invoices",
                    )
                )

            if estimate.status in (EstimateStatus.REJECTED.value, EstimateStatus.CONVERTED_TO_INVOICE.value):
                return Return.err(
                    Error(
                        code="INVALID_DOCUMENT_STATUS",
                        message=f"Estimate {number} is {estimate.status} and cannot be converted",
                        reason="Rejected or converted estimates cannot be converted",
                    )
                )

            estimate_items = await self.line_item_repo.get_by_document_id(estimate.id)

            # Step 3: Create invoice
            invoice_number = await self.document_repo.generate_number(NUMBER_PREFIX[DocumentKind.INVOICE])
            invoice = Document(
                number=invoice_number,
                kind=DocumentKind.INVOICE,
                status=InvoiceStatus.UNPAID.value,
                currency=estimate.currency,
                issue_date=date.today(),
                reference=estimate.number,
                prepared_by=estimate.prepared_by,
                customer_id=estimate.customer_id,
                customer_name=estimate.customer_name,
                phone=estimate.phone,
                email=estimate.email,
                address=estimate.address,
                vehicle_id=estimate.vehicle_id,
                plate=estimate.plate,
                discount_percent=estimate.discount_percent,
                tax_percent=estimate.tax_percent,
                other_charges=ZERO,
                amount_paid=ZERO,
                remarks=estimate.remarks,
                technician=estimate.technician,
                terms=self.invoice_terms or estimate.terms,
            )
            created = await self.document_repo.create(invoice)

            # Step 4: Copy line items
            items = await self.line_item_repo.replace_for_document(
                created.id,
                [
                    LineItem(
                        position=item.position,
                        kind=item.kind,
                        description=item.description,
                        part_number=item.part_number,
                        quantity=item.quantity,
                        unit_cost=item.unit_cost,
                        labor_hours=item.labor_hours,
                        labor_rate=item.labor_rate,
                    )
                    for item in estimate_items
                ],
            )

            # Step 5: Mark estimate converted
            estimate.status = EstimateStatus.CONVERTED_TO_INVOICE.value
            await self.document_repo.update(estimate)

            # Step 6: Commit transaction
            await self.uow.commit()

            totals = document_totals(created, items)
            logger.info(
                f"Converted estimate {estimate.number} to invoice {created.number}, "
                f"grand_total={totals.grand_total} {created.currency}"
            )

            return Return.ok(to_document_response(created, items, totals))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to convert estimate {number}: {e}")
            return Return.err(
                Error(
                    code="CONVERT_ESTIMATE_FAILED",
                    message=f"Failed to convert estimate {number}",
                    reason=str(e),
                )
            )
