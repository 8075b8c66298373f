"""CreateDocument Use Case

Saves a new estimate or invoice with its line items.
"""

import logging
from datetime import date
from typing import Dict, Iterable, Optional, Union
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.document import (
    Document,
    DocumentKind,
    INITIAL_STATUS,
    NUMBER_PREFIX,
    validate_document_submission,
)
from src.domain.pricing import ZERO, document_totals
from .dtos import CreateEstimateCommandDTO, CreateInvoiceCommandDTO, DocumentResponseDTO
from .errors import validation_error
from .mappers import to_document_response, to_line_items

logger = logging.getLogger(__name__)


class CreateDocument:
    """
    Use Case: Create an estimate or invoice

    Business Rules:
    1. At least one line item, each with a description
    2. Customer name is required
    3. Status, when given, must belong to the document kind
    4. Number is auto-generated (QUO-YYYY-NNNNNN / INV-YYYY-NNNNNN)
    5. Estimates never store other charges or an amount paid

    Flow:
    1. Validate the submission
    2. Generate document number
    3. Create document and its line items
    4. Commit transaction
    5. Return document with totals
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_item_repo: LineItemRepository,
        default_currency: str = "TZS",
        supported_currencies: Iterable[str] = ("TZS", "USD"),
        terms: Optional[Dict[DocumentKind, str]] = None,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.default_currency = default_currency
        self.supported_currencies = tuple(supported_currencies)
        self.terms = terms or {}

    async def execute(
        self, command: Union[CreateEstimateCommandDTO, CreateInvoiceCommandDTO]
    ) -> Result[DocumentResponseDTO]:
        """
        Execute document creation

        Args:
            command: Create estimate or create invoice command

        Returns:
            Result[DocumentResponseDTO]: Success with document and totals or error
        """
        kind = DocumentKind(command.kind)
        is_invoice = kind == DocumentKind.INVOICE
        currency = (command.currency or self.default_currency).upper()

        # Step 1: Validate
        errors = validate_document_submission(
            kind=kind,
            customer_name=command.customer_name,
            currency=currency,
            items=command.items,
            supported_currencies=self.supported_currencies,
            status=command.status,
        )
        if errors:
            return Return.err(validation_error(errors))

        try:
            # Step 2: Generate number
            number = await self.document_repo.generate_number(NUMBER_PREFIX[kind])

            # Step 3: Create document and line items
            document = Document(
                number=number,
                kind=kind,
                status=command.status or INITIAL_STATUS[kind],
                currency=currency,
                issue_date=command.issue_date or date.today(),
                expiry_date=None if is_invoice else command.expiry_date,
                due_date=command.due_date if is_invoice else None,
                reference=command.reference,
                prepared_by=command.prepared_by,
                customer_id=command.customer_id,
                customer_name=command.customer_name.strip(),
                phone=command.phone,
                email=command.email,
                address=command.address,
                vehicle_id=command.vehicle_id,
                plate=command.plate,
                discount_percent=command.discount_percent,
                tax_percent=command.tax_percent,
                other_charges=command.other_charges if is_invoice else ZERO,
                amount_paid=command.amount_paid if is_invoice else ZERO,
                remarks=command.remarks,
                technician=command.technician,
                terms=command.terms or self.terms.get(kind),
            )

            created = await self.document_repo.create(document)
            items = await self.line_item_repo.replace_for_document(
                created.id, to_line_items(command.items)
            )

            # Step 4: Commit transaction
            await self.uow.commit()

            # Step 5: Build response
            totals = document_totals(created, items)
            logger.info(
                f"Created {kind.value} {created.number} with {len(items)} items, "
                f"grand_total={totals.grand_total} {created.currency}"
            )

            return Return.ok(to_document_response(created, items, totals))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create {kind.value}: {e}")
            return Return.err(
                Error(
                    code="CREATE_DOCUMENT_FAILED",
                    message=f"Failed to create {kind.value}",
                    reason=str(e),
                )
            )
