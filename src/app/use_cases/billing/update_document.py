"""UpdateDocument Use Case

Applies an edit to a stored estimate or invoice and returns the re-derived
totals.
"""

import logging
from typing import Dict, Iterable
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.document import DocumentKind, is_read_only, validate_document_submission
from src.domain.pricing import ZERO, document_totals
from .dtos import DocumentResponseDTO, UpdateDocumentCommandDTO
from .errors import document_not_found, validation_error
from .mappers import to_document_response, to_line_items

logger = logging.getLogger(__name__)

INVOICE_ONLY_FIELDS = ("other_charges", "amount_paid", "due_date")
ESTIMATE_ONLY_FIELDS = ("expiry_date",)
REQUIRED_FIELDS = (
    "status", "currency", "customer_name", "issue_date",
    "discount_percent", "tax_percent", "other_charges", "amount_paid",
)


class UpdateDocument:
    """
    Use Case: Edit an estimate or invoice

    Business Rules:
    1. Converted estimates and cancelled invoices cannot be edited
    2. Estimates cannot take other charges, an amount paid or a due date;
       invoices cannot take an expiry date
    3. The edited document must still pass submission validation
    4. A given items list replaces all line items
    5. Every total is re-derived from the edited inputs

    Flow:
    1. Retrieve document
    2. Check it is editable and the fields fit its kind
    3. Validate the edited document
    4. Apply changes and replace line items
    5. Commit transaction
    6. Return document with totals
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_item_repo: LineItemRepository,
        supported_currencies: Iterable[str] = ("TZS", "USD"),
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.supported_currencies = tuple(supported_currencies)

    async def execute(self, number: str, command: UpdateDocumentCommandDTO) -> Result[DocumentResponseDTO]:
        """
        Execute document update

        Args:
            number: Document number
            command: Fields to change

        Returns:
            Result[DocumentResponseDTO]: Success with updated document or error
        """
        try:
            # Step 1: Retrieve document
            document = await self.document_repo.get_by_number(number)
            if not document:
                return Return.err(document_not_found(number))

            # Step 2: Editable and kind-appropriate
            if is_read_only(document):
                return Return.err(
                    Error(
                        code="INVALID_DOCUMENT_STATUS",
                        message=f"Document {number} is {document.status} and can no longer be edited",
                        reason="Converted estimates and cancelled invoices are read-only",
                    )
                )

            kind = DocumentKind(document.kind)
            changes = {
                name: getattr(command, name)
                for name in command.model_fields_set
                if name != "items"
            }

            wrong_kind = ESTIMATE_ONLY_FIELDS if kind == DocumentKind.INVOICE else INVOICE_ONLY_FIELDS
            kind_errors: Dict[str, str] = {
                name: f"{name} does not apply to an {kind.value}"
                for name in wrong_kind
                if changes.get(name) not in (None, ZERO)
            }
            if kind_errors:
                return Return.err(validation_error(kind_errors))

            if changes.get("currency"):
                changes["currency"] = changes["currency"].upper()

            # Step 3: Validate edited document
            if command.items is not None:
                items = to_line_items(command.items)
            else:
                items = await self.line_item_repo.get_by_document_id(document.id)

            customer_name = changes.get("customer_name")
            if customer_name is None:
                customer_name = document.customer_name

            errors = validate_document_submission(
                kind=kind,
                customer_name=customer_name,
                currency=changes.get("currency") or document.currency,
                items=items,
                supported_currencies=self.supported_currencies,
                status=changes.get("status"),
            )
            if errors:
                return Return.err(validation_error(errors))

            # Step 4: Apply changes
            for name, value in changes.items():
                if value is None and name in REQUIRED_FIELDS:
                    continue
                setattr(document, name, value.strip() if name == "customer_name" else value)

            updated = await self.document_repo.update(document)
            if command.items is not None:
                items = await self.line_item_repo.replace_for_document(updated.id, items)

            # Step 5: Commit transaction
            await self.uow.commit()

            # Step 6: Build response
            totals = document_totals(updated, items)
            logger.info(
                f"Updated {kind.value} {updated.number}: grand_total={totals.grand_total}, "
                f"balance_due={totals.balance_due}"
            )
            return Return.ok(to_document_response(updated, items, totals))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to update document {number}: {e}")
            return Return.err(
                Error(
                    code="UPDATE_DOCUMENT_FAILED",
                    message=f"Failed to update document {number}",
                    reason=str(e),
                )
            )
