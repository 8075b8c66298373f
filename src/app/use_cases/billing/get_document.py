"""Get Document Use Case

Retrieves an estimate or invoice with totals recomputed from its line items.
"""

from libs.result import Result, Return
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.pricing import document_totals
from .dtos import DocumentResponseDTO
from .errors import document_not_found
from .mappers import to_document_response


class GetDocument:
    """
    Get Document Use Case

    Read-only. Totals are never stored; they are derived again on every read
    so they always match the current line items and adjustments.
    """

    def __init__(self, document_repo: DocumentRepository, line_item_repo: LineItemRepository):
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo

    async def execute(self, number: str) -> Result[DocumentResponseDTO]:
        """
        Execute get document operation

        Args:
            number: Document number

        Returns:
            Result[DocumentResponseDTO]: Success with document data or error

        Errors:
            DOCUMENT_NOT_FOUND: No document with that number
        """
        document = await self.document_repo.get_by_number(number)
        if not document:
            return Return.err(document_not_found(number))

        items = await self.line_item_repo.get_by_document_id(document.id)
        totals = document_totals(document, items)

        return Return.ok(to_document_response(document, items, totals))
