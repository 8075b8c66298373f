"""GenerateDocumentPdf Use Case

Renders a stored estimate or invoice as a printable PDF.
"""

import base64
import logging
from libs.result import Result, Return, Error
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.services.pdf_service import PdfService
from src.domain.base import utc_now
from src.domain.document import DocumentKind
from src.domain.pricing import document_totals
from .dtos import DocumentPdfResponseDTO
from .errors import document_not_found

logger = logging.getLogger(__name__)


class GenerateDocumentPdf:
    """
    Use Case: Printable estimate or invoice

    Business Rules:
    1. Document must exist
    2. Totals printed are the ones derived from the current line items
    3. Returns PDF as base64-encoded string

    Flow:
    1. Retrieve document and line items
    2. Derive totals
    3. Generate PDF using PDF service
    4. Return response with PDF as base64
    """

    def __init__(
        self,
        document_repo: DocumentRepository,
        line_item_repo: LineItemRepository,
        pdf_service: PdfService,
        company_name: str = "Garage Workshop",
        company_address: str = "Main Workshop",
    ):
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.pdf_service = pdf_service
        self.company_name = company_name
        self.company_address = company_address

    async def execute(self, number: str) -> Result[DocumentPdfResponseDTO]:
        """
        Execute PDF generation

        Args:
            number: Document number

        Returns:
            Result[DocumentPdfResponseDTO]: Success with PDF or error
        """
        try:
            # Step 1: Retrieve document
            document = await self.document_repo.get_by_number(number)
            if not document:
                return Return.err(document_not_found(number))

            items = await self.line_item_repo.get_by_document_id(document.id)

            # Step 2: Derive totals
            totals = document_totals(document, items)

            # Step 3: Generate PDF
            pdf_bytes = self.pdf_service.generate_document(
                document=document,
                line_items=items,
                totals=totals,
                company_name=self.company_name,
                company_address=self.company_address,
            )

            # Step 4: Build response
            return Return.ok(
                DocumentPdfResponseDTO(
                    number=document.number,
                    kind=DocumentKind(document.kind).value,
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=utc_now(),
                )
            )

        except Exception as e:
            logger.error(f"Failed to generate PDF for {number}: {e}")
            return Return.err(
                Error(
                    code="GENERATE_PDF_FAILED",
                    message=f"Failed to generate PDF for {number}",
                    reason=str(e),
                )
            )
