"""PDF Generation Service Interface

Defines the contract for printable estimate/invoice generation.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.document import Document
from src.domain.line_item import LineItem
from src.domain.pricing import DocumentTotals


class PdfService(ABC):
    """
    Service interface for PDF generation

    Renders an estimate or invoice with its line items and totals breakdown.
    """

    @abstractmethod
    def generate_document(
        self,
        document: Document,
        line_items: List[LineItem],
        totals: DocumentTotals,
        company_name: str = "Garage Workshop",
        company_address: str = "Main Workshop",
    ) -> bytes:
        """
        Generate a printable estimate or invoice

        Args:
            document: Document entity
            line_items: Line items of the document, in order
            totals: Totals derived from the line items
            company_name: Company name to display on the document
            company_address: Company address to display on the document

        Returns:
            PDF document as bytes
        """
        pass
