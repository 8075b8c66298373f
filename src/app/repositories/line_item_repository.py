"""Line Item Repository Interface

Defines the contract for document line item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.line_item import LineItem


class LineItemRepository(ABC):
    """
    Repository interface for LineItem persistence

    Line items are always read and written as the full, ordered list of a
    document.
    """

    @abstractmethod
    async def get_by_document_id(self, document_id: int) -> List[LineItem]:
        """
        Retrieve all line items of a document, in entry order

        Args:
            document_id: Document ID

        Returns:
            List of LineItem ordered by position
        """
        pass

    @abstractmethod
    async def replace_for_document(self, document_id: int, items: List[LineItem]) -> List[LineItem]:
        """
        Replace the line items of a document

        Existing items are deleted; the given items are stored with their
        position set to their index in the list.

        Args:
            document_id: Document ID
            items: New line items

        Returns:
            Stored line items with generated IDs
        """
        pass
