"""Document Repository Interface

Defines the contract for estimate/invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.document import Document


class DocumentRepository(ABC):
    """
    Repository interface for Document persistence

    Provides access to estimates and invoices.
    """

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """
        Create a new document

        Args:
            document: Document entity to persist

        Returns:
            Created Document with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, document_id: int) -> Optional[Document]:
        """
        Retrieve document by ID

        Args:
            document_id: Document ID

        Returns:
            Document if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_number(self, number: str) -> Optional[Document]:
        """
        Retrieve document by its number

        Args:
            number: Unique document number (e.g., INV-2024-000001)

        Returns:
            Document if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, document: Document) -> Document:
        """
        Update an existing document

        Args:
            document: Document entity with updated values

        Returns:
            Updated Document
        """
        pass

    @abstractmethod
    async def generate_number(self, prefix: str) -> str:
        """
        Generate a unique document number

        Format: PREFIX-YYYY-NNNNNN (e.g., QUO-2024-000001)

        Args:
            prefix: Number prefix (QUO or INV)

        Returns:
            Unique document number string
        """
        pass
