"""Payment Repository Interface

Defines the contract for payment persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """
    Repository interface for Payment persistence
    """

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        pass

    @abstractmethod
    async def get_by_invoice_reference(
        self,
        invoice_reference: str,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Payment]:
        """
        Retrieve payments recorded against an invoice, newest first

        Args:
            invoice_reference: Invoice number
            limit: Maximum number of payments to return
            offset: Offset for pagination

        Returns:
            List of payments
        """
        pass

    @abstractmethod
    async def generate_number(self, prefix: str) -> str:
        """
        Generate a unique payment or receipt number

        Format: PREFIX-YYYY-NNNNNN (e.g., PAY-2024-000001, RCPT-2024-000001)

        Args:
            prefix: Number prefix (PAY or RCPT)

        Returns:
            Unique number string
        """
        pass
