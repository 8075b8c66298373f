"""
List Payments Use Case

Payment history of an invoice, newest first.
"""
from libs.result import Result, Return
from src.app.repositories.payment_repository import PaymentRepository
from .dtos import ListPaymentsResponseDTO
from .mappers import to_payment_response


class ListPayments:
    """
    Use case: List payments recorded against an invoice

    Read-only, supports pagination.
    """

    def __init__(self, payment_repo: PaymentRepository):
        self.payment_repo = payment_repo

    async def execute(
        self,
        invoice_reference: str,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[ListPaymentsResponseDTO]:
        """
        List payments with pagination.

        Args:
            invoice_reference: Invoice number
            limit: Max payments to return (default 50)
            offset: Pagination offset (default 0)

        Returns:
            Result[ListPaymentsResponseDTO]: Payments, newest first
        """
        reference = invoice_reference.strip()
        payments = await self.payment_repo.get_by_invoice_reference(reference, limit=limit, offset=offset)

        return Return.ok(
            ListPaymentsResponseDTO(
                invoice_reference=reference,
                payments=[to_payment_response(p) for p in payments],
                total_count=len(payments),
            )
        )
