"""SQLAlchemy Payment Repository Implementation

Implements payment persistence using SQLAlchemy async session.
"""

from typing import List
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.base import utc_now
from src.domain.payment import Payment, RECEIPT_NUMBER_PREFIX


class SqlAlchemyPaymentRepository(PaymentRepository):
    """
    SQLAlchemy implementation of PaymentRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_invoice_reference(
        self,
        invoice_reference: str,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Payment]:
        """
        Retrieve payments recorded against an invoice

        Args:
            invoice_reference: Invoice number
            limit: Maximum number of payments to return
            offset: Offset for pagination

        Returns:
            List of payments, newest first
        """
        statement = (
            select(Payment)
            .where(Payment.invoice_reference == invoice_reference)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def generate_number(self, prefix: str) -> str:
        """
        Generate the next payment or receipt number for the current year

        Format: PREFIX-YYYY-NNNNNN (e.g., PAY-2024-000001)
        """
        column = Payment.receipt_number if prefix == RECEIPT_NUMBER_PREFIX else Payment.number
        year = utc_now().year
        number_prefix = f"{prefix}-{year}-"

        statement = select(func.max(column)).where(column.like(f"{number_prefix}%"))
        result = await self.session.execute(statement)
        max_number = result.scalar_one_or_none()

        if max_number:
            sequence = int(max_number.split("-")[-1]) + 1
        else:
            sequence = 1

        return f"{number_prefix}{sequence:06d}"
