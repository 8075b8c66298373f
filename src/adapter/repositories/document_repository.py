"""SQLAlchemy Document Repository Implementation

Implements estimate/invoice persistence using SQLAlchemy async session.
"""

from typing import Optional
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_repository import DocumentRepository
from src.domain.base import utc_now
from src.domain.document import Document


class SqlAlchemyDocumentRepository(DocumentRepository):
    """
    SQLAlchemy implementation of DocumentRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: Document) -> Document:
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def get_by_id(self, document_id: int) -> Optional[Document]:
        statement = select(Document).where(Document.id == document_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_number(self, number: str) -> Optional[Document]:
        statement = select(Document).where(Document.number == number)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, document: Document) -> Document:
        document.updated_at = utc_now()
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def generate_number(self, prefix: str) -> str:
        """
        Generate the next document number for the current year

        Format: PREFIX-YYYY-NNNNNN (e.g., QUO-2024-000001)
        """
        year = utc_now().year
        number_prefix = f"{prefix}-{year}-"

        # Highest number issued with this prefix this year
        statement = (
            select(func.max(Document.number))
            .where(Document.number.like(f"{number_prefix}%"))
        )
        result = await self.session.execute(statement)
        max_number = result.scalar_one_or_none()

        if max_number:
            sequence = int(max_number.split("-")[-1]) + 1
        else:
            sequence = 1

        return f"{number_prefix}{sequence:06d}"
