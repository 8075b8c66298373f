"""SQLAlchemy Line Item Repository Implementation

Implements document line item persistence using SQLAlchemy async session.
"""

from typing import List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.line_item import LineItem


class SqlAlchemyLineItemRepository(LineItemRepository):
    """
    SQLAlchemy implementation of LineItemRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_document_id(self, document_id: int) -> List[LineItem]:
        """
        Retrieve all line items of a document

        Args:
            document_id: Document ID

        Returns:
            List of LineItem in entry order
        """
        statement = (
            select(LineItem)
            .where(LineItem.document_id == document_id)
            .order_by(LineItem.position, LineItem.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def replace_for_document(self, document_id: int, items: List[LineItem]) -> List[LineItem]:
        """
        Delete the document's line items and store the given ones in order

        Args:
            document_id: Document ID
            items: New line items

        Returns:
            Stored line items with generated IDs
        """
        await self.session.execute(delete(LineItem).where(LineItem.document_id == document_id))

        for position, item in enumerate(items):
            item.document_id = document_id
            item.position = position
            self.session.add(item)

        await self.session.flush()
        for item in items:
            await self.session.refresh(item)
        return list(items)
