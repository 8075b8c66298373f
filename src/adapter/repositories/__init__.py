from .document_repository import SqlAlchemyDocumentRepository
from .line_item_repository import SqlAlchemyLineItemRepository
from .payment_repository import SqlAlchemyPaymentRepository

__all__ = [
    "SqlAlchemyDocumentRepository",
    "SqlAlchemyLineItemRepository",
    "SqlAlchemyPaymentRepository",
]
