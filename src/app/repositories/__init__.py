from .document_repository import DocumentRepository
from .line_item_repository import LineItemRepository
from .payment_repository import PaymentRepository

__all__ = [
    "DocumentRepository",
    "LineItemRepository",
    "PaymentRepository",
]
