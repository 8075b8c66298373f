from .base import BaseModel
from .document import Document, DocumentKind, EstimateStatus, InvoiceStatus
from .line_item import LineItem, LineItemKind
from .payment import Payment, PaymentMethod, PaymentStatus
from .client import ClientType

__all__ = [
    "BaseModel",
    "Document",
    "DocumentKind",
    "EstimateStatus",
    "InvoiceStatus",
    "LineItem",
    "LineItemKind",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "ClientType",
]
