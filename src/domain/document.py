"""Document Domain Entity

An Estimate or an Invoice. Both share one shape and are told apart by ``kind``;
only Invoices carry other charges and an amount paid.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Type
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, IdType, TimestampType, utc_now


class DocumentKind(str, Enum):
    """Document kinds"""
    ESTIMATE = "estimate"
    INVOICE = "invoice"


class EstimateStatus(str, Enum):
    """Estimate status types"""
    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"
    CONVERTED_TO_INVOICE = "converted_to_invoice"


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    UNPAID = "unpaid"
    PAID = "paid"
    PARTIALLY_PAID = "partially_paid"
    CANCELLED = "cancelled"


STATUSES_BY_KIND: Dict[DocumentKind, Type[Enum]] = {
    DocumentKind.ESTIMATE: EstimateStatus,
    DocumentKind.INVOICE: InvoiceStatus,
}

INITIAL_STATUS: Dict[DocumentKind, str] = {
    DocumentKind.ESTIMATE: EstimateStatus.DRAFT.value,
    DocumentKind.INVOICE: InvoiceStatus.UNPAID.value,
}

# No further edits once a document reaches one of these
TERMINAL_STATUSES = frozenset({
    EstimateStatus.CONVERTED_TO_INVOICE.value,
    InvoiceStatus.CANCELLED.value,
})

NUMBER_PREFIX: Dict[DocumentKind, str] = {
    DocumentKind.ESTIMATE: "QUO",
    DocumentKind.INVOICE: "INV",
}


def status_belongs_to(kind: DocumentKind, status: str) -> bool:
    """True if ``status`` is one of the statuses defined for ``kind``"""
    return status in {s.value for s in STATUSES_BY_KIND[kind]}


def is_read_only(document: "Document") -> bool:
    return document.status in TERMINAL_STATUSES


def validate_document_submission(
    kind: DocumentKind,
    customer_name: Optional[str],
    currency: str,
    items: Iterable[Any],
    supported_currencies: Iterable[str],
    status: Optional[str] = None,
) -> Dict[str, str]:
    """
    Check a document before it is saved

    An empty item list is fine while editing, but never on submission.

    Returns:
        Mapping of field name to user-facing message (empty when valid)
    """
    errors: Dict[str, str] = {}
    items = list(items)

    if not items:
        errors["items"] = "At least one line item is required."
    for index, item in enumerate(items):
        description = getattr(item, "description", None)
        if not description or not description.strip():
            errors[f"items.{index}.description"] = "Line item description is required."

    if not customer_name or not customer_name.strip():
        errors["customer_name"] = "Customer Name is required."

    if currency not in set(supported_currencies):
        errors["currency"] = f"Unsupported currency: {currency}"

    if status is not None and not status_belongs_to(kind, status):
        allowed = ", ".join(s.value for s in STATUSES_BY_KIND[kind])
        errors["status"] = f"Invalid {kind.value} status '{status}'. Allowed: {allowed}"

    return errors


class Document(BaseModel, table=True):
    """
    Document - Estimate (quote) or Invoice for garage work

    Domain Rules:
    - number is unique (QUO-YYYY-NNNNNN / INV-YYYY-NNNNNN)
    - status must belong to the kind's status set
    - other_charges and amount_paid are always 0 for estimates
    - Monetary totals are derived from line items on every read, never stored
    """

    __tablename__ = "documents"
    __table_args__ = (
        Index('ix_documents_number', 'number', unique=True),
        Index('ix_documents_kind_status', 'kind', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique document identifier (auto-increment)"
    )

    number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Document number (e.g., INV-2024-000001)"
    )

    kind: DocumentKind = Field(
        description="Document kind (estimate, invoice)"
    )

    status: str = Field(
        sa_column=Column(String(30), nullable=False),
        description="Estimate or invoice status, depending on kind"
    )

    currency: str = Field(
        default="TZS",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    issue_date: date = Field(
        default_factory=date.today,
        description="Document date"
    )

    expiry_date: Optional[date] = Field(
        default=None,
        description="Estimate expiry date"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Invoice due date"
    )

    reference: Optional[str] = Field(
        default=None,
        description="Job card, work order or estimate reference"
    )

    prepared_by: Optional[str] = Field(
        default=None,
        description="Employee who prepared the document"
    )

    customer_id: Optional[str] = Field(default=None)
    customer_name: str = Field(description="Customer display name")
    phone: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)

    vehicle_id: Optional[str] = Field(default=None)
    plate: Optional[str] = Field(default=None)

    discount_percent: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(9, 4), nullable=False),
        description="Discount as a percentage of the items subtotal"
    )

    tax_percent: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(9, 4), nullable=False),
        description="Tax/VAT percentage applied after discount"
    )

    other_charges: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Flat surcharge added to the grand total (invoice only)"
    )

    amount_paid: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Amount already settled against the invoice (invoice only)"
    )

    remarks: Optional[str] = Field(default=None)
    technician: Optional[str] = Field(default=None)
    terms: Optional[str] = Field(default=None)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Document creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "number": "INV-2024-000001",
                "kind": "invoice",
                "status": "unpaid",
                "currency": "TZS",
                "customer_name": "John Doe",
                "discount_percent": "10.0000",
                "tax_percent": "18.0000",
                "other_charges": "0.00",
                "amount_paid": "0.00",
            }
        }
