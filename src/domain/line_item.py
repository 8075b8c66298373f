"""Line Item Domain Entity

One billable row (service hours, parts, or anything else) within a document.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, IdType, TimestampType, utc_now


class LineItemKind(str, Enum):
    """Line item kinds"""
    SERVICE = "service"
    PART = "part"
    OTHER = "other"


class LineItem(BaseModel, table=True):
    """
    Line Item - Billable row within an estimate or invoice

    Domain Rules:
    - Each line item belongs to exactly one document
    - position keeps the order the items were entered in
    - line subtotal = quantity * unit_cost + labor_hours * labor_rate; it is
      derived by the pricing module and never stored
    """

    __tablename__ = "document_line_items"
    __table_args__ = (
        Index('ix_document_line_items_document_id', 'document_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique line item identifier (auto-increment)"
    )

    document_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Document"
    )

    position: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False),
        description="Zero-based position within the document"
    )

    kind: LineItemKind = Field(
        default=LineItemKind.SERVICE,
        description="Line item kind (service, part, other)"
    )

    description: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Line item description (e.g., 'Brake pad replacement')"
    )

    part_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Inventory part number"
    )

    quantity: Decimal = Field(
        default=Decimal("1"),
        sa_column=Column(Numeric(18, 3), nullable=False),
        description="Quantity of parts/other"
    )

    unit_cost: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Cost per unit"
    )

    labor_hours: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(9, 2), nullable=False),
        description="Service time in hours"
    )

    labor_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Labor rate per hour"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Line item creation timestamp"
    )
