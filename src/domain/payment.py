"""Payment Domain Entity

A payment recorded against an invoice, with its balance snapshot.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, IdType, TimestampType, utc_now


class PaymentStatus(str, Enum):
    """Payment status types"""
    PENDING = "pending"
    COMPLETED = "completed"
    PARTIALLY_PAID = "partially_paid"
    FAILED = "failed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """Payment methods accepted at the counter"""
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    MOBILE_MONEY = "mobile_money"
    CREDIT_CARD = "credit_card"
    CHEQUE = "cheque"
    OTHER = "other"


PAYMENT_NUMBER_PREFIX = "PAY"
RECEIPT_NUMBER_PREFIX = "RCPT"


class Payment(BaseModel, table=True):
    """
    Payment - Money received against an invoice

    Domain Rules:
    - amount_paid must be > 0
    - remaining_balance = invoice_total_amount - amount_paid - discount_applied
      (may be negative on overpayment)
    - status is completed when remaining_balance <= 0, otherwise partially_paid
    - Payments never change once recorded
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_number', 'number', unique=True),
        Index('ix_payments_invoice_reference', 'invoice_reference'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique payment identifier (auto-increment)"
    )

    number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Payment number (e.g., PAY-2024-000001)"
    )

    receipt_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Receipt number (e.g., RCPT-2024-000001)"
    )

    invoice_reference: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Number of the invoice being paid"
    )

    customer: Optional[str] = Field(default=None)

    invoice_total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Invoice total billed at the time of payment"
    )

    amount_paid: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Amount received"
    )

    discount_applied: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Discount granted with this payment"
    )

    tax_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Tax/VAT portion of the payment"
    )

    remaining_balance: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Balance left after this payment"
    )

    currency: str = Field(
        default="TZS",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    status: PaymentStatus = Field(
        description="Payment status"
    )

    payment_method: PaymentMethod = Field(
        default=PaymentMethod.CASH,
        description="How the money was received"
    )

    payment_channel: Optional[str] = Field(default=None)
    transaction_ref: Optional[str] = Field(default=None)
    cheque_number: Optional[str] = Field(default=None)
    bank_name: Optional[str] = Field(default=None)
    sender_number: Optional[str] = Field(default=None)
    receiver_till_number: Optional[str] = Field(default=None)

    collected_by: Optional[str] = Field(default=None)
    branch_location: Optional[str] = Field(default=None)
    work_order_id: Optional[str] = Field(default=None)
    estimate_id: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    paid_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="When the payment was received"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Payment record creation timestamp"
    )
