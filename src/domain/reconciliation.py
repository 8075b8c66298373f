"""Payment reconciliation

Matches a payment against the outstanding balance of an invoice to derive
the remaining balance and the payment status, and holds the static table of
payment methods with their channels and required fields.

The tracker never touches the invoice itself; moving the invoice to paid or
partially paid is up to the caller.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple
from libs.result import Result, Return, Error
from src.domain.payment import PaymentMethod, PaymentStatus
from src.domain.pricing import ZERO, money_context, round2, to_amount

MOBILE_MONEY_CHANNELS = ("M-Pesa", "Airtel Money", "Tigo Pesa")
BANK_CHANNELS = ("CRDB Bank", "NMB Bank", "Equity Bank", "Standard Chartered")
CARD_CHANNELS = ("POS Terminal", "Online Gateway")


@dataclass(frozen=True)
class MethodRule:
    """Channels and extra fields that apply to one payment method"""
    label: str
    channels: Tuple[str, ...] = ()
    required_fields: Tuple[str, ...] = ()
    optional_fields: Tuple[str, ...] = ()

    @property
    def requires_channel(self) -> bool:
        return bool(self.channels)


PAYMENT_METHOD_RULES: Dict[PaymentMethod, MethodRule] = {
    PaymentMethod.CASH: MethodRule(label="Cash"),
    PaymentMethod.BANK_TRANSFER: MethodRule(
        label="Bank Transfer",
        channels=BANK_CHANNELS,
        optional_fields=("bank_name", "sender_number"),
    ),
    PaymentMethod.MOBILE_MONEY: MethodRule(
        label="Mobile Money",
        channels=MOBILE_MONEY_CHANNELS,
        optional_fields=("sender_number",),
    ),
    PaymentMethod.CREDIT_CARD: MethodRule(
        label="Credit Card",
        channels=CARD_CHANNELS,
    ),
    PaymentMethod.CHEQUE: MethodRule(
        label="Cheque",
        required_fields=("cheque_number",),
    ),
    PaymentMethod.OTHER: MethodRule(label="Other"),
}

FIELD_LABELS = {
    "cheque_number": "Cheque Number",
    "bank_name": "Bank Name",
    "sender_number": "Sender Mobile/Account No.",
}


def validate_payment_method(
    method: PaymentMethod,
    channel: Optional[str] = None,
    fields: Optional[Mapping[str, Any]] = None,
) -> Dict[str, str]:
    """
    Check the channel and method-specific fields of a payment

    Returns:
        Mapping of field name to user-facing message (empty when valid)
    """
    rule = PAYMENT_METHOD_RULES[PaymentMethod(method)]
    fields = fields or {}
    errors: Dict[str, str] = {}

    channel = (channel or "").strip()
    if rule.requires_channel:
        if not channel:
            errors["payment_channel"] = f"A payment channel is required for {rule.label} payments."
        elif channel not in rule.channels:
            errors["payment_channel"] = (
                f"'{channel}' is not a {rule.label} channel. "
                f"Allowed: {', '.join(rule.channels)}"
            )
    elif channel:
        errors["payment_channel"] = f"{rule.label} payments do not use a payment channel."

    for name in rule.required_fields:
        value = fields.get(name)
        if value is None or not str(value).strip():
            errors[name] = f"{FIELD_LABELS.get(name, name)} is required for {rule.label} payments."

    return errors


def compute_remaining_balance(outstanding: Any, amount_paid: Any, discount_applied: Any = 0) -> Decimal:
    """outstanding - amount_paid - discount_applied, rounded; negative means overpaid"""
    with money_context():
        return round2(to_amount(outstanding) - to_amount(amount_paid) - to_amount(discount_applied))


def derive_payment_status(remaining_balance: Any) -> PaymentStatus:
    if to_amount(remaining_balance) <= ZERO:
        return PaymentStatus.COMPLETED
    return PaymentStatus.PARTIALLY_PAID


@dataclass(frozen=True)
class PaymentTarget:
    """The invoice a payment is recorded against"""
    reference: str
    customer: Optional[str]
    total: Decimal
    current_balance: Decimal
    currency: str
    status: str


@dataclass(frozen=True)
class BalanceSnapshot:
    """Everything the payment screen shows, derived from the tracker's inputs"""
    reference: Optional[str]
    target_found: bool
    customer: Optional[str]
    invoice_total: Decimal
    outstanding_balance: Decimal
    amount_paid: Decimal
    discount_applied: Decimal
    tax_amount: Decimal
    remaining_balance: Decimal
    currency: str
    projected_status: PaymentStatus


class PaymentReconciliationTracker:
    """
    Single editable payment against one invoice

    The remaining balance is measured from what the invoice still owes, so a
    follow-up payment that settles it completes. Every setter takes raw user
    input (coerced to 0 when unparseable) and the remaining balance is
    recomputed from the current inputs on each read.

    Usage:
        tracker = PaymentReconciliationTracker(default_currency="TZS")
        tracker.apply_target(target)          # None when lookup failed
        tracker.update(amount_paid="300", discount_applied="20")
        tracker.remaining_balance             # Decimal
        result = tracker.finalize()           # Result[PaymentStatus]
    """

    def __init__(self, default_currency: str = "TZS"):
        self.default_currency = default_currency
        self.target: Optional[PaymentTarget] = None
        self.customer: Optional[str] = None
        self.invoice_total = ZERO
        self.outstanding_balance = ZERO
        self.amount_paid = ZERO
        self.discount_applied = ZERO
        self.tax_amount = ZERO
        self.currency = default_currency

    def apply_target(self, target: Optional[PaymentTarget]) -> None:
        """
        Load the looked-up invoice, or clear everything that depended on it

        A successful lookup pre-fills the billed total, the outstanding balance
        and the currency, and suggests paying the whole outstanding balance.
        A failed lookup (``None``) zeroes the amounts and restores the default
        currency, so no figures from a previous invoice survive.
        """
        self.target = target
        if target is None:
            self.customer = None
            self.invoice_total = ZERO
            self.outstanding_balance = ZERO
            self.amount_paid = ZERO
            self.currency = self.default_currency
            return

        self.customer = target.customer
        self.invoice_total = round2(target.total)
        self.outstanding_balance = round2(target.current_balance)
        self.amount_paid = self.outstanding_balance
        self.currency = target.currency

    def update(
        self,
        amount_paid: Any = None,
        discount_applied: Any = None,
        tax_amount: Any = None,
    ) -> None:
        """Set payment inputs; arguments left as None keep their current value"""
        if amount_paid is not None:
            self.amount_paid = round2(amount_paid)
        if discount_applied is not None:
            self.discount_applied = round2(discount_applied)
        if tax_amount is not None:
            self.tax_amount = round2(tax_amount)

    @property
    def remaining_balance(self) -> Decimal:
        return compute_remaining_balance(self.outstanding_balance, self.amount_paid, self.discount_applied)

    def snapshot(self) -> BalanceSnapshot:
        remaining = self.remaining_balance
        return BalanceSnapshot(
            reference=self.target.reference if self.target else None,
            target_found=self.target is not None,
            customer=self.customer,
            invoice_total=self.invoice_total,
            outstanding_balance=self.outstanding_balance,
            amount_paid=self.amount_paid,
            discount_applied=self.discount_applied,
            tax_amount=self.tax_amount,
            remaining_balance=remaining,
            currency=self.currency,
            projected_status=derive_payment_status(remaining),
        )

    def finalize(self) -> Result[PaymentStatus]:
        """
        Derive the status of the payment being recorded

        Returns:
            Result[PaymentStatus]: completed or partially_paid, or a
            VALIDATION_ERROR when the amount paid is not positive
        """
        if self.amount_paid <= ZERO:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Payment amount must be greater than zero.",
                    details={"amount_paid": "Payment amount must be greater than zero."},
                )
            )
        return Return.ok(derive_payment_status(self.remaining_balance))
