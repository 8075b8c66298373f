"""Document pricing

Derives every monetary total of an estimate or invoice from its line items
and adjustment fields. The step order is fixed:

    line subtotals -> subtotal -> discount -> tax -> other charges
    -> grand total -> balance due

Tax is charged on the discounted amount. Each named step is rounded to two
places (half-up) before the next step uses it.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext
from typing import Any, Iterable, Mapping, Optional, Tuple
from src.domain.document import DocumentKind

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")
# Larger inputs are not amounts; keeps every derived product inside the exponent range
MAX_EXPONENT = 100
# Enough digits for exact cents on any product of coerced inputs
WORKING_PRECISION = 1000


def to_amount(value: Any) -> Decimal:
    """
    Coerce a user-entered number to Decimal

    Missing, blank, non-numeric, NaN and infinite values all become 0, as
    do magnitudes beyond 10**MAX_EXPONENT; this never raises.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not amount.is_finite() or amount.adjusted() > MAX_EXPONENT:
        return ZERO
    return amount


def round2(value: Any) -> Decimal:
    """Round half-up to cents; intermediate results of any size are kept, raw input is coerced first"""
    amount = value if isinstance(value, Decimal) and value.is_finite() else to_amount(value)
    with localcontext() as ctx:
        # quantize fails unless every integer digit plus the cents fit in the precision
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def money_context():
    """Decimal context in which sums and products of amounts are not rounded"""
    ctx = getcontext().copy()
    ctx.prec = WORKING_PRECISION
    return localcontext(ctx)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def line_subtotal(quantity: Any, unit_cost: Any, labor_hours: Any, labor_rate: Any) -> Decimal:
    """quantity * unit_cost + labor_hours * labor_rate, rounded to 2 places"""
    with money_context():
        part_cost = to_amount(quantity) * to_amount(unit_cost)
        labor_cost = to_amount(labor_hours) * to_amount(labor_rate)
        return round2(part_cost + labor_cost)


def item_subtotal(item: Any) -> Decimal:
    """Line subtotal of an entity, DTO or plain mapping"""
    return line_subtotal(
        _field(item, "quantity"),
        _field(item, "unit_cost"),
        _field(item, "labor_hours"),
        _field(item, "labor_rate"),
    )


@dataclass(frozen=True)
class DocumentTotals:
    """Complete derived breakdown of a document"""
    line_subtotals: Tuple[Decimal, ...]
    subtotal_items: Decimal
    discount_amount: Decimal
    total_before_tax: Decimal
    tax_amount: Decimal
    other_charges: Decimal
    grand_total: Decimal
    amount_paid: Decimal
    balance_due: Optional[Decimal]


def calculate_totals(
    items: Iterable[Any],
    discount_percent: Any = 0,
    tax_percent: Any = 0,
    other_charges: Any = 0,
    amount_paid: Any = 0,
    kind: DocumentKind = DocumentKind.INVOICE,
) -> DocumentTotals:
    """
    Compute the totals of a document

    Percentages are not range-checked here; out-of-range values are computed
    as given. For estimates other charges and amount paid are treated as 0
    and there is no balance due.

    Args:
        items: Line items (entities, DTOs or mappings with quantity, unit_cost,
            labor_hours, labor_rate)
        discount_percent: Discount in percent of the items subtotal
        tax_percent: Tax in percent of the discounted subtotal
        other_charges: Flat charges added after tax (invoice only)
        amount_paid: Amount already paid (invoice only)
        kind: Estimate or invoice

    Returns:
        DocumentTotals
    """
    is_invoice = kind == DocumentKind.INVOICE
    with money_context():
        charges = round2(other_charges) if is_invoice else ZERO
        paid = round2(amount_paid) if is_invoice else ZERO

        line_subtotals = tuple(item_subtotal(item) for item in items)
        subtotal_items = round2(sum(line_subtotals, ZERO))

        discount_amount = round2(subtotal_items * to_amount(discount_percent) / HUNDRED)
        total_before_tax = round2(subtotal_items - discount_amount)

        tax_amount = round2(total_before_tax * to_amount(tax_percent) / HUNDRED)
        grand_total = round2(total_before_tax + tax_amount + charges)

        balance_due = round2(grand_total - paid) if is_invoice else None

    return DocumentTotals(
        line_subtotals=line_subtotals,
        subtotal_items=subtotal_items,
        discount_amount=discount_amount,
        total_before_tax=total_before_tax,
        tax_amount=tax_amount,
        other_charges=charges,
        grand_total=grand_total,
        amount_paid=paid,
        balance_due=balance_due,
    )


def document_totals(document: Any, items: Iterable[Any]) -> DocumentTotals:
    """Totals of a stored document and its line items"""
    return calculate_totals(
        items,
        discount_percent=document.discount_percent,
        tax_percent=document.tax_percent,
        other_charges=document.other_charges,
        amount_paid=document.amount_paid,
        kind=DocumentKind(document.kind),
    )
