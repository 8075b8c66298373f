"""
Draft Document Use Case

Builds a new, unsaved estimate or invoice pre-filled with defaults.
"""
from datetime import date
from decimal import Decimal
from libs.result import Result, Return
from src.domain.document import DocumentKind, INITIAL_STATUS
from src.domain.pricing import ZERO, calculate_totals, round2
from .dtos import DocumentDraftDTO, LineItemDTO
from .mappers import to_totals_dto


class DraftDocument:
    """
    Use case: Start a new estimate or invoice

    A new document has no discount, other charges or payment, the default
    tax rate, and one service line at the default labor rate.
    """

    def __init__(
        self,
        default_currency: str = "TZS",
        default_tax_percent: Decimal = Decimal("18"),
        default_labor_rate: Decimal = Decimal("50.00"),
        estimate_terms: str = "Quote valid for 30 days.",
        invoice_terms: str = "Payment due within 7 days.",
    ):
        self.default_currency = default_currency
        self.default_tax_percent = Decimal(str(default_tax_percent))
        self.default_labor_rate = round2(default_labor_rate)
        self.terms = {
            DocumentKind.ESTIMATE: estimate_terms,
            DocumentKind.INVOICE: invoice_terms,
        }

    async def execute(self, kind: DocumentKind) -> Result[DocumentDraftDTO]:
        kind = DocumentKind(kind)
        items = [LineItemDTO(labor_rate=self.default_labor_rate)]
        totals = calculate_totals(items, ZERO, self.default_tax_percent, kind=kind)

        return Return.ok(
            DocumentDraftDTO(
                kind=kind.value,
                status=INITIAL_STATUS[kind],
                currency=self.default_currency,
                issue_date=date.today(),
                discount_percent=ZERO,
                tax_percent=self.default_tax_percent,
                other_charges=ZERO,
                amount_paid=ZERO,
                terms=self.terms[kind],
                items=items,
                totals=to_totals_dto(kind, totals),
            )
        )
