"""
Calculate Document Totals Use Case

Derives the full totals breakdown of an estimate or invoice being edited,
without reading or writing anything.
"""
from libs.result import Result, Return
from src.domain.document import DocumentKind
from src.domain.pricing import calculate_totals
from .dtos import DocumentTotalsDTO, PricingInputDTO
from .mappers import to_totals_dto


class CalculateDocumentTotals:
    """
    Use case: Live totals for a document being edited

    Called on every edit of a line item or adjustment field so the screen can
    show every derived figure without doing arithmetic itself. Estimates never
    carry other charges, an amount paid or a balance due.
    """

    async def execute(self, command: PricingInputDTO) -> Result[DocumentTotalsDTO]:
        """
        Calculate totals for the given line items and adjustments.

        Args:
            command: Estimate or invoice pricing inputs

        Returns:
            Result[DocumentTotalsDTO]: Totals breakdown
        """
        kind = DocumentKind(command.kind)
        totals = calculate_totals(
            command.items,
            discount_percent=command.discount_percent,
            tax_percent=command.tax_percent,
            other_charges=getattr(command, "other_charges", 0),
            amount_paid=getattr(command, "amount_paid", 0),
            kind=kind,
        )
        return Return.ok(to_totals_dto(kind, totals))
