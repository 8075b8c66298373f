"""LookupPaymentTarget Use Case

Resolves an invoice reference to the figures a payment is recorded against.
"""

from typing import List, Optional, Tuple
from libs.result import Result, Return
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.document import Document, DocumentKind
from src.domain.line_item import LineItem
from src.domain.reconciliation import PaymentTarget
from src.domain.pricing import document_totals
from .dtos import PaymentTargetDTO
from .errors import invoice_not_found


async def resolve_payment_target(
    document_repo: DocumentRepository,
    line_item_repo: LineItemRepository,
    reference: Optional[str],
) -> Optional[Tuple[Document, List[LineItem], PaymentTarget]]:
    """
    Find the invoice behind a reference

    Returns None when the reference is blank, unknown, or names an estimate.
    """
    reference = (reference or "").strip()
    if not reference:
        return None

    document = await document_repo.get_by_number(reference)
    if not document or DocumentKind(document.kind) != DocumentKind.INVOICE:
        return None

    items = await line_item_repo.get_by_document_id(document.id)
    totals = document_totals(document, items)
    target = PaymentTarget(
        reference=document.number,
        customer=document.customer_name,
        total=totals.grand_total,
        current_balance=totals.balance_due,
        currency=document.currency,
        status=document.status,
    )
    return document, items, target


class LookupPaymentTarget:
    """Use case: Invoice lookup on the payment screen"""

    def __init__(self, document_repo: DocumentRepository, line_item_repo: LineItemRepository):
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo

    async def execute(self, reference: str) -> Result[PaymentTargetDTO]:
        """
        Args:
            reference: Invoice number

        Returns:
            Result[PaymentTargetDTO]: Invoice total, balance and currency, or
            INVOICE_NOT_FOUND
        """
        resolved = await resolve_payment_target(self.document_repo, self.line_item_repo, reference)
        if resolved is None:
            return Return.err(invoice_not_found(reference))

        _, _, target = resolved
        return Return.ok(
            PaymentTargetDTO(
                invoice_number=target.reference,
                customer=target.customer,
                total=target.total,
                current_balance=target.current_balance,
                currency=target.currency,
                status=target.status,
            )
        )
