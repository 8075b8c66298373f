"""PreviewPayment Use Case

Live balance for a payment being entered, before it is recorded.
"""

from libs.result import Result, Return
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.reconciliation import BalanceSnapshot, PaymentReconciliationTracker
from .dtos import BalanceSnapshotDTO, PaymentPreviewCommandDTO
from .lookup_payment_target import resolve_payment_target


def to_snapshot_dto(reference: str, snapshot: BalanceSnapshot) -> BalanceSnapshotDTO:
    return BalanceSnapshotDTO(
        invoice_reference=snapshot.reference or reference,
        target_found=snapshot.target_found,
        customer=snapshot.customer,
        invoice_total=snapshot.invoice_total,
        outstanding_balance=snapshot.outstanding_balance,
        amount_paid=snapshot.amount_paid,
        discount_applied=snapshot.discount_applied,
        tax_amount=snapshot.tax_amount,
        remaining_balance=snapshot.remaining_balance,
        currency=snapshot.currency,
        projected_status=snapshot.projected_status.value,
    )


class PreviewPayment:
    """
    Use case: Remaining balance while a payment is being typed in

    Never fails. An unknown reference yields a zeroed snapshot in the default
    currency with target_found=False. When no amount is given, the invoice's
    current balance is suggested as the amount to pay.
    """

    def __init__(
        self,
        document_repo: DocumentRepository,
        line_item_repo: LineItemRepository,
        default_currency: str = "TZS",
    ):
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.default_currency = default_currency

    async def execute(self, command: PaymentPreviewCommandDTO) -> Result[BalanceSnapshotDTO]:
        resolved = await resolve_payment_target(
            self.document_repo, self.line_item_repo, command.invoice_reference
        )

        tracker = PaymentReconciliationTracker(default_currency=self.default_currency)
        tracker.apply_target(resolved[2] if resolved else None)
        tracker.update(
            amount_paid=command.amount_paid,
            discount_applied=command.discount_applied,
            tax_amount=command.tax_amount,
        )

        return Return.ok(to_snapshot_dto(command.invoice_reference, tracker.snapshot()))
