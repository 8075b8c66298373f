"""RecordPayment Use Case

Records money received against an invoice and updates the invoice balance.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.base import utc_now
from src.domain.document import InvoiceStatus
from src.domain.payment import (
    Payment,
    PAYMENT_NUMBER_PREFIX,
    RECEIPT_NUMBER_PREFIX,
)
from src.domain.pricing import ZERO, document_totals, money_context, round2
from src.domain.reconciliation import PaymentReconciliationTracker, validate_payment_method
from .dtos import RecordPaymentCommandDTO, RecordPaymentResponseDTO
from .errors import invoice_not_found, validation_error
from .lookup_payment_target import resolve_payment_target
from .mappers import to_payment_response

logger = logging.getLogger(__name__)


class RecordPayment:
    """
    Use Case: Record a payment against an invoice

    Business Rules:
    1. Reference must resolve to an invoice that is not cancelled
    2. Amount paid must be > 0
    3. Payment channel and method-specific fields must fit the payment method
    4. remaining_balance = invoice total - amount paid - discount applied
    5. Payment status is completed when remaining_balance <= 0, otherwise
       partially_paid
    6. The invoice is credited with amount paid plus discount applied and
       becomes paid or partially_paid accordingly

    Flow:
    1. Resolve invoice
    2. Load tracker and validate
    3. Generate payment and receipt numbers
    4. Create payment
    5. Credit invoice
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_item_repo: LineItemRepository,
        payment_repo: PaymentRepository,
        default_currency: str = "TZS",
        receiver_till_number: Optional[str] = None,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.payment_repo = payment_repo
        self.default_currency = default_currency
        self.receiver_till_number = receiver_till_number

    async def execute(self, command: RecordPaymentCommandDTO) -> Result[RecordPaymentResponseDTO]:
        """
        Execute payment recording

        Args:
            command: Payment details

        Returns:
            Result[RecordPaymentResponseDTO]: Success with payment and
            invoice state, or error
        """
        reference = command.invoice_reference.strip()

        try:
            # Step 1: Resolve invoice
            resolved = await resolve_payment_target(self.document_repo, self.line_item_repo, reference)
            if resolved is None:
                return Return.err(invoice_not_found(reference))

            invoice, items, target = resolved
            if invoice.status == InvoiceStatus.CANCELLED.value:
                return Return.err(
                    Error(
                        code="INVALID_DOCUMENT_STATUS",
                        message=f"Invoice {reference} is cancelled",
                        reason="Payments cannot be recorded against a cancelled invoice",
                    )
                )

            # Step 2: Load tracker and validate
            tracker = PaymentReconciliationTracker(default_currency=self.default_currency)
            tracker.apply_target(target)
            tracker.update(
                amount_paid=command.amount_paid,
                discount_applied=command.discount_applied,
                tax_amount=command.tax_amount,
            )

            errors = validate_payment_method(
                command.payment_method,
                channel=command.payment_channel,
                fields=command.model_dump(),
            )
            status_result = tracker.finalize()
            if status_result.is_err():
                errors = {**status_result.error.details, **errors}
            if errors:
                return Return.err(validation_error(errors))

            # Step 3: Generate numbers
            number = await self.payment_repo.generate_number(PAYMENT_NUMBER_PREFIX)
            receipt_number = await self.payment_repo.generate_number(RECEIPT_NUMBER_PREFIX)

            # Step 4: Create payment
            payment = Payment(
                number=number,
                receipt_number=receipt_number,
                invoice_reference=invoice.number,
                customer=tracker.customer,
                invoice_total_amount=tracker.invoice_total,
                amount_paid=tracker.amount_paid,
                discount_applied=tracker.discount_applied,
                tax_amount=tracker.tax_amount,
                remaining_balance=tracker.remaining_balance,
                currency=(command.currency or tracker.currency).upper(),
                status=status_result.value,
                payment_method=command.payment_method,
                payment_channel=(command.payment_channel or "").strip() or None,
                transaction_ref=command.transaction_ref,
                cheque_number=command.cheque_number,
                bank_name=command.bank_name,
                sender_number=command.sender_number,
                receiver_till_number=command.receiver_till_number or self.receiver_till_number,
                collected_by=command.collected_by,
                branch_location=command.branch_location,
                work_order_id=command.work_order_id,
                estimate_id=command.estimate_id,
                notes=command.notes,
                paid_at=command.paid_at or utc_now(),
            )
            created = await self.payment_repo.create(payment)

            # Step 5: Credit invoice
            with money_context():
                invoice.amount_paid = round2(invoice.amount_paid + tracker.amount_paid + tracker.discount_applied)
            balance_due = document_totals(invoice, items).balance_due
            invoice.status = (
                InvoiceStatus.PAID.value if balance_due <= ZERO else InvoiceStatus.PARTIALLY_PAID.value
            )
            await self.document_repo.update(invoice)

            # Step 6: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Recorded payment {created.number} of {created.amount_paid} {created.currency} "
                f"against {invoice.number}: status={created.status.value}, "
                f"invoice balance_due={balance_due}"
            )

            return Return.ok(
                RecordPaymentResponseDTO(
                    payment=to_payment_response(created),
                    invoice_status=invoice.status,
                    invoice_balance_due=balance_due,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to record payment against {reference}: {e}")
            return Return.err(
                Error(
                    code="RECORD_PAYMENT_FAILED",
                    message=f"Failed to record payment against {reference}",
                    reason=str(e),
                )
            )
