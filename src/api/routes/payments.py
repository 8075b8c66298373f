"""Payment API Routes

FastAPI routes for recording payments against invoices and previewing the
remaining balance while a payment is entered.
"""

from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.app.use_cases.billing.dtos import (
    BalanceSnapshotDTO,
    ListPaymentsResponseDTO,
    PaymentMethodRuleDTO,
    PaymentPreviewCommandDTO,
    PaymentTargetDTO,
    RecordPaymentCommandDTO,
    RecordPaymentResponseDTO,
)
from src.app.use_cases.billing.lookup_payment_target import LookupPaymentTarget
from src.app.use_cases.billing.preview_payment import PreviewPayment
from src.app.use_cases.billing.record_payment import RecordPayment
from src.app.use_cases.billing.list_payments import ListPayments
from src.app.use_cases.billing.payment_methods import GetPaymentMethods
from src.adapter.repositories.document_repository import SqlAlchemyDocumentRepository
from src.adapter.repositories.line_item_repository import SqlAlchemyLineItemRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/billing/payments", tags=["Payments"])

INVOICE_NOT_FOUND_RESPONSE = {
    "description": "Invoice not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVOICE_NOT_FOUND",
                    "message": "Invoice INV-2024-000099 not found"
                }
            }
        }
    }
}


@router.get(
    "/methods",
    response_model=List[PaymentMethodRuleDTO],
    status_code=status.HTTP_200_OK,
)
async def get_payment_methods():
    """
    Channels and method-specific fields of every payment method.
    """
    result = await GetPaymentMethods().execute()
    return result.value


@router.get(
    "/targets/{reference}",
    response_model=PaymentTargetDTO,
    status_code=status.HTTP_200_OK,
    responses={404: INVOICE_NOT_FOUND_RESPONSE},
)
async def lookup_payment_target(reference: str, session: AsyncSession = Depends(get_session)):
    """
    Look up the invoice a payment will be recorded against.

    **Returns:**
    - 200: Invoice total, current balance and currency
    - 404: Reference does not resolve to an invoice
    """
    use_case = LookupPaymentTarget(SqlAlchemyDocumentRepository(session), SqlAlchemyLineItemRepository(session))
    result = await use_case.execute(reference)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)

    return result.value


@router.post(
    "/preview",
    response_model=BalanceSnapshotDTO,
    status_code=status.HTTP_200_OK,
)
async def preview_payment(
    request: PaymentPreviewCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Remaining balance for a payment being entered.

    An unknown invoice reference returns zeroed figures with
    `target_found: false` instead of an error.

    **Example request:**
    ```json
    {
      "invoice_reference": "INV-2024-000002",
      "amount_paid": "300.00",
      "discount_applied": "20.00"
    }
    ```
    """
    use_case = PreviewPayment(
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyLineItemRepository(session),
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
    )
    result = await use_case.execute(request)
    return result.value


@router.post(
    "",
    response_model=RecordPaymentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "Payment amount must be greater than zero.",
                            "details": {"amount_paid": "Payment amount must be greater than zero."}
                        }
                    }
                }
            }
        },
        404: INVOICE_NOT_FOUND_RESPONSE,
    }
)
async def record_payment(
    request: RecordPaymentCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Record a payment against an invoice.

    **Returns:**
    - 201: Payment recorded; includes the invoice status and balance after it
    - 400: Non-positive amount, channel or required field missing for the
      payment method, or the invoice is cancelled
    - 404: Invoice not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = RecordPayment(
        uow,
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyLineItemRepository(session),
        SqlAlchemyPaymentRepository(session),
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
        receiver_till_number=ApplicationConfig.RECEIVER_TILL_NUMBER,
    )
    result = await use_case.execute(request)

    if result.is_err():
        if result.error.code == "INVOICE_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        if result.error.code == "RECORD_PAYMENT_FAILED":
            raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        raise ClientError(result.error)

    return result.value


@router.get(
    "",
    response_model=ListPaymentsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_payments(
    invoice_reference: str = Query(..., min_length=1),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session)
):
    """
    Payments recorded against an invoice, newest first.
    """
    use_case = ListPayments(SqlAlchemyPaymentRepository(session))
    result = await use_case.execute(invoice_reference, limit=limit, offset=offset)
    return result.value
