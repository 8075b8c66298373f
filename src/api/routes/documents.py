"""Document API Routes

FastAPI routes for estimates and invoices: live totals, create, read, edit,
conversion and printable PDF.
"""

import base64
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.app.use_cases.billing.dtos import (
    CreateDocumentCommandDTO,
    DocumentDraftDTO,
    DocumentPdfResponseDTO,
    DocumentResponseDTO,
    DocumentTotalsDTO,
    PricingCommandDTO,
    UpdateDocumentCommandDTO,
)
from src.app.use_cases.billing.calculate_totals import CalculateDocumentTotals
from src.app.use_cases.billing.draft_document import DraftDocument
from src.app.use_cases.billing.create_document import CreateDocument
from src.app.use_cases.billing.get_document import GetDocument
from src.app.use_cases.billing.update_document import UpdateDocument
from src.app.use_cases.billing.convert_estimate import ConvertEstimateToInvoice
from src.app.use_cases.billing.generate_document_pdf import GenerateDocumentPdf
from src.adapter.repositories.document_repository import SqlAlchemyDocumentRepository
from src.adapter.repositories.line_item_repository import SqlAlchemyLineItemRepository
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.document import DocumentKind
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/billing/documents", tags=["Documents"])

NOT_FOUND_CODES = ("DOCUMENT_NOT_FOUND", "INVOICE_NOT_FOUND")

NOT_FOUND_RESPONSE = {
    "description": "Document not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "DOCUMENT_NOT_FOUND",
                    "message": "Document QUO-2024-000001 not found"
                }
            }
        }
    }
}

VALIDATION_RESPONSE = {
    "description": "Validation error",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "At least one line item is required.",
                    "details": {"items": "At least one line item is required."}
                }
            }
        }
    }
}


def _raise_for(error):
    if error.code in NOT_FOUND_CODES:
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code.endswith("_FAILED"):
        raise ClientError(error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise ClientError(error)


@router.get(
    "/new",
    response_model=DocumentDraftDTO,
    status_code=status.HTTP_200_OK,
)
async def draft_document(kind: DocumentKind = Query(DocumentKind.ESTIMATE)):
    """
    Defaults for a new estimate or invoice.

    One service line at the default labor rate, the default tax rate, no
    discount, and the configured terms.
    """
    use_case = DraftDocument(
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
        default_tax_percent=ApplicationConfig.DEFAULT_TAX_PERCENT,
        default_labor_rate=ApplicationConfig.DEFAULT_LABOR_RATE,
        estimate_terms=ApplicationConfig.ESTIMATE_TERMS,
        invoice_terms=ApplicationConfig.INVOICE_TERMS,
    )
    result = await use_case.execute(kind)
    return result.value


@router.post(
    "/totals",
    response_model=DocumentTotalsDTO,
    status_code=status.HTTP_200_OK,
    responses={400: VALIDATION_RESPONSE},
)
async def calculate_totals(request: PricingCommandDTO):
    """
    Live totals for a document being edited.

    Call on every change of a line item or adjustment field. Numbers that
    cannot be parsed count as 0.

    **Example request:**
    ```json
    {
      "kind": "invoice",
      "items": [{"description": "Brake job", "quantity": "1", "unit_cost": "100.00"}],
      "discount_percent": "10",
      "tax_percent": "10",
      "amount_paid": "50.00"
    }
    ```

    **Returns:**
    - 200: Totals breakdown (grand_total 99.00, balance_due 49.00 above)
    """
    use_case = CalculateDocumentTotals()
    result = await use_case.execute(request.root)
    return result.value


@router.post(
    "",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={400: VALIDATION_RESPONSE},
)
async def create_document(
    request: CreateDocumentCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Create an estimate or invoice.

    **Returns:**
    - 201: Document created, with its number and totals
    - 400: Missing line items, descriptions or customer name, or an invalid
      status for the kind
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = CreateDocument(
        uow,
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyLineItemRepository(session),
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
        supported_currencies=ApplicationConfig.SUPPORTED_CURRENCIES,
        terms={
            DocumentKind.ESTIMATE: ApplicationConfig.ESTIMATE_TERMS,
            DocumentKind.INVOICE: ApplicationConfig.INVOICE_TERMS,
        },
    )
    result = await use_case.execute(request.root)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "/{number}",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_document(number: str, session: AsyncSession = Depends(get_session)):
    """
    Retrieve an estimate or invoice. Totals are recomputed from its line items.
    """
    use_case = GetDocument(SqlAlchemyDocumentRepository(session), SqlAlchemyLineItemRepository(session))
    result = await use_case.execute(number)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.put(
    "/{number}",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={400: VALIDATION_RESPONSE, 404: NOT_FOUND_RESPONSE},
)
async def update_document(
    number: str,
    request: UpdateDocumentCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Edit an estimate or invoice.

    Omitted fields keep their value; a given `items` list replaces all line
    items. Converted estimates and cancelled invoices cannot be edited.
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = UpdateDocument(
        uow,
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyLineItemRepository(session),
        supported_currencies=ApplicationConfig.SUPPORTED_CURRENCIES,
    )
    result = await use_case.execute(number, request)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.post(
    "/{number}/convert",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={404: NOT_FOUND_RESPONSE},
)
async def convert_estimate(number: str, session: AsyncSession = Depends(get_session)):
    """
    Convert an estimate into an unpaid invoice.

    **Returns:**
    - 201: The new invoice, referencing the estimate number
    - 400: Not an estimate, or the estimate is rejected or already converted
    - 404: Estimate not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = ConvertEstimateToInvoice(
        uow,
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyLineItemRepository(session),
        invoice_terms=ApplicationConfig.INVOICE_TERMS,
    )
    result = await use_case.execute(number)

    if result.is_err():
        _raise_for(result.error)

    return result.value


async def _generate_pdf(number: str, session: AsyncSession) -> DocumentPdfResponseDTO:
    use_case = GenerateDocumentPdf(
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyLineItemRepository(session),
        ReportLabPdfService(),
        company_name=ApplicationConfig.COMPANY_NAME,
        company_address=ApplicationConfig.COMPANY_ADDRESS,
    )
    result = await use_case.execute(number)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "/{number}/pdf",
    response_model=DocumentPdfResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_document_pdf(number: str, session: AsyncSession = Depends(get_session)):
    """
    Printable estimate or invoice as base64-encoded PDF.
    """
    return await _generate_pdf(number, session)


@router.get(
    "/{number}/pdf/download",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: NOT_FOUND_RESPONSE,
    }
)
async def download_document_pdf(number: str, session: AsyncSession = Depends(get_session)):
    """
    Download an estimate or invoice as PDF file.
    """
    pdf = await _generate_pdf(number, session)

    return Response(
        content=base64.b64decode(pdf.pdf_base64),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={pdf.kind}_{pdf.number}.pdf"
        }
    )
