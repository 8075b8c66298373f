"""Billing domain use cases"""
from .calculate_totals import CalculateDocumentTotals
from .draft_document import DraftDocument
from .create_document import CreateDocument
from .get_document import GetDocument
from .update_document import UpdateDocument
from .convert_estimate import ConvertEstimateToInvoice
from .generate_document_pdf import GenerateDocumentPdf
from .lookup_payment_target import LookupPaymentTarget
from .preview_payment import PreviewPayment
from .record_payment import RecordPayment
from .list_payments import ListPayments
from .payment_methods import GetPaymentMethods
from .validate_client import ValidateClientIdentity
from .dtos import (
    LineItemDTO,
    PricingCommandDTO,
    EstimatePricingDTO,
    InvoicePricingDTO,
    CreateDocumentCommandDTO,
    CreateEstimateCommandDTO,
    CreateInvoiceCommandDTO,
    UpdateDocumentCommandDTO,
    DocumentTotalsDTO,
    DocumentResponseDTO,
    DocumentDraftDTO,
    DocumentPdfResponseDTO,
    PaymentTargetDTO,
    PaymentPreviewCommandDTO,
    BalanceSnapshotDTO,
    RecordPaymentCommandDTO,
    RecordPaymentResponseDTO,
    PaymentResponseDTO,
    ListPaymentsResponseDTO,
    PaymentMethodRuleDTO,
    ClientIdentityCommandDTO,
    ClientIdentityResponseDTO,
)

__all__ = [
    "CalculateDocumentTotals",
    "DraftDocument",
    "CreateDocument",
    "GetDocument",
    "UpdateDocument",
    "ConvertEstimateToInvoice",
    "GenerateDocumentPdf",
    "LookupPaymentTarget",
    "PreviewPayment",
    "RecordPayment",
    "ListPayments",
    "GetPaymentMethods",
    "ValidateClientIdentity",
    "LineItemDTO",
    "PricingCommandDTO",
    "EstimatePricingDTO",
    "InvoicePricingDTO",
    "CreateDocumentCommandDTO",
    "CreateEstimateCommandDTO",
    "CreateInvoiceCommandDTO",
    "UpdateDocumentCommandDTO",
    "DocumentTotalsDTO",
    "DocumentResponseDTO",
    "DocumentDraftDTO",
    "DocumentPdfResponseDTO",
    "PaymentTargetDTO",
    "PaymentPreviewCommandDTO",
    "BalanceSnapshotDTO",
    "RecordPaymentCommandDTO",
    "RecordPaymentResponseDTO",
    "PaymentResponseDTO",
    "ListPaymentsResponseDTO",
    "PaymentMethodRuleDTO",
    "ClientIdentityCommandDTO",
    "ClientIdentityResponseDTO",
]
