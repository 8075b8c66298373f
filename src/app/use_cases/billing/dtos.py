"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field, RootModel, field_validator
from src.domain.client import ClientType
from src.domain.line_item import LineItemKind
from src.domain.payment import PaymentMethod
from src.domain.pricing import to_amount


class LineItemDTO(BaseModel):
    """
    Line item as entered by the user

    Numeric fields that are missing or not numbers are read as 0.
    """

    kind: LineItemKind = Field(
        default=LineItemKind.SERVICE,
        description="Line item kind (service, part, other)"
    )

    description: str = Field(
        default="",
        description="Service or part description"
    )

    part_number: Optional[str] = Field(
        default=None,
        description="Inventory part number"
    )

    quantity: Decimal = Field(
        default=Decimal("1"),
        ge=0,
        description="Quantity of parts/other"
    )

    unit_cost: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Cost per unit"
    )

    labor_hours: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Service time in hours"
    )

    labor_rate: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Labor rate per hour"
    )

    @field_validator("quantity", "unit_cost", "labor_hours", "labor_rate", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        """Unparseable numbers count as 0"""
        return to_amount(v)

    class Config:
        json_schema_extra = {
            "example": {
                "kind": "service",
                "description": "Brake pad replacement",
                "part_number": "BP-2201",
                "quantity": "2",
                "unit_cost": "45.00",
                "labor_hours": "1.5",
                "labor_rate": "50.00"
            }
        }


class PricingInputDTO(BaseModel):
    """Fields shared by estimate and invoice pricing"""

    items: List[LineItemDTO] = Field(
        default_factory=list,
        description="Line items in entry order"
    )

    discount_percent: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=100,
        description="Discount percentage (0-100)"
    )

    tax_percent: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Tax/VAT percentage, applied after discount"
    )

    @field_validator("discount_percent", "tax_percent", mode="before")
    @classmethod
    def coerce_percentages(cls, v):
        return to_amount(v)


class EstimatePricingDTO(PricingInputDTO):
    kind: Literal["estimate"] = "estimate"


class InvoicePricingDTO(PricingInputDTO):
    kind: Literal["invoice"] = "invoice"

    other_charges: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Flat charges added after tax"
    )

    amount_paid: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Amount already paid"
    )

    @field_validator("other_charges", "amount_paid", mode="before")
    @classmethod
    def coerce_amounts(cls, v):
        return to_amount(v)


class PricingCommandDTO(RootModel):
    """Estimate or invoice pricing inputs, told apart by ``kind``"""

    root: Annotated[
        Union[EstimatePricingDTO, InvoicePricingDTO],
        Field(discriminator="kind"),
    ]


class DocumentDetailsDTO(BaseModel):
    """Non-monetary fields of an estimate or invoice"""

    status: Optional[str] = Field(
        default=None,
        description="Initial status; defaults to draft (estimate) or unpaid (invoice)"
    )

    currency: Optional[str] = Field(
        default=None,
        description="Currency code; defaults to the configured currency"
    )

    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    due_date: Optional[date] = None
    reference: Optional[str] = None
    prepared_by: Optional[str] = None

    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    vehicle_id: Optional[str] = None
    plate: Optional[str] = None

    remarks: Optional[str] = None
    technician: Optional[str] = None
    terms: Optional[str] = None


class CreateEstimateCommandDTO(EstimatePricingDTO, DocumentDetailsDTO):
    """Command DTO for creating an estimate"""
    pass


class CreateInvoiceCommandDTO(InvoicePricingDTO, DocumentDetailsDTO):
    """Command DTO for creating an invoice"""

    class Config:
        json_schema_extra = {
            "example": {
                "kind": "invoice",
                "customer_name": "John Doe",
                "reference": "JC-0042",
                "items": [
                    {"kind": "part", "description": "Oil filter", "quantity": "1", "unit_cost": "25.00"},
                    {"kind": "service", "description": "Oil change", "labor_hours": "1", "labor_rate": "50.00"}
                ],
                "discount_percent": "10",
                "tax_percent": "18",
                "other_charges": "5.00",
                "amount_paid": "0"
            }
        }


class CreateDocumentCommandDTO(RootModel):
    """Create estimate or create invoice command, told apart by ``kind``"""

    root: Annotated[
        Union[CreateEstimateCommandDTO, CreateInvoiceCommandDTO],
        Field(discriminator="kind"),
    ]


class UpdateDocumentCommandDTO(DocumentDetailsDTO):
    """
    Command DTO for updating a document

    Omitted fields keep their stored value; a given ``items`` list replaces
    all line items.
    """

    items: Optional[List[LineItemDTO]] = None
    discount_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)
    tax_percent: Optional[Decimal] = Field(default=None, ge=0)
    other_charges: Optional[Decimal] = Field(default=None, ge=0)
    amount_paid: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("discount_percent", "tax_percent", "other_charges", "amount_paid", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        return None if v is None else to_amount(v)


class LineItemResponseDTO(BaseModel):
    position: int
    kind: LineItemKind
    description: str
    part_number: Optional[str] = None
    quantity: Decimal
    unit_cost: Decimal
    labor_hours: Decimal
    labor_rate: Decimal
    line_subtotal: Decimal = Field(
        ...,
        description="quantity * unit_cost + labor_hours * labor_rate"
    )


class DocumentTotalsDTO(BaseModel):
    """
    Response DTO with every derived total of a document

    Returned by CalculateDocumentTotals and embedded in document responses.
    """

    kind: str = Field(..., description="estimate or invoice")
    line_subtotals: List[Decimal] = Field(default_factory=list)
    subtotal_items: Decimal
    discount_amount: Decimal
    total_before_tax: Decimal
    tax_amount: Decimal
    other_charges: Decimal
    grand_total: Decimal
    amount_paid: Decimal
    balance_due: Optional[Decimal] = Field(
        default=None,
        description="Grand total minus amount paid (invoices only)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "kind": "invoice",
                "line_subtotals": ["100.00"],
                "subtotal_items": "100.00",
                "discount_amount": "10.00",
                "total_before_tax": "90.00",
                "tax_amount": "9.00",
                "other_charges": "0.00",
                "grand_total": "99.00",
                "amount_paid": "50.00",
                "balance_due": "49.00"
            }
        }


class DocumentResponseDTO(BaseModel):
    """Response DTO for a stored estimate or invoice with its totals"""

    document_id: int
    number: str
    kind: str
    status: str
    currency: str
    issue_date: date
    expiry_date: Optional[date] = None
    due_date: Optional[date] = None
    reference: Optional[str] = None
    prepared_by: Optional[str] = None
    customer_id: Optional[str] = None
    customer_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    vehicle_id: Optional[str] = None
    plate: Optional[str] = None
    discount_percent: Decimal
    tax_percent: Decimal
    remarks: Optional[str] = None
    technician: Optional[str] = None
    terms: Optional[str] = None
    line_items: List[LineItemResponseDTO]
    totals: DocumentTotalsDTO
    created_at: datetime
    updated_at: datetime


class DocumentDraftDTO(BaseModel):
    """A new, unsaved document pre-filled with defaults"""

    kind: str
    status: str
    currency: str
    issue_date: date
    discount_percent: Decimal
    tax_percent: Decimal
    other_charges: Decimal
    amount_paid: Decimal
    terms: str
    items: List[LineItemDTO]
    totals: DocumentTotalsDTO


class PaymentTargetDTO(BaseModel):
    """Invoice a payment can be recorded against"""

    invoice_number: str
    customer: Optional[str] = None
    total: Decimal
    current_balance: Decimal
    currency: str
    status: str


class PaymentPreviewCommandDTO(BaseModel):
    """
    Command DTO for previewing a payment

    ``amount_paid`` left empty suggests paying the invoice's current balance.
    """

    invoice_reference: str = Field(
        default="",
        description="Invoice number"
    )

    amount_paid: Optional[Decimal] = None
    discount_applied: Decimal = Field(default=Decimal("0"), ge=0)
    tax_amount: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator("amount_paid", mode="before")
    @classmethod
    def coerce_amount_paid(cls, v):
        return None if v is None else to_amount(v)

    @field_validator("discount_applied", "tax_amount", mode="before")
    @classmethod
    def coerce_adjustments(cls, v):
        return to_amount(v)


class BalanceSnapshotDTO(BaseModel):
    """Response DTO for the live balance of a payment being entered"""

    invoice_reference: str
    target_found: bool
    customer: Optional[str] = None
    invoice_total: Decimal
    outstanding_balance: Decimal
    amount_paid: Decimal
    discount_applied: Decimal
    tax_amount: Decimal
    remaining_balance: Decimal
    currency: str
    projected_status: str

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_reference": "INV-2024-000002",
                "target_found": True,
                "customer": "Global Motors",
                "invoice_total": "780.00",
                "outstanding_balance": "780.00",
                "amount_paid": "500.00",
                "discount_applied": "0.00",
                "tax_amount": "0.00",
                "remaining_balance": "280.00",
                "currency": "TZS",
                "projected_status": "partially_paid"
            }
        }


class RecordPaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment against an invoice

    Used as input to RecordPayment use case.
    """

    invoice_reference: str = Field(
        ...,
        min_length=1,
        description="Invoice number (required, non-empty)"
    )

    amount_paid: Decimal = Field(
        default=Decimal("0"),
        description="Amount received (must be > 0)"
    )

    discount_applied: Decimal = Field(default=Decimal("0"), ge=0)
    tax_amount: Decimal = Field(default=Decimal("0"), ge=0)

    currency: Optional[str] = Field(
        default=None,
        description="Defaults to the invoice currency"
    )

    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_channel: Optional[str] = None
    transaction_ref: Optional[str] = None
    cheque_number: Optional[str] = None
    bank_name: Optional[str] = None
    sender_number: Optional[str] = None
    receiver_till_number: Optional[str] = None

    collected_by: Optional[str] = None
    branch_location: Optional[str] = None
    work_order_id: Optional[str] = None
    estimate_id: Optional[str] = None
    notes: Optional[str] = None
    paid_at: Optional[datetime] = None

    @field_validator("amount_paid", "discount_applied", "tax_amount", mode="before")
    @classmethod
    def coerce_amounts(cls, v):
        return to_amount(v)

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_reference": "INV-2024-000002",
                "amount_paid": "500.00",
                "payment_method": "mobile_money",
                "payment_channel": "M-Pesa",
                "transaction_ref": "K98J2XYZ",
                "sender_number": "255712345678"
            }
        }


class PaymentResponseDTO(BaseModel):
    """Response DTO for a recorded payment"""

    payment_id: int
    number: str
    receipt_number: str
    invoice_reference: str
    customer: Optional[str] = None
    invoice_total_amount: Decimal
    amount_paid: Decimal
    discount_applied: Decimal
    tax_amount: Decimal
    remaining_balance: Decimal
    currency: str
    status: str
    payment_method: str
    payment_channel: Optional[str] = None
    transaction_ref: Optional[str] = None
    cheque_number: Optional[str] = None
    bank_name: Optional[str] = None
    sender_number: Optional[str] = None
    receiver_till_number: Optional[str] = None
    collected_by: Optional[str] = None
    branch_location: Optional[str] = None
    work_order_id: Optional[str] = None
    estimate_id: Optional[str] = None
    notes: Optional[str] = None
    paid_at: datetime
    created_at: datetime


class RecordPaymentResponseDTO(BaseModel):
    """Recorded payment plus the invoice state after it"""

    payment: PaymentResponseDTO
    invoice_status: str
    invoice_balance_due: Decimal


class ListPaymentsResponseDTO(BaseModel):
    invoice_reference: str
    payments: List[PaymentResponseDTO]
    total_count: int


class PaymentMethodRuleDTO(BaseModel):
    method: str
    label: str
    channels: List[str]
    required_fields: List[str]
    optional_fields: List[str]


class ClientIdentityCommandDTO(BaseModel):
    """Command DTO for checking a client's identity fields"""

    client_type: ClientType = ClientType.INDIVIDUAL
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    email: Optional[str] = None


class ClientIdentityResponseDTO(BaseModel):
    client_type: str
    display_name: str
    email: str


class DocumentPdfResponseDTO(BaseModel):
    """Printable estimate/invoice, base64-encoded"""

    number: str
    kind: str
    pdf_base64: str
    generated_at: datetime
