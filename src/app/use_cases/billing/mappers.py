"""Entity -> response DTO mapping shared by the billing use cases"""

from typing import List, Sequence
from src.domain.document import Document, DocumentKind
from src.domain.line_item import LineItem
from src.domain.payment import Payment
from src.domain.pricing import DocumentTotals, item_subtotal
from .dtos import (
    DocumentResponseDTO,
    DocumentTotalsDTO,
    LineItemDTO,
    LineItemResponseDTO,
    PaymentResponseDTO,
)


def to_totals_dto(kind: DocumentKind, totals: DocumentTotals) -> DocumentTotalsDTO:
    return DocumentTotalsDTO(
        kind=DocumentKind(kind).value,
        line_subtotals=list(totals.line_subtotals),
        subtotal_items=totals.subtotal_items,
        discount_amount=totals.discount_amount,
        total_before_tax=totals.total_before_tax,
        tax_amount=totals.tax_amount,
        other_charges=totals.other_charges,
        grand_total=totals.grand_total,
        amount_paid=totals.amount_paid,
        balance_due=totals.balance_due,
    )


def to_line_items(items: Sequence[LineItemDTO]) -> List[LineItem]:
    """Build unsaved line item entities, keeping entry order"""
    return [
        LineItem(
            position=position,
            kind=item.kind,
            description=item.description.strip(),
            part_number=item.part_number,
            quantity=item.quantity,
            unit_cost=item.unit_cost,
            labor_hours=item.labor_hours,
            labor_rate=item.labor_rate,
        )
        for position, item in enumerate(items)
    ]


def to_document_response(
    document: Document,
    items: Sequence[LineItem],
    totals: DocumentTotals,
) -> DocumentResponseDTO:
    line_items = [
        LineItemResponseDTO(
            position=item.position,
            kind=item.kind,
            description=item.description,
            part_number=item.part_number,
            quantity=item.quantity,
            unit_cost=item.unit_cost,
            labor_hours=item.labor_hours,
            labor_rate=item.labor_rate,
            line_subtotal=item_subtotal(item),
        )
        for item in items
    ]

    return DocumentResponseDTO(
        document_id=document.id,
        number=document.number,
        kind=DocumentKind(document.kind).value,
        status=document.status,
        currency=document.currency,
        issue_date=document.issue_date,
        expiry_date=document.expiry_date,
        due_date=document.due_date,
        reference=document.reference,
        prepared_by=document.prepared_by,
        customer_id=document.customer_id,
        customer_name=document.customer_name,
        phone=document.phone,
        email=document.email,
        address=document.address,
        vehicle_id=document.vehicle_id,
        plate=document.plate,
        discount_percent=document.discount_percent,
        tax_percent=document.tax_percent,
        remarks=document.remarks,
        technician=document.technician,
        terms=document.terms,
        line_items=line_items,
        totals=to_totals_dto(document.kind, totals),
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def to_payment_response(payment: Payment) -> PaymentResponseDTO:
    return PaymentResponseDTO(
        payment_id=payment.id,
        number=payment.number,
        receipt_number=payment.receipt_number,
        invoice_reference=payment.invoice_reference,
        customer=payment.customer,
        invoice_total_amount=payment.invoice_total_amount,
        amount_paid=payment.amount_paid,
        discount_applied=payment.discount_applied,
        tax_amount=payment.tax_amount,
        remaining_balance=payment.remaining_balance,
        currency=payment.currency,
        status=payment.status.value,
        payment_method=payment.payment_method.value,
        payment_channel=payment.payment_channel,
        transaction_ref=payment.transaction_ref,
        cheque_number=payment.cheque_number,
        bank_name=payment.bank_name,
        sender_number=payment.sender_number,
        receiver_till_number=payment.receiver_till_number,
        collected_by=payment.collected_by,
        branch_location=payment.branch_location,
        work_order_id=payment.work_order_id,
        estimate_id=payment.estimate_id,
        notes=payment.notes,
        paid_at=payment.paid_at,
        created_at=payment.created_at,
    )
