"""ReportLab PDF Generation Service Implementation

Implements estimate/invoice PDF generation using ReportLab library.
"""

from io import BytesIO
from xml.sax.saxutils import escape
from typing import List
from decimal import Decimal

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.document import Document, DocumentKind
from src.domain.line_item import LineItem, LineItemKind
from src.domain.pricing import DocumentTotals, to_amount

LINE_COL_WIDTHS = [18 * mm, 52 * mm, 14 * mm, 24 * mm, 14 * mm, 20 * mm, 28 * mm]


def _quantity(value: Decimal) -> str:
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def _percent(value) -> str:
    return f"{to_amount(value).normalize():f}"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Generates printable estimates and invoices using ReportLab.
    """

    def generate_document(
        self,
        document: Document,
        line_items: List[LineItem],
        totals: DocumentTotals,
        company_name: str = "Garage Workshop",
        company_address: str = "Main Workshop",
    ) -> bytes:
        """
        Generate an estimate or invoice PDF

        Args:
            document: Document entity
            line_items: Line items of the document, in order
            totals: Totals derived from the line items
            company_name: Company name to display on the document
            company_address: Company address to display on the document

        Returns:
            PDF document as bytes
        """
        kind = DocumentKind(document.kind)
        currency = document.currency

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=15 * mm,
            leftMargin=15 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
        )

        styles = getSampleStyleSheet()
        elements = []

        # Custom styles
        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=24,
            spaceAfter=10,
            textColor=colors.HexColor("#2C3E50"),
        )
        kind_style = ParagraphStyle(
            "KindStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#E74C3C"),
            spaceAfter=20,
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        # Header - Company Info and document label
        elements.append(Paragraph(company_name, title_style))
        elements.append(Paragraph(company_address, header_style))
        elements.append(Spacer(1, 10 * mm))
        elements.append(Paragraph("ESTIMATE" if kind == DocumentKind.ESTIMATE else "INVOICE", kind_style))

        # Document Details Table
        document_info = [
            ["Number:", document.number],
            ["Status:", document.status.replace("_", " ").upper()],
            ["Currency:", currency],
            ["Issue Date:", document.issue_date.strftime("%Y-%m-%d")],
        ]
        if document.expiry_date:
            document_info.append(["Valid Until:", document.expiry_date.strftime("%Y-%m-%d")])
        if document.due_date:
            document_info.append(["Due Date:", document.due_date.strftime("%Y-%m-%d")])
        if document.reference:
            document_info.append(["Reference:", document.reference])
        if document.technician:
            document_info.append(["Technician:", document.technician])

        info_table = Table(document_info, colWidths=[40 * mm, 100 * mm])
        info_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(info_table)
        elements.append(Spacer(1, 10 * mm))

        # Customer and vehicle
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(escape(document.customer_name), normal_style))
        for line in (document.address, document.phone, document.email):
            if line:
                elements.append(Paragraph(escape(line), normal_style))
        if document.plate:
            elements.append(Paragraph(f"Vehicle: {escape(document.plate)}", normal_style))
        elements.append(Spacer(1, 10 * mm))

        # Line Items Table
        line_data = [["Kind", "Description", "Qty", "Unit Cost", "Hours", "Rate", "Subtotal"]]
        for item, subtotal in zip(line_items, totals.line_subtotals):
            line_data.append(
                [
                    LineItemKind(item.kind).value.title(),
                    Paragraph(escape(item.description), normal_style),
                    _quantity(item.quantity),
                    f"{item.unit_cost:,.2f}",
                    _quantity(item.labor_hours),
                    f"{item.labor_rate:,.2f}",
                    f"{currency} {subtotal:,.2f}",
                ]
            )

        line_table = Table(line_data, colWidths=LINE_COL_WIDTHS, repeatRows=1)
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 9),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    # Grid
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                    ("TOPPADDING", (0, 0), (-1, -1), 5),
                    # Alternate row colors
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )

        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals breakdown
        total_rows = [
            ("Subtotal:", totals.subtotal_items),
            (f"Discount ({_percent(document.discount_percent)}%):", totals.discount_amount),
            ("Total before tax:", totals.total_before_tax),
            (f"Tax ({_percent(document.tax_percent)}%):", totals.tax_amount),
        ]
        if kind == DocumentKind.INVOICE:
            total_rows.append(("Other charges:", totals.other_charges))
        total_rows.append(("Grand Total:", totals.grand_total))
        if kind == DocumentKind.INVOICE:
            total_rows.append(("Amount paid:", totals.amount_paid))
            total_rows.append(("Balance Due:", totals.balance_due))

        total_data = [["", label, f"{currency} {amount:,.2f}"] for label, amount in total_rows]
        total_table = Table(total_data, colWidths=[100 * mm, 40 * mm, 30 * mm])

        grand_row = len(total_rows) - (3 if kind == DocumentKind.INVOICE else 1)
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("FONTNAME", (1, grand_row), (-1, grand_row), "Helvetica-Bold"),
                    ("LINEABOVE", (1, grand_row), (-1, grand_row), 1.5, colors.HexColor("#2C3E50")),
                    ("FONTNAME", (1, -1), (-1, -1), "Helvetica-Bold"),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(total_table)
        elements.append(Spacer(1, 15 * mm))

        if document.remarks:
            elements.append(Paragraph("Remarks:", bold_style))
            elements.append(Paragraph(escape(document.remarks), normal_style))
            elements.append(Spacer(1, 5 * mm))

        # Footer note
        if document.terms:
            elements.append(
                Paragraph(
                    f"<i>{escape(document.terms)}</i>",
                    ParagraphStyle(
                        "FooterNote",
                        parent=styles["Normal"],
                        fontSize=9,
                        textColor=colors.HexColor("#95A5A6"),
                    ),
                )
            )

        # Build PDF
        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
