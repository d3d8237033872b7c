import logging
from datetime import date
from io import BytesIO
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.models.order import Order
from app.db.models.payment import Payment
from app.services import orders

logger = logging.getLogger(__name__)

HEADER_COLOR = colors.HexColor('#1e3a5f')


def invoice_number(order_id: int, on: Optional[date] = None) -> str:
    """INV-<YYYYMM of issue>-<order id, zero padded to 4>"""
    on = on or date.today()
    return f"INV-{on.strftime('%Y%m')}-{order_id:04d}"


def invoice_summary(order: Order, payments: List[Payment]) -> Dict[str, float]:
    subtotal = order.total_amount or 0
    discount = subtotal * (order.discount_percentage or 0) / 100
    after_discount = subtotal - discount
    gst = after_discount * (order.gst_percentage or 0) / 100
    total = after_discount + gst
    paid = sum(p.amount or 0 for p in payments)
    return {
        "subtotal": subtotal,
        "discount": discount,
        "after_discount": after_discount,
        "gst": gst,
        "total": total,
        "paid": paid,
        "balance": total - paid,
    }


def _payments_for(db: Session, order_id: int) -> List[Payment]:
    return (
        db.query(Payment)
        .filter(Payment.order_id == order_id)
        .order_by(Payment.payment_date.asc(), Payment.id.asc())
        .all()
    )


def get_invoice(db: Session, order_id: int) -> Dict[str, Any]:
    order = orders.get_order(db, order_id)
    payments = _payments_for(db, order_id)
    today = date.today()
    return {
        "invoice_number": invoice_number(order.id, today),
        "invoice_date": today,
        "business_name": settings.BUSINESS_NAME,
        "business_tagline": settings.BUSINESS_TAGLINE,
        "order": order,
        "payments": [
            {
                "id": p.id,
                "amount": p.amount,
                "payment_type": p.payment_type,
                "payment_method": p.payment_method,
                "payment_date": p.payment_date,
                "transaction_ref": p.transaction_ref,
            }
            for p in payments
        ],
        "summary": invoice_summary(order, payments),
    }


def _money(value: float) -> str:
    return f"Rs.{value:,.2f}"


def _indian_date(value: Optional[date]) -> str:
    return value.strftime('%d/%m/%Y') if value else '-'


def generate_invoice_pdf(db: Session, order_id: int) -> Dict[str, Any]:
    """Render the tax invoice for an order. Returns {filename, content: BytesIO}."""
    order = orders.get_order(db, order_id)
    payments = _payments_for(db, order_id)
    summary = invoice_summary(order, payments)
    number = invoice_number(order.id)

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4,
                            rightMargin=14*mm, leftMargin=14*mm,
                            topMargin=14*mm, bottomMargin=14*mm)
    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle('InvoiceTitle', parent=styles['Heading1'], fontSize=20,
                                 spaceAfter=2, fontName='Helvetica-Bold')
    tagline_style = ParagraphStyle('Tagline', parent=styles['Normal'], fontSize=9,
                                   textColor=colors.HexColor('#555555'))
    label_style = ParagraphStyle('Label', parent=styles['Normal'], fontSize=10, fontName='Helvetica-Bold')
    normal_style = ParagraphStyle('InvoiceNormal', parent=styles['Normal'], fontSize=10)
    small_style = ParagraphStyle('Small', parent=styles['Normal'], fontSize=9, textColor=colors.gray)
    right_style = ParagraphStyle('Right', parent=normal_style, alignment=TA_RIGHT)
    footer_style = ParagraphStyle('Footer', parent=small_style, alignment=TA_CENTER)

    # Header: business on the left, invoice box on the right
    header = Table([[
        [Paragraph(escape(settings.BUSINESS_NAME), title_style), Paragraph(escape(settings.BUSINESS_TAGLINE), tagline_style)],
        [Paragraph('<b>TAX INVOICE</b>', ParagraphStyle('TaxInvoice', parent=right_style, fontSize=16)),
         Spacer(1, 3*mm),
         Paragraph(f"Invoice: {number}", right_style),
         Paragraph(f"Date: {_indian_date(date.today())}", right_style)],
    ]], colWidths=[100*mm, 82*mm])
    header.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('LINEBELOW', (0, 0), (-1, 0), 1, colors.black),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
    ]))
    elements.append(header)
    elements.append(Spacer(1, 6*mm))

    # Bill to / order details
    bill_to = [Paragraph('BILL TO:', label_style), Paragraph(escape(order.customer_name or 'N/A'), normal_style)]
    if order.customer_email:
        bill_to.append(Paragraph(escape(order.customer_email), normal_style))
    if order.contact_number:
        bill_to.append(Paragraph(f"Ph: {escape(order.contact_number)}", normal_style))
    if order.delivery_address:
        bill_to.append(Paragraph(escape(order.delivery_address), normal_style))
    order_details = [
        Paragraph('ORDER DETAILS:', label_style),
        Paragraph(f"Order ID: #{order.id}", normal_style),
        Paragraph(f"Order Date: {_indian_date(order.order_date)}", normal_style),
        Paragraph(f"Priority: {(order.priority or 'normal').upper()}", normal_style),
        Paragraph(f"Status: {(order.status or 'pending').replace('_', ' ').upper()}", normal_style),
    ]
    parties = Table([[bill_to, order_details]], colWidths=[100*mm, 82*mm])
    parties.setStyle(TableStyle([('VALIGN', (0, 0), (-1, -1), 'TOP')]))
    elements.append(parties)
    elements.append(Spacer(1, 6*mm))

    # Single line item for the print job
    quantity = order.estimated_quantity_units or 1
    description = [Paragraph(f"<b>{escape(order.print_type or '3D Printing')} - 3D Print Service</b>", normal_style)]
    if order.order_description:
        description.append(Paragraph(escape(order.order_description), small_style))
    if order.filament_type:
        description.append(Paragraph(f"Filament: {escape(order.filament_type)} {escape(order.filament_color or '')}", small_style))
    items = Table([
        ['Description', 'Qty', 'Rate', 'Amount'],
        [description, str(quantity), _money(summary['subtotal'] / quantity), _money(summary['subtotal'])],
    ], colWidths=[100*mm, 20*mm, 30*mm, 32*mm])
    items.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_COLOR),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('VALIGN', (0, 1), (-1, -1), 'MIDDLE'),
        ('BOX', (0, 0), (-1, -1), 0.5, colors.grey),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
    ]))
    elements.append(items)
    elements.append(Spacer(1, 6*mm))

    # Totals box
    totals = [['Subtotal:', _money(summary['subtotal'])]]
    if (order.discount_percentage or 0) > 0:
        totals.append([f"Discount ({order.discount_percentage:g}%):", f"-{_money(summary['discount'])}"])
    if (order.gst_percentage or 0) > 0:
        totals.append([f"GST ({order.gst_percentage:g}%):", f"+{_money(summary['gst'])}"])
    grand_total_row = len(totals)
    totals.append(['Grand Total:', _money(summary['total'])])
    totals.append(['Paid:', _money(summary['paid'])])
    totals.append(['Balance Due:', _money(summary['balance']) if summary['balance'] > 0 else 'PAID'])
    totals_table = Table(totals, colWidths=[45*mm, 35*mm], hAlign='RIGHT')
    totals_table.setStyle(TableStyle([
        ('BOX', (0, 0), (-1, -1), 0.5, colors.black),
        ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
        ('LINEABOVE', (0, grand_total_row), (-1, grand_total_row), 0.5, colors.black),
        ('FONTNAME', (0, grand_total_row), (-1, grand_total_row), 'Helvetica-Bold'),
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('TEXTCOLOR', (1, -1), (1, -1), colors.red if summary['balance'] > 0 else colors.green),
    ]))
    elements.append(totals_table)
    elements.append(Spacer(1, 8*mm))

    if payments:
        elements.append(Paragraph('Payment History:', label_style))
        for p in payments:
            elements.append(Paragraph(
                f"&bull; {_indian_date(p.payment_date)} - {_money(p.amount)} ({(p.payment_method or 'cash').upper()})",
                small_style,
            ))
        elements.append(Spacer(1, 8*mm))

    elements.append(Paragraph('Thank you for your business!', ParagraphStyle('Thanks', parent=normal_style, alignment=TA_CENTER)))
    elements.append(Paragraph(escape(f"{settings.BUSINESS_NAME} - {settings.BUSINESS_TAGLINE}"), footer_style))

    doc.build(elements)
    buffer.seek(0)
    logger.info(f"Generated invoice {number} for order {order.id}")
    return {"filename": f"{number}.pdf", "content": buffer}
