from pydantic import BaseModel
from typing import List, Optional
from datetime import date
from app.schemas.order import Order


class InvoiceSummary(BaseModel):
    subtotal: float
    discount: float
    after_discount: float
    gst: float
    total: float
    paid: float
    balance: float


class InvoicePayment(BaseModel):
    id: int
    amount: float
    payment_type: str
    payment_method: str
    payment_date: date
    transaction_ref: Optional[str] = None


class Invoice(BaseModel):
    invoice_number: str
    invoice_date: date
    business_name: str
    business_tagline: str
    order: Order
    payments: List[InvoicePayment]
    summary: InvoiceSummary
