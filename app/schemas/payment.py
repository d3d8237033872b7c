from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime


# Payment Schemas
class PaymentBase(BaseModel):
    order_id: Optional[int] = None
    amount: Optional[float] = None
    payment_type: Optional[str] = None
    payment_method: Optional[str] = None
    payment_date: Optional[date] = None
    transaction_ref: Optional[str] = None
    notes: Optional[str] = None


class PaymentCreate(PaymentBase):
    pass


class Payment(PaymentBase):
    id: int
    order_id: int
    amount: float
    payment_type: str
    payment_method: str
    payment_date: date
    customer_name: Optional[str] = None
    order_total: Optional[float] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PendingReceivables(BaseModel):
    total_pending: float
