from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime


# Order Schemas
class OrderBase(BaseModel):
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    contact_number: Optional[str] = None
    delivery_address: Optional[str] = None
    order_description: Optional[str] = None
    print_type: Optional[str] = None
    filament_type: Optional[str] = None
    filament_color: Optional[str] = None
    estimated_quantity_units: Optional[int] = None
    estimated_filament_usage_kg: Optional[float] = None
    order_date: Optional[date] = None
    eta_delivery: Optional[date] = None
    final_delivery_date: Optional[date] = None
    total_amount: Optional[float] = None
    advance_percentage: Optional[float] = None
    discount_percentage: Optional[float] = None
    gst_percentage: Optional[float] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class OrderCreate(OrderBase):
    pass


class OrderUpdate(OrderBase):
    pass


class Order(OrderBase):
    id: int
    customer_name: str
    order_date: date
    total_amount: float
    advance_amount: float
    balance_amount: float
    discount_amount: float
    gst_amount: float
    payment_status: str
    priority: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
