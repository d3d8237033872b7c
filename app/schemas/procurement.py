from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime


# Procurement Schemas
class ProcurementBase(BaseModel):
    vendor_id: Optional[int] = None
    filament_id: Optional[int] = None
    quantity_kg: Optional[float] = None
    cost_per_kg: Optional[float] = None
    order_date: Optional[date] = None
    eta_delivery: Optional[date] = None
    invoice_number: Optional[str] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    payment_status: Optional[str] = None


class ProcurementCreate(ProcurementBase):
    pass


class ProcurementDelivery(BaseModel):
    """Fields accepted when recording delivery / updating a procurement"""
    final_delivery_date: Optional[date] = None
    invoice_number: Optional[str] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    payment_status: Optional[str] = None


class Procurement(ProcurementBase):
    id: int
    vendor_id: int
    filament_id: int
    quantity_kg: float
    cost_per_kg: float
    total_amount: float
    order_date: date
    final_delivery_date: Optional[date] = None
    payment_status: str
    status: str
    vendor_name: Optional[str] = None
    filament_type: Optional[str] = None
    filament_brand: Optional[str] = None
    filament_color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
