from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime


# Print Usage Schemas
class PrintUsageBase(BaseModel):
    order_id: Optional[int] = None
    filament_id: Optional[int] = None
    quantity_used_kg: Optional[float] = None
    print_date: Optional[date] = None
    print_duration_mins: Optional[int] = None
    print_status: Optional[str] = None
    failure_reason: Optional[str] = None
    notes: Optional[str] = None


class PrintUsageCreate(PrintUsageBase):
    pass


class PrintUsage(PrintUsageBase):
    id: int
    order_id: int
    filament_id: int
    quantity_used_kg: float
    cost_consumed: float
    print_date: date
    print_status: str
    customer_name: Optional[str] = None
    order_description: Optional[str] = None
    filament_type: Optional[str] = None
    filament_brand: Optional[str] = None
    filament_color: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
