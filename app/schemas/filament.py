from pydantic import BaseModel
from typing import Optional
from datetime import datetime


# Filament Schemas
class FilamentBase(BaseModel):
    type: Optional[str] = None
    brand: Optional[str] = None
    color: Optional[str] = None
    diameter: Optional[str] = None
    weight_per_spool_kg: Optional[float] = None
    cost_per_kg: Optional[float] = None
    vendor_id: Optional[int] = None
    min_stock_alert_kg: Optional[float] = None
    print_temp_min: Optional[int] = None
    print_temp_max: Optional[int] = None
    bed_temp: Optional[int] = None
    quality_grade: Optional[str] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class FilamentCreate(FilamentBase):
    pass


class FilamentUpdate(FilamentBase):
    """current_stock_kg is deliberately absent: stock only moves through the ledger."""
    pass


class Filament(FilamentBase):
    id: int
    type: str
    brand: str
    color: str
    cost_per_kg: float
    current_stock_kg: float
    vendor_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StockByType(BaseModel):
    type: str
    total_stock: float
