from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Float, Date
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import ProcurementStatus, ProcurementPaymentStatus


class Procurement(Base):
    """Filament purchase orders placed with vendors"""
    __tablename__ = "procurements"

    id = Column(Integer, primary_key=True, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False, index=True)
    filament_id = Column(Integer, ForeignKey("filaments.id"), nullable=False, index=True)

    quantity_kg = Column(Float, nullable=False)
    cost_per_kg = Column(Float, nullable=False)
    total_amount = Column(Float, nullable=False)  # quantity_kg * cost_per_kg

    # Dates
    order_date = Column(Date, nullable=False)
    eta_delivery = Column(Date, nullable=True, index=True)
    final_delivery_date = Column(Date, nullable=True)  # First set = stock received

    invoice_number = Column(String, nullable=True)
    tracking_number = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    payment_status = Column(String, default=ProcurementPaymentStatus.PENDING.value, nullable=False)
    status = Column(String, default=ProcurementStatus.PENDING.value, nullable=False, index=True)

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    vendor = relationship("Vendor", back_populates="procurements")
    filament = relationship("Filament", back_populates="procurements")

    @property
    def vendor_name(self):
        return self.vendor.name if self.vendor else None

    @property
    def filament_type(self):
        return self.filament.type if self.filament else None

    @property
    def filament_brand(self):
        return self.filament.brand if self.filament else None

    @property
    def filament_color(self):
        return self.filament.color if self.filament else None
