from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Float, Date
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import PrintStatus


class PrintUsage(Base):
    """Filament consumed while printing an order"""
    __tablename__ = "print_usage"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    filament_id = Column(Integer, ForeignKey("filaments.id"), nullable=False, index=True)

    quantity_used_kg = Column(Float, nullable=False)
    cost_consumed = Column(Float, nullable=False)  # Snapshot at creation, never recomputed

    print_date = Column(Date, nullable=False)
    print_duration_mins = Column(Integer, nullable=True)
    print_status = Column(String, default=PrintStatus.SUCCESS.value, nullable=False)
    failure_reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    order = relationship("Order", back_populates="print_usages")
    filament = relationship("Filament", back_populates="print_usages")

    @property
    def customer_name(self):
        return self.order.customer_name if self.order else None

    @property
    def order_description(self):
        return self.order.order_description if self.order else None

    @property
    def filament_type(self):
        return self.filament.type if self.filament else None

    @property
    def filament_brand(self):
        return self.filament.brand if self.filament else None

    @property
    def filament_color(self):
        return self.filament.color if self.filament else None
