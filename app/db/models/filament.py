from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, ForeignKey, Float
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import QualityGrade


class Filament(Base):
    """Filament inventory - one row per type/brand/color spool line"""
    __tablename__ = "filaments"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String, nullable=False, index=True)  # Stored upper-case: PLA, PETG, ...
    brand = Column(String, nullable=False)
    color = Column(String, nullable=False)
    diameter = Column(String, default="1.75mm", nullable=False)
    weight_per_spool_kg = Column(Float, default=1, nullable=False)
    cost_per_kg = Column(Float, nullable=False)

    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=True, index=True)

    # Stock ledger, changed only through services.inventory.adjust_stock
    current_stock_kg = Column(Float, default=0, nullable=False)
    min_stock_alert_kg = Column(Float, default=1, nullable=True)

    # Print settings
    print_temp_min = Column(Integer, nullable=True)
    print_temp_max = Column(Integer, nullable=True)
    bed_temp = Column(Integer, nullable=True)

    quality_grade = Column(String, default=QualityGrade.STANDARD.value, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    notes = Column(Text, nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    vendor = relationship("Vendor", back_populates="filaments")
    procurements = relationship("Procurement", back_populates="filament", passive_deletes="all")
    print_usages = relationship("PrintUsage", back_populates="filament", passive_deletes="all")

    @property
    def vendor_name(self):
        return self.vendor.name if self.vendor else None
