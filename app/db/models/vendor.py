from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import PaymentTerms


class Vendor(Base):
    """Vendor Master - Filament suppliers"""
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)

    # Contact Details
    contact = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    state = Column(String, nullable=True)
    pincode = Column(String(6), nullable=True)

    # Tax & Terms
    gst = Column(String(15), nullable=True)
    payment_terms = Column(String, default=PaymentTerms.ADVANCE.value, nullable=False)  # advance, cod, net15, net30, net60

    is_active = Column(Boolean, default=True, nullable=False)
    notes = Column(Text, nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    filaments = relationship("Filament", back_populates="vendor", passive_deletes="all")
    procurements = relationship("Procurement", back_populates="vendor", passive_deletes="all")
