from sqlalchemy import Column, Integer, String, DateTime, Text, Float, Date
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import OrderPriority, OrderStatus, PaymentStatus


class Order(Base):
    """Customer print orders"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    # Customer
    customer_name = Column(String(255), nullable=False, index=True)
    customer_email = Column(String, nullable=True)
    contact_number = Column(String, nullable=True)
    delivery_address = Column(Text, nullable=True)

    # Job details
    order_description = Column(Text, nullable=True)
    print_type = Column(String, nullable=True)
    filament_type = Column(String, nullable=True)  # Free text, not linked to filaments
    filament_color = Column(String, nullable=True)
    estimated_quantity_units = Column(Integer, nullable=True)
    estimated_filament_usage_kg = Column(Float, nullable=True)

    # Dates
    order_date = Column(Date, nullable=False, index=True)
    eta_delivery = Column(Date, nullable=True)
    final_delivery_date = Column(Date, nullable=True)

    # Money
    total_amount = Column(Float, nullable=False)
    advance_percentage = Column(Float, default=0, nullable=False)
    advance_amount = Column(Float, default=0, nullable=False)  # Paid to date once payments exist
    balance_amount = Column(Float, default=0, nullable=False)
    discount_percentage = Column(Float, default=0, nullable=False)
    discount_amount = Column(Float, default=0, nullable=False)
    gst_percentage = Column(Float, default=0, nullable=False)
    gst_amount = Column(Float, default=0, nullable=False)
    payment_status = Column(String, default=PaymentStatus.PENDING.value, nullable=False, index=True)

    priority = Column(String, default=OrderPriority.NORMAL.value, nullable=False)
    status = Column(String, default=OrderStatus.IN_PROGRESS.value, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    payments = relationship("Payment", back_populates="order", order_by="Payment.id", passive_deletes="all")
    print_usages = relationship("PrintUsage", back_populates="order", order_by="PrintUsage.id", passive_deletes="all")
