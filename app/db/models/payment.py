from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Float, Date
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import PaymentMethod


class Payment(Base):
    """Payments received against an order"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    payment_type = Column(String, nullable=False)  # advance, balance, refund
    payment_method = Column(String, default=PaymentMethod.CASH.value, nullable=False)
    payment_date = Column(Date, nullable=False, index=True)
    transaction_ref = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    order = relationship("Order", back_populates="payments")

    @property
    def customer_name(self):
        return self.order.customer_name if self.order else None

    @property
    def order_total(self):
        return self.order.total_amount if self.order else None
