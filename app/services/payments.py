import logging
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.enums import PaymentMethod
from app.db.models.payment import Payment
from app.services import orders
from app.services.common import get_or_404, normalize_choice

logger = logging.getLogger(__name__)


def list_payments(db: Session) -> List[Payment]:
    return db.query(Payment).order_by(Payment.id.desc()).all()


def get_payment(db: Session, payment_id: int) -> Payment:
    return get_or_404(db, Payment, payment_id, "Payment")


def get_by_order_id(db: Session, order_id: int) -> List[Payment]:
    return db.query(Payment).filter(Payment.order_id == order_id).order_by(Payment.id.asc()).all()


def create_payment(db: Session, data: Dict[str, Any]) -> Payment:
    """Record a payment and re-derive the owning order's payment state in the same transaction."""
    order = orders.get_order(db, data["order_id"])
    payment = Payment(
        order_id=order.id,
        amount=float(data["amount"]),
        payment_type=normalize_choice(data["payment_type"]),
        payment_method=normalize_choice(data.get("payment_method"), PaymentMethod.CASH.value),
        payment_date=data["payment_date"],
        transaction_ref=data.get("transaction_ref"),
        notes=data.get("notes"),
    )
    db.add(payment)
    try:
        db.flush()
        orders.recompute_payment_status(db, order.id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(payment)
    logger.info(f"Recorded payment {payment.id} of {payment.amount:g} for order {order.id}")
    return payment


def delete_payment(db: Session, payment_id: int) -> None:
    payment = get_payment(db, payment_id)
    order_id = payment.order_id
    try:
        db.delete(payment)
        db.flush()
        orders.recompute_payment_status(db, order_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Deleted payment {payment_id}, order {order_id} recomputed")


def get_total_revenue(db: Session) -> float:
    value = db.query(func.sum(Payment.amount)).scalar()
    return float(value or 0)
