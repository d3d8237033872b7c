"""
Customer orders and their payment state.

An order's advance_amount / balance_amount / payment_status are written by two
rules:

* the percentage rule, applied at creation and on an update whose patch carries
  both ``total_amount`` and ``advance_percentage``;
* the paid-to-date rule (:func:`recompute_payment_status`), applied after every
  payment create and delete.

Whichever ran last wins.
"""

import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.enums import OrderPriority, OrderStatus, PaymentStatus
from app.db.models.order import Order
from app.db.models.payment import Payment
from app.services.common import apply_changes, delete_row, get_or_404, normalize_choice

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (OrderStatus.IN_PROGRESS.value, OrderStatus.COMPLETED.value)


def payment_status_for(paid: float, total: float) -> str:
    if paid >= total:
        return PaymentStatus.FULLY_PAID.value
    if paid > 0:
        return PaymentStatus.PARTIALLY_PAID.value
    return PaymentStatus.PENDING.value


def advance_split(total_amount: float, advance_percentage: float) -> Tuple[float, float, str]:
    """Percentage rule: (advance_amount, balance_amount, payment_status)."""
    advance_amount = total_amount * (advance_percentage or 0) / 100
    balance_amount = total_amount - advance_amount
    return advance_amount, balance_amount, payment_status_for(advance_amount, total_amount)


def discount_and_gst(total_amount: float, discount_percentage: float, gst_percentage: float) -> Tuple[float, float]:
    discount_amount = total_amount * (discount_percentage or 0) / 100
    gst_amount = (total_amount - discount_amount) * (gst_percentage or 0) / 100
    return discount_amount, gst_amount


def list_orders(db: Session) -> List[Order]:
    return db.query(Order).order_by(Order.id.desc()).all()


def get_order(db: Session, order_id: int) -> Order:
    return get_or_404(db, Order, order_id, "Order")


def get_active(db: Session) -> List[Order]:
    return (
        db.query(Order)
        .filter(Order.status.in_(ACTIVE_STATUSES))
        .order_by(Order.id.desc())
        .all()
    )


def create_order(db: Session, data: Dict[str, Any]) -> Order:
    total_amount = float(data["total_amount"])
    advance_percentage = float(data.get("advance_percentage") or 0)
    discount_percentage = float(data.get("discount_percentage") or 0)
    gst_percentage = float(data.get("gst_percentage") or 0)

    advance_amount, balance_amount, payment_status = advance_split(total_amount, advance_percentage)
    discount_amount, gst_amount = discount_and_gst(total_amount, discount_percentage, gst_percentage)

    order = Order(
        customer_name=data["customer_name"].strip(),
        customer_email=data.get("customer_email"),
        contact_number=data.get("contact_number"),
        delivery_address=data.get("delivery_address"),
        order_description=data.get("order_description"),
        print_type=data.get("print_type"),
        filament_type=data.get("filament_type"),
        filament_color=data.get("filament_color"),
        estimated_quantity_units=data.get("estimated_quantity_units"),
        estimated_filament_usage_kg=data.get("estimated_filament_usage_kg"),
        order_date=data["order_date"],
        eta_delivery=data.get("eta_delivery"),
        final_delivery_date=data.get("final_delivery_date"),
        total_amount=total_amount,
        advance_percentage=advance_percentage,
        advance_amount=advance_amount,
        balance_amount=balance_amount,
        discount_percentage=discount_percentage,
        discount_amount=discount_amount,
        gst_percentage=gst_percentage,
        gst_amount=gst_amount,
        payment_status=payment_status,
        priority=normalize_choice(data.get("priority"), OrderPriority.NORMAL.value),
        # New orders always start in progress, whatever the caller sent
        status=OrderStatus.IN_PROGRESS.value,
        notes=data.get("notes"),
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info(f"Created order {order.id} for {order.customer_name}: total {total_amount:g}, {payment_status}")
    return order


def update_order(db: Session, order_id: int, changes: Dict[str, Any]) -> Order:
    order = get_order(db, order_id)

    for field in ("priority", "status"):
        if field in changes:
            default = OrderPriority.NORMAL.value if field == "priority" else order.status
            changes[field] = normalize_choice(changes[field], default)
    for field in ("advance_percentage", "discount_percentage", "gst_percentage"):
        if field in changes and changes[field] is None:
            changes[field] = 0
    for field in ("customer_name", "order_date", "total_amount"):
        if field in changes and changes[field] is None:
            changes.pop(field)
    for field in ("advance_amount", "balance_amount", "payment_status", "discount_amount", "gst_amount"):
        changes.pop(field, None)

    apply_changes(order, changes)

    if "total_amount" in changes and "advance_percentage" in changes:
        order.advance_amount, order.balance_amount, order.payment_status = advance_split(
            order.total_amount, order.advance_percentage
        )
        logger.info(f"Order {order.id} payment split re-seeded from advance percentage: {order.payment_status}")

    if {"total_amount", "discount_percentage", "gst_percentage"} & set(changes):
        order.discount_amount, order.gst_amount = discount_and_gst(
            order.total_amount, order.discount_percentage, order.gst_percentage
        )

    db.commit()
    db.refresh(order)
    logger.info(f"Updated order {order.id}: {sorted(changes)}")
    return order


def delete_order(db: Session, order_id: int) -> None:
    order = get_order(db, order_id)
    delete_row(db, order, "Order")
    logger.info(f"Deleted order {order_id}")


def recompute_payment_status(db: Session, order_id: int) -> Dict[str, Any]:
    """
    Re-derive advance/balance/payment_status from the payments recorded
    against the order. Does not commit.
    """
    order = get_order(db, order_id)
    db.flush()
    total_paid = float(
        db.query(func.coalesce(func.sum(Payment.amount), 0)).filter(Payment.order_id == order_id).scalar()
    )

    order.advance_amount = total_paid
    order.balance_amount = order.total_amount - total_paid
    order.payment_status = payment_status_for(total_paid, order.total_amount)
    db.flush()

    logger.info(
        f"Order {order_id} payment status recomputed: paid {total_paid:g}, "
        f"balance {order.balance_amount:g}, {order.payment_status}"
    )
    return {
        "payment_status": order.payment_status,
        "total_paid": total_paid,
        "balance_amount": order.balance_amount,
    }


def get_pending_receivables(db: Session) -> float:
    value = (
        db.query(func.sum(func.coalesce(Order.balance_amount, 0)))
        .filter(Order.payment_status != PaymentStatus.FULLY_PAID.value)
        .scalar()
    )
    return float(value or 0)
