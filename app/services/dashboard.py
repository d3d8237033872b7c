import logging
from collections import OrderedDict
from typing import Any, Dict, List

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.db.models.enums import ProcurementStatus
from app.db.models.order import Order
from app.db.models.payment import Payment
from app.db.models.procurement import Procurement
from app.services import inventory, orders, payments

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 10


def get_stats(db: Session) -> Dict[str, Any]:
    return {
        "inventoryValue": inventory.get_inventory_value(db),
        "stockByType": inventory.get_stock_by_type(db),
        "activeOrdersCount": len(orders.get_active(db)),
        "pendingReceivables": orders.get_pending_receivables(db),
        "totalRevenue": payments.get_total_revenue(db),
        "lowStockCount": len(inventory.get_low_stock_alerts(db)),
    }


def get_upcoming_etas(db: Session) -> Dict[str, List[Any]]:
    procurement = (
        db.query(Procurement)
        .filter(or_(Procurement.status == ProcurementStatus.PENDING.value,
                    Procurement.final_delivery_date.is_(None)))
        .filter(Procurement.eta_delivery.isnot(None))
        .order_by(Procurement.eta_delivery.asc(), Procurement.id.asc())
        .limit(UPCOMING_LIMIT)
        .all()
    )
    active_orders = (
        db.query(Order)
        .filter(Order.status.in_(orders.ACTIVE_STATUSES))
        .filter(Order.eta_delivery.isnot(None))
        .order_by(Order.eta_delivery.asc(), Order.id.asc())
        .limit(UPCOMING_LIMIT)
        .all()
    )
    return {"procurement": procurement, "orders": active_orders}


def _count_by(db: Session, column) -> Dict[str, int]:
    return {value: count for value, count in db.query(column, func.count()).group_by(column).order_by(column).all()}


def get_monthly_revenue(db: Session) -> List[Dict[str, Any]]:
    """Payments summed per YYYY-MM of payment_date, oldest month first."""
    totals: Dict[str, float] = OrderedDict()
    for payment_date, amount in db.query(Payment.payment_date, Payment.amount).order_by(Payment.payment_date).all():
        month = payment_date.strftime("%Y-%m")
        totals[month] = totals.get(month, 0) + (amount or 0)
    return [{"month": month, "revenue": revenue} for month, revenue in totals.items()]


def get_chart_data(db: Session) -> Dict[str, Any]:
    return {
        "ordersByStatus": _count_by(db, Order.status),
        "ordersByPaymentStatus": _count_by(db, Order.payment_status),
        "monthlyRevenue": get_monthly_revenue(db),
        "stockByType": inventory.get_stock_by_type(db),
    }
