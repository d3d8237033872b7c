"""CSV reports. Each builder returns (filename, csv text)."""

import csv
from datetime import date
from io import StringIO
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from app.db.models.order import Order
from app.db.models.payment import Payment
from app.db.models.procurement import Procurement
from app.services import inventory

# (key, column title)
INVENTORY_COLUMNS = [
    ("type", "Type"),
    ("brand", "Brand"),
    ("color", "Color"),
    ("diameter", "Diameter"),
    ("current_stock_kg", "Stock (kg)"),
    ("cost_per_kg", "Cost per kg (INR)"),
    ("inventory_value", "Inventory Value (INR)"),
    ("vendor_name", "Vendor"),
]

PROCUREMENT_COLUMNS = [
    ("order_date", "Order Date"),
    ("vendor_name", "Vendor"),
    ("filament_type", "Filament Type"),
    ("filament_brand", "Brand"),
    ("filament_color", "Color"),
    ("quantity_kg", "Quantity (kg)"),
    ("cost_per_kg", "Cost per kg (INR)"),
    ("total_amount", "Total Amount (INR)"),
    ("eta_delivery", "ETA Delivery"),
    ("final_delivery_date", "Delivery Date"),
    ("invoice_number", "Invoice Number"),
    ("status", "Status"),
]

ORDER_COLUMNS = [
    ("id", "Order ID"),
    ("customer_name", "Customer"),
    ("contact_number", "Contact"),
    ("order_description", "Description"),
    ("print_type", "Print Type"),
    ("filament_type", "Filament Type"),
    ("filament_color", "Color"),
    ("order_date", "Order Date"),
    ("eta_delivery", "ETA"),
    ("final_delivery_date", "Delivery Date"),
    ("total_amount", "Total (INR)"),
    ("advance_amount", "Advance (INR)"),
    ("balance_amount", "Balance (INR)"),
    ("payment_status", "Payment Status"),
    ("status", "Order Status"),
]

PAYMENT_COLUMNS = [
    ("id", "Payment ID"),
    ("order_id", "Order ID"),
    ("customer_name", "Customer"),
    ("amount", "Amount (INR)"),
    ("payment_type", "Type"),
    ("payment_date", "Payment Date"),
    ("notes", "Notes"),
]

MONTHLY_SUMMARY_COLUMNS = [
    ("month", "Month"),
    ("total_orders", "Total Orders"),
    ("total_order_value", "Order Value (INR)"),
    ("total_advance_received", "Advance Received (INR)"),
    ("total_payments_received", "Payments Received (INR)"),
    ("total_procurement_spend", "Procurement Spend (INR)"),
]


def render_csv(columns: Sequence[Tuple[str, str]], rows: List[Dict[str, Any]]) -> str:
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow([title for _, title in columns])
    for row in rows:
        writer.writerow(["" if row.get(key) is None else row.get(key) for key, _ in columns])
    return output.getvalue()


def _row(obj, columns: Sequence[Tuple[str, str]]) -> Dict[str, Any]:
    return {key: getattr(obj, key, None) for key, _ in columns}


def inventory_csv(db: Session) -> Tuple[str, str]:
    rows = []
    for filament in inventory.list_filaments(db):
        row = _row(filament, INVENTORY_COLUMNS)
        row["current_stock_kg"] = filament.current_stock_kg or 0
        row["inventory_value"] = (filament.current_stock_kg or 0) * (filament.cost_per_kg or 0)
        rows.append(row)
    rows.sort(key=lambda r: (r["type"] or "", r["brand"] or ""))
    return "inventory_report.csv", render_csv(INVENTORY_COLUMNS, rows)


def procurement_csv(db: Session) -> Tuple[str, str]:
    records = db.query(Procurement).order_by(Procurement.order_date.desc(), Procurement.id.desc()).all()
    return "procurement_report.csv", render_csv(PROCUREMENT_COLUMNS, [_row(p, PROCUREMENT_COLUMNS) for p in records])


def orders_csv(db: Session) -> Tuple[str, str]:
    records = db.query(Order).order_by(Order.order_date.desc(), Order.id.desc()).all()
    return "orders_report.csv", render_csv(ORDER_COLUMNS, [_row(o, ORDER_COLUMNS) for o in records])


def payments_csv(db: Session) -> Tuple[str, str]:
    records = db.query(Payment).order_by(Payment.payment_date.desc(), Payment.id.desc()).all()
    return "payments_report.csv", render_csv(PAYMENT_COLUMNS, [_row(p, PAYMENT_COLUMNS) for p in records])


def _month_bounds(month: str) -> Tuple[date, date]:
    year, month_number = (int(part) for part in month.split("-"))
    start = date(year, month_number, 1)
    end = date(year + 1, 1, 1) if month_number == 12 else date(year, month_number + 1, 1)
    return start, end


def monthly_summary(db: Session, month: Optional[str] = None) -> Dict[str, Any]:
    """Totals for one calendar month (`YYYY-MM`, default current month)."""
    month = month or date.today().strftime("%Y-%m")
    start, end = _month_bounds(month)

    month_orders = db.query(Order).filter(Order.order_date >= start, Order.order_date < end).all()
    month_payments = db.query(Payment).filter(Payment.payment_date >= start, Payment.payment_date < end).all()
    month_procurement = db.query(Procurement).filter(Procurement.order_date >= start, Procurement.order_date < end).all()

    return {
        "month": month,
        "total_orders": len(month_orders),
        "total_order_value": sum(o.total_amount or 0 for o in month_orders),
        "total_advance_received": sum(o.advance_amount or 0 for o in month_orders),
        "total_payments_received": sum(p.amount or 0 for p in month_payments),
        "total_procurement_spend": sum(p.total_amount or 0 for p in month_procurement),
    }


def monthly_summary_csv(db: Session, month: Optional[str] = None) -> Tuple[str, str]:
    summary = monthly_summary(db, month)
    return f"monthly_summary_{summary['month']}.csv", render_csv(MONTHLY_SUMMARY_COLUMNS, [summary])
