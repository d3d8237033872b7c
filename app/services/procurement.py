"""
Procurement of filament from vendors.

Recording the first ``final_delivery_date`` on a procurement receives its
quantity into the filament's stock. The claim on that first delivery is a
conditional ``UPDATE ... WHERE final_delivery_date IS NULL``; only the caller
whose update matched a row increments stock, so re-saving a delivered
procurement (or two racing deliveries) adds the quantity exactly once.
"""

import logging
from datetime import date
from typing import Any, Dict, List

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError
from app.db.models.enums import ProcurementPaymentStatus, ProcurementStatus
from app.db.models.filament import Filament
from app.db.models.procurement import Procurement
from app.db.models.vendor import Vendor
from app.services import inventory
from app.services.common import apply_changes, delete_row, get_or_404, normalize_choice

logger = logging.getLogger(__name__)

DELIVERY_FIELDS = ("final_delivery_date", "invoice_number", "tracking_number", "notes", "payment_status")
CLEARABLE_FIELDS = ("invoice_number", "tracking_number", "notes")


def list_procurements(db: Session) -> List[Procurement]:
    return db.query(Procurement).order_by(Procurement.id.desc()).all()


def get_procurement(db: Session, procurement_id: int) -> Procurement:
    return get_or_404(db, Procurement, procurement_id, "Procurement")


def get_pending(db: Session) -> List[Procurement]:
    """Not yet received: status pending or no delivery date, earliest ETA first."""
    return (
        db.query(Procurement)
        .filter(or_(Procurement.status == ProcurementStatus.PENDING.value,
                    Procurement.final_delivery_date.is_(None)))
        .order_by(Procurement.eta_delivery.asc(), Procurement.id.asc())
        .all()
    )


def create_procurement(db: Session, data: Dict[str, Any]) -> Procurement:
    get_or_404(db, Vendor, data["vendor_id"], "Vendor")
    get_or_404(db, Filament, data["filament_id"], "Filament")

    quantity_kg = float(data["quantity_kg"])
    cost_per_kg = float(data["cost_per_kg"])
    procurement = Procurement(
        vendor_id=data["vendor_id"],
        filament_id=data["filament_id"],
        quantity_kg=quantity_kg,
        cost_per_kg=cost_per_kg,
        total_amount=quantity_kg * cost_per_kg,
        order_date=data.get("order_date") or date.today(),
        eta_delivery=data.get("eta_delivery"),
        invoice_number=data.get("invoice_number"),
        tracking_number=data.get("tracking_number"),
        notes=data.get("notes"),
        payment_status=normalize_choice(data.get("payment_status"), ProcurementPaymentStatus.PENDING.value),
        status=ProcurementStatus.PENDING.value,
    )
    db.add(procurement)
    db.commit()
    db.refresh(procurement)
    logger.info(
        f"Created procurement {procurement.id}: {quantity_kg:g} kg of filament "
        f"{procurement.filament_id} from vendor {procurement.vendor_id}"
    )
    return procurement


def mark_delivered(db: Session, procurement_id: int, changes: Dict[str, Any]) -> Procurement:
    """
    Apply a delivery update. Any update sets status to delivered, or delayed
    when the delivery date is later than the ETA. Stock is received only on
    the first time a delivery date is recorded.
    """
    changes = {k: v for k, v in changes.items() if k in DELIVERY_FIELDS and v is not None}
    if not changes:
        raise BadRequestError("At least one field is required for update")
    for field in CLEARABLE_FIELDS:
        if changes.get(field) == "":
            changes[field] = None

    procurement = get_procurement(db, procurement_id)
    if "payment_status" in changes:
        changes["payment_status"] = normalize_choice(changes["payment_status"], procurement.payment_status)

    try:
        received = False
        final_delivery_date = changes.pop("final_delivery_date", None)
        if final_delivery_date is not None:
            claim = db.execute(
                update(Procurement)
                .where(Procurement.id == procurement_id, Procurement.final_delivery_date.is_(None))
                .values(final_delivery_date=final_delivery_date)
                .execution_options(synchronize_session=False)
            )
            received = claim.rowcount == 1
            if received:
                inventory.adjust_stock(db, procurement.filament_id, procurement.quantity_kg)
            else:
                # Already delivered: a later date is a correction, not a second receipt
                db.execute(
                    update(Procurement)
                    .where(Procurement.id == procurement_id)
                    .values(final_delivery_date=final_delivery_date)
                    .execution_options(synchronize_session=False)
                )
            db.expire(procurement, ["final_delivery_date"])

        apply_changes(procurement, changes)
        delivered_on = procurement.final_delivery_date
        if delivered_on and procurement.eta_delivery and delivered_on > procurement.eta_delivery:
            procurement.status = ProcurementStatus.DELAYED.value
        else:
            procurement.status = ProcurementStatus.DELIVERED.value
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(procurement)
    if received:
        logger.info(
            f"Procurement {procurement.id} received on {procurement.final_delivery_date}: "
            f"+{procurement.quantity_kg:g} kg to filament {procurement.filament_id} ({procurement.status})"
        )
    else:
        logger.info(f"Procurement {procurement.id} updated without stock movement ({procurement.status})")
    return procurement


def delete_procurement(db: Session, procurement_id: int) -> None:
    """Removes the row only. Stock already received stays on hand."""
    procurement = get_procurement(db, procurement_id)
    delete_row(db, procurement, "Procurement")
    logger.info(f"Deleted procurement {procurement_id}")
