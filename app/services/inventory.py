"""
Filament inventory and its stock ledger.

``current_stock_kg`` is never written through the generic update path. It
moves only through :func:`adjust_stock` (signed delta, no floor) and
:func:`consume_stock` (guarded decrement used by print usage). Both are single
``UPDATE`` statements evaluated by the database, so concurrent callers cannot
lose each other's changes. Neither commits: the calling operation owns the
transaction so the stock change lands together with the row that caused it.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.db.models.enums import QualityGrade
from app.db.models.filament import Filament
from app.db.models.vendor import Vendor
from app.services.common import apply_changes, delete_row, get_or_404, normalize_choice

logger = logging.getLogger(__name__)

DEFAULT_DIAMETER = "1.75mm"
DEFAULT_SPOOL_WEIGHT_KG = 1
DEFAULT_MIN_STOCK_ALERT_KG = 1
UNKNOWN_TYPE = "Unknown"


def _expire_stock(db: Session, filament_id: int) -> None:
    # Loaded instances would otherwise keep serving the pre-update value
    loaded = db.identity_map.get(Session.identity_key(Filament, filament_id))
    if loaded is not None:
        db.expire(loaded, ["current_stock_kg"])


def _read_stock(db: Session, filament_id: int) -> Optional[float]:
    return db.query(Filament.current_stock_kg).filter(Filament.id == filament_id).scalar()


def adjust_stock(db: Session, filament_id: int, delta_kg: float) -> Dict[str, Any]:
    """Add a signed delta to a filament's stock. Returns {id, delta_kg, new_stock}."""
    result = db.execute(
        update(Filament)
        .where(Filament.id == filament_id)
        .values(current_stock_kg=func.coalesce(Filament.current_stock_kg, 0) + delta_kg)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise NotFoundError("Filament")

    _expire_stock(db, filament_id)
    new_stock = _read_stock(db, filament_id)
    logger.info(f"Stock adjusted for filament {filament_id}: {delta_kg:+g} kg -> {new_stock:g} kg")
    return {"id": filament_id, "delta_kg": delta_kg, "new_stock": new_stock}


def consume_stock(db: Session, filament_id: int, quantity_kg: float) -> Optional[float]:
    """
    Decrement stock only if at least `quantity_kg` is on hand at the moment of
    the write. Returns the new stock, or None when the guard rejected it.
    """
    result = db.execute(
        update(Filament)
        .where(Filament.id == filament_id, Filament.current_stock_kg >= quantity_kg)
        .values(current_stock_kg=Filament.current_stock_kg - quantity_kg)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        return None

    _expire_stock(db, filament_id)
    new_stock = _read_stock(db, filament_id)
    logger.info(f"Stock consumed for filament {filament_id}: -{quantity_kg:g} kg -> {new_stock:g} kg")
    return new_stock


def get_current_stock(db: Session, filament_id: int) -> float:
    stock = _read_stock(db, filament_id)
    return stock or 0


def get_low_stock_alerts(db: Session) -> List[Filament]:
    threshold = func.coalesce(Filament.min_stock_alert_kg, DEFAULT_MIN_STOCK_ALERT_KG)
    return (
        db.query(Filament)
        .filter(func.coalesce(Filament.current_stock_kg, 0) <= threshold)
        .order_by(Filament.current_stock_kg.asc(), Filament.id.asc())
        .all()
    )


def get_inventory_value(db: Session) -> float:
    value = db.query(
        func.sum(func.coalesce(Filament.current_stock_kg, 0) * func.coalesce(Filament.cost_per_kg, 0))
    ).scalar()
    return float(value or 0)


def get_stock_by_type(db: Session) -> List[Dict[str, Any]]:
    rows = (
        db.query(Filament.type, func.sum(func.coalesce(Filament.current_stock_kg, 0)))
        .group_by(Filament.type)
        .order_by(Filament.type)
        .all()
    )
    return [{"type": filament_type or UNKNOWN_TYPE, "total_stock": float(total or 0)} for filament_type, total in rows]


# Filament CRUD

def list_filaments(db: Session) -> List[Filament]:
    return db.query(Filament).order_by(Filament.id.asc()).all()


def get_filament(db: Session, filament_id: int) -> Filament:
    return get_or_404(db, Filament, filament_id, "Filament")


def _check_vendor(db: Session, vendor_id: Optional[int]) -> None:
    if vendor_id is not None:
        get_or_404(db, Vendor, vendor_id, "Vendor")


def create_filament(db: Session, data: Dict[str, Any]) -> Filament:
    _check_vendor(db, data.get("vendor_id"))
    filament = Filament(
        type=data["type"].strip().upper(),
        brand=data["brand"],
        color=data["color"],
        diameter=data.get("diameter") or DEFAULT_DIAMETER,
        weight_per_spool_kg=data.get("weight_per_spool_kg") or DEFAULT_SPOOL_WEIGHT_KG,
        cost_per_kg=data["cost_per_kg"],
        vendor_id=data.get("vendor_id"),
        current_stock_kg=0,
        min_stock_alert_kg=data.get("min_stock_alert_kg") or DEFAULT_MIN_STOCK_ALERT_KG,
        print_temp_min=data.get("print_temp_min"),
        print_temp_max=data.get("print_temp_max"),
        bed_temp=data.get("bed_temp"),
        quality_grade=normalize_choice(data.get("quality_grade"), QualityGrade.STANDARD.value),
        is_active=data.get("is_active") is not False,
        notes=data.get("notes"),
    )
    db.add(filament)
    db.commit()
    db.refresh(filament)
    logger.info(f"Created filament {filament.id} ({filament.type} {filament.brand} {filament.color})")
    return filament


def update_filament(db: Session, filament_id: int, changes: Dict[str, Any]) -> Filament:
    filament = get_filament(db, filament_id)
    changes.pop("current_stock_kg", None)
    if changes.get("type"):
        changes["type"] = changes["type"].strip().upper()
    if "quality_grade" in changes:
        changes["quality_grade"] = normalize_choice(changes["quality_grade"], QualityGrade.STANDARD.value)
    for field in ("type", "brand", "color", "is_active", "diameter", "weight_per_spool_kg", "cost_per_kg"):
        if field in changes and changes[field] is None:
            changes.pop(field)
    if "vendor_id" in changes:
        _check_vendor(db, changes["vendor_id"])

    apply_changes(filament, changes)
    db.commit()
    db.refresh(filament)
    logger.info(f"Updated filament {filament.id}: {sorted(changes)}")
    return filament


def delete_filament(db: Session, filament_id: int) -> None:
    filament = get_filament(db, filament_id)
    delete_row(db, filament, "Filament")
    logger.info(f"Deleted filament {filament_id}")
