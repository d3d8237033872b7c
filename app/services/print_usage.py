import logging
from datetime import date
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import InsufficientStockError
from app.db.models.enums import PrintStatus
from app.db.models.filament import Filament
from app.db.models.order import Order
from app.db.models.print_usage import PrintUsage
from app.services import inventory
from app.services.common import get_or_404, normalize_choice

logger = logging.getLogger(__name__)


def list_print_usage(db: Session) -> List[PrintUsage]:
    return db.query(PrintUsage).order_by(PrintUsage.id.desc()).all()


def get_print_usage(db: Session, usage_id: int) -> PrintUsage:
    return get_or_404(db, PrintUsage, usage_id, "Print usage entry")


def get_by_order_id(db: Session, order_id: int) -> List[PrintUsage]:
    return db.query(PrintUsage).filter(PrintUsage.order_id == order_id).order_by(PrintUsage.id.asc()).all()


def create_print_usage(db: Session, data: Dict[str, Any]) -> PrintUsage:
    """
    Record filament consumed by an order and take it out of stock.

    Raises InsufficientStockError, with nothing written, when the filament
    holds less than the requested quantity, either at the initial read or at
    the moment of the guarded stock update.
    """
    get_or_404(db, Order, data["order_id"], "Order")
    filament = get_or_404(db, Filament, data["filament_id"], "Filament")

    quantity_kg = float(data["quantity_used_kg"])
    available = filament.current_stock_kg or 0
    if available < quantity_kg:
        logger.warning(
            f"Rejected print usage on filament {filament.id}: requested {quantity_kg:g} kg, available {available:g} kg"
        )
        raise InsufficientStockError(available, quantity_kg)

    usage = PrintUsage(
        order_id=data["order_id"],
        filament_id=filament.id,
        quantity_used_kg=quantity_kg,
        cost_consumed=quantity_kg * (filament.cost_per_kg or 0),
        print_date=data.get("print_date") or date.today(),
        print_duration_mins=data.get("print_duration_mins"),
        print_status=normalize_choice(data.get("print_status"), PrintStatus.SUCCESS.value),
        failure_reason=data.get("failure_reason"),
        notes=data.get("notes"),
    )
    try:
        db.add(usage)
        db.flush()
        if inventory.consume_stock(db, filament.id, quantity_kg) is None:
            db.rollback()
            available = inventory.get_current_stock(db, filament.id)
            logger.warning(
                f"Rejected print usage on filament {filament.id}: stock changed concurrently, "
                f"requested {quantity_kg:g} kg, available {available:g} kg"
            )
            raise InsufficientStockError(available, quantity_kg)
        db.commit()
    except InsufficientStockError:
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(usage)
    logger.info(f"Recorded print usage {usage.id}: {quantity_kg:g} kg of filament {filament.id} for order {usage.order_id}")
    return usage


def delete_print_usage(db: Session, usage_id: int) -> None:
    """Give the consumed quantity back to stock, then drop the entry."""
    usage = get_print_usage(db, usage_id)
    filament_id, quantity_kg = usage.filament_id, usage.quantity_used_kg
    try:
        inventory.adjust_stock(db, filament_id, quantity_kg)
        db.delete(usage)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Deleted print usage {usage_id}, restored {quantity_kg:g} kg to filament {filament_id}")
