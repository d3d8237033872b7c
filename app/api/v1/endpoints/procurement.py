from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, List

from app.api.deps import check_payload, get_db
from app.schemas.procurement import Procurement, ProcurementCreate, ProcurementDelivery
from app.services import procurement as procurement_service
from app.utils.validators import validate_procurement

router = APIRouter()


@router.get("", response_model=List[Procurement])
def list_procurement(db: Session = Depends(get_db)) -> Any:
    return procurement_service.list_procurements(db)


@router.get("/pending/list", response_model=List[Procurement])
def pending_deliveries(db: Session = Depends(get_db)) -> Any:
    """Procurement not yet received, earliest ETA first"""
    return procurement_service.get_pending(db)


@router.get("/{procurement_id}", response_model=Procurement)
def get_procurement(procurement_id: int, db: Session = Depends(get_db)) -> Any:
    return procurement_service.get_procurement(db, procurement_id)


@router.post("", response_model=Procurement, status_code=status.HTTP_201_CREATED)
def create_procurement(procurement_in: ProcurementCreate, db: Session = Depends(get_db)) -> Any:
    data = check_payload(validate_procurement, procurement_in.model_dump(exclude_unset=True))
    return procurement_service.create_procurement(db, data)


@router.put("/{procurement_id}", response_model=Procurement)
def update_procurement(procurement_id: int, delivery_in: ProcurementDelivery, db: Session = Depends(get_db)) -> Any:
    """
    Record delivery details. Setting final_delivery_date for the first time
    receives the quantity into filament stock.
    """
    changes = check_payload(validate_procurement, delivery_in.model_dump(exclude_unset=True), is_update=True)
    return procurement_service.mark_delivered(db, procurement_id, changes)


@router.delete("/{procurement_id}")
def delete_procurement(procurement_id: int, db: Session = Depends(get_db)) -> Any:
    procurement_service.delete_procurement(db, procurement_id)
    return {"success": True, "message": "Procurement deleted successfully"}
