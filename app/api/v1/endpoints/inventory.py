from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, List

from app.api.deps import check_payload, get_db
from app.schemas.filament import Filament, FilamentCreate, FilamentUpdate
from app.services import inventory as inventory_service
from app.utils.validators import validate_filament

router = APIRouter()


@router.get("", response_model=List[Filament])
def list_filaments(db: Session = Depends(get_db)) -> Any:
    return inventory_service.list_filaments(db)


# Registered before /{filament_id} so the literal path wins
@router.get("/alerts/low-stock", response_model=List[Filament])
def low_stock_alerts(db: Session = Depends(get_db)) -> Any:
    """Filaments at or below their minimum stock alert level"""
    return inventory_service.get_low_stock_alerts(db)


@router.get("/{filament_id}", response_model=Filament)
def get_filament(filament_id: int, db: Session = Depends(get_db)) -> Any:
    return inventory_service.get_filament(db, filament_id)


@router.post("", response_model=Filament, status_code=status.HTTP_201_CREATED)
def create_filament(filament_in: FilamentCreate, db: Session = Depends(get_db)) -> Any:
    data = check_payload(validate_filament, filament_in.model_dump(exclude_unset=True))
    return inventory_service.create_filament(db, data)


@router.put("/{filament_id}", response_model=Filament)
def update_filament(filament_id: int, filament_in: FilamentUpdate, db: Session = Depends(get_db)) -> Any:
    changes = check_payload(validate_filament, filament_in.model_dump(exclude_unset=True), is_update=True)
    return inventory_service.update_filament(db, filament_id, changes)


@router.delete("/{filament_id}")
def delete_filament(filament_id: int, db: Session = Depends(get_db)) -> Any:
    inventory_service.delete_filament(db, filament_id)
    return {"success": True, "message": "Filament deleted successfully"}
