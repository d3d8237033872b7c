from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, List

from app.api.deps import check_payload, get_db
from app.schemas.vendor import Vendor, VendorCreate, VendorUpdate
from app.services import vendors as vendor_service
from app.utils.validators import validate_vendor

router = APIRouter()


@router.get("", response_model=List[Vendor])
def list_vendors(db: Session = Depends(get_db)) -> Any:
    return vendor_service.list_vendors(db)


@router.get("/{vendor_id}", response_model=Vendor)
def get_vendor(vendor_id: int, db: Session = Depends(get_db)) -> Any:
    return vendor_service.get_vendor(db, vendor_id)


@router.post("", response_model=Vendor, status_code=status.HTTP_201_CREATED)
def create_vendor(vendor_in: VendorCreate, db: Session = Depends(get_db)) -> Any:
    data = check_payload(validate_vendor, vendor_in.model_dump(exclude_unset=True))
    return vendor_service.create_vendor(db, data)


@router.put("/{vendor_id}", response_model=Vendor)
def update_vendor(vendor_id: int, vendor_in: VendorUpdate, db: Session = Depends(get_db)) -> Any:
    changes = check_payload(validate_vendor, vendor_in.model_dump(exclude_unset=True), is_update=True)
    return vendor_service.update_vendor(db, vendor_id, changes)


@router.delete("/{vendor_id}")
def delete_vendor(vendor_id: int, db: Session = Depends(get_db)) -> Any:
    vendor_service.delete_vendor(db, vendor_id)
    return {"success": True, "message": "Vendor deleted successfully"}
