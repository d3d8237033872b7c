from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, List

from app.api.deps import check_payload, get_db
from app.schemas.print_usage import PrintUsage, PrintUsageCreate
from app.services import print_usage as print_usage_service
from app.utils.validators import validate_print_usage

router = APIRouter()


@router.get("", response_model=List[PrintUsage])
def list_print_usage(db: Session = Depends(get_db)) -> Any:
    return print_usage_service.list_print_usage(db)


@router.get("/order/{order_id}", response_model=List[PrintUsage])
def print_usage_for_order(order_id: int, db: Session = Depends(get_db)) -> Any:
    return print_usage_service.get_by_order_id(db, order_id)


@router.get("/{usage_id}", response_model=PrintUsage)
def get_print_usage(usage_id: int, db: Session = Depends(get_db)) -> Any:
    return print_usage_service.get_print_usage(db, usage_id)


@router.post("", response_model=PrintUsage, status_code=status.HTTP_201_CREATED)
def create_print_usage(usage_in: PrintUsageCreate, db: Session = Depends(get_db)) -> Any:
    data = check_payload(validate_print_usage, usage_in.model_dump(exclude_unset=True))
    return print_usage_service.create_print_usage(db, data)


@router.delete("/{usage_id}")
def delete_print_usage(usage_id: int, db: Session = Depends(get_db)) -> Any:
    print_usage_service.delete_print_usage(db, usage_id)
    return {"success": True, "message": "Print usage deleted and stock restored"}
