from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, List

from app.api.deps import check_payload, get_db
from app.schemas.order import Order, OrderCreate, OrderUpdate
from app.services import orders as order_service
from app.utils.validators import validate_order

router = APIRouter()


@router.get("", response_model=List[Order])
def list_orders(db: Session = Depends(get_db)) -> Any:
    return order_service.list_orders(db)


@router.get("/active/list", response_model=List[Order])
def active_orders(db: Session = Depends(get_db)) -> Any:
    """Orders in progress or completed, newest first"""
    return order_service.get_active(db)


@router.get("/{order_id}", response_model=Order)
def get_order(order_id: int, db: Session = Depends(get_db)) -> Any:
    return order_service.get_order(db, order_id)


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
def create_order(order_in: OrderCreate, db: Session = Depends(get_db)) -> Any:
    data = check_payload(validate_order, order_in.model_dump(exclude_unset=True))
    return order_service.create_order(db, data)


@router.put("/{order_id}", response_model=Order)
def update_order(order_id: int, order_in: OrderUpdate, db: Session = Depends(get_db)) -> Any:
    changes = check_payload(validate_order, order_in.model_dump(exclude_unset=True), is_update=True)
    return order_service.update_order(db, order_id, changes)


@router.delete("/{order_id}")
def delete_order(order_id: int, db: Session = Depends(get_db)) -> Any:
    order_service.delete_order(db, order_id)
    return {"success": True, "message": "Order deleted successfully"}
