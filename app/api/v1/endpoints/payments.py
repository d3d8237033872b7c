from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, List

from app.api.deps import check_payload, get_db
from app.schemas.payment import Payment, PaymentCreate, PendingReceivables
from app.services import orders as order_service
from app.services import payments as payment_service
from app.utils.validators import validate_payment

router = APIRouter()


@router.get("", response_model=List[Payment])
def list_payments(db: Session = Depends(get_db)) -> Any:
    return payment_service.list_payments(db)


@router.get("/pending/receivables", response_model=PendingReceivables)
def pending_receivables(db: Session = Depends(get_db)) -> Any:
    """Outstanding balance across orders that are not fully paid"""
    return {"total_pending": order_service.get_pending_receivables(db)}


@router.get("/order/{order_id}", response_model=List[Payment])
def payments_for_order(order_id: int, db: Session = Depends(get_db)) -> Any:
    return payment_service.get_by_order_id(db, order_id)


@router.get("/{payment_id}", response_model=Payment)
def get_payment(payment_id: int, db: Session = Depends(get_db)) -> Any:
    return payment_service.get_payment(db, payment_id)


@router.post("", response_model=Payment, status_code=status.HTTP_201_CREATED)
def create_payment(payment_in: PaymentCreate, db: Session = Depends(get_db)) -> Any:
    data = check_payload(validate_payment, payment_in.model_dump(exclude_unset=True))
    return payment_service.create_payment(db, data)


@router.delete("/{payment_id}")
def delete_payment(payment_id: int, db: Session = Depends(get_db)) -> Any:
    payment_service.delete_payment(db, payment_id)
    return {"success": True, "message": "Payment deleted and order status updated"}
