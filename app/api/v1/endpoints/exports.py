from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import Optional
from io import StringIO

from app.api.deps import get_db
from app.services import exports as export_service

router = APIRouter()


def csv_response(filename: str, content: str) -> StreamingResponse:
    return StreamingResponse(
        StringIO(content),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/inventory")
def export_inventory(db: Session = Depends(get_db)):
    return csv_response(*export_service.inventory_csv(db))


@router.get("/procurement")
def export_procurement(db: Session = Depends(get_db)):
    return csv_response(*export_service.procurement_csv(db))


@router.get("/orders")
def export_orders(db: Session = Depends(get_db)):
    return csv_response(*export_service.orders_csv(db))


@router.get("/payments")
def export_payments(db: Session = Depends(get_db)):
    return csv_response(*export_service.payments_csv(db))


@router.get("/monthly-summary")
def export_monthly_summary(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$"),
    db: Session = Depends(get_db),
):
    return csv_response(*export_service.monthly_summary_csv(db, month))
