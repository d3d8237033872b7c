from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import Any

from app.api.deps import get_db
from app.schemas.invoice import Invoice
from app.services import invoice as invoice_service

router = APIRouter()


@router.get("/{order_id}", response_model=Invoice)
def get_invoice(order_id: int, db: Session = Depends(get_db)) -> Any:
    return invoice_service.get_invoice(db, order_id)


@router.get("/{order_id}/pdf")
def download_invoice_pdf(order_id: int, db: Session = Depends(get_db)):
    pdf = invoice_service.generate_invoice_pdf(db, order_id)
    return Response(
        content=pdf["content"].read(),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={pdf['filename']}"
        }
    )
