import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.db.models.enums import PaymentTerms
from app.db.models.vendor import Vendor
from app.services.common import apply_changes, delete_row, get_or_404, normalize_choice

logger = logging.getLogger(__name__)


def list_vendors(db: Session) -> List[Vendor]:
    return db.query(Vendor).order_by(Vendor.id.asc()).all()


def get_vendor(db: Session, vendor_id: int) -> Vendor:
    return get_or_404(db, Vendor, vendor_id, "Vendor")


def create_vendor(db: Session, data: Dict[str, Any]) -> Vendor:
    vendor = Vendor(
        name=data["name"].strip(),
        contact=data.get("contact"),
        email=data.get("email"),
        address=data.get("address"),
        state=data.get("state"),
        pincode=data.get("pincode"),
        gst=data["gst"].upper() if data.get("gst") else None,
        payment_terms=normalize_choice(data.get("payment_terms"), PaymentTerms.ADVANCE.value),
        is_active=data.get("is_active") is not False,
        notes=data.get("notes"),
    )
    db.add(vendor)
    db.commit()
    db.refresh(vendor)
    logger.info(f"Created vendor {vendor.id} ({vendor.name})")
    return vendor


def update_vendor(db: Session, vendor_id: int, changes: Dict[str, Any]) -> Vendor:
    vendor = get_vendor(db, vendor_id)
    if "payment_terms" in changes:
        changes["payment_terms"] = normalize_choice(changes["payment_terms"], PaymentTerms.ADVANCE.value)
    if changes.get("gst"):
        changes["gst"] = changes["gst"].upper()
    for field in ("name", "is_active"):
        if changes.get(field) is None:
            changes.pop(field, None)
    apply_changes(vendor, changes)
    db.commit()
    db.refresh(vendor)
    logger.info(f"Updated vendor {vendor.id}: {sorted(changes)}")
    return vendor


def delete_vendor(db: Session, vendor_id: int) -> None:
    vendor = get_vendor(db, vendor_id)
    delete_row(db, vendor, "Vendor")
    logger.info(f"Deleted vendor {vendor_id}")
