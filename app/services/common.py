import logging
from typing import Any, Dict, Iterable, Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def get_or_404(db: Session, model: Type, obj_id: int, resource: str):
    obj = db.query(model).filter(model.id == obj_id).first()
    if obj is None:
        raise NotFoundError(resource)
    return obj


def apply_changes(obj, changes: Dict[str, Any], allowed: Optional[Iterable[str]] = None) -> None:
    """Copy patch values onto a model instance, optionally restricted to `allowed` keys."""
    for field, value in changes.items():
        if allowed is not None and field not in allowed:
            continue
        setattr(obj, field, value)


def normalize_choice(value: Optional[str], default: Optional[str] = None) -> Optional[str]:
    """Enum values are compared case-insensitively and stored lower-case."""
    if value is None or value == "":
        return default
    return str(value).strip().lower()


def delete_row(db: Session, obj, resource: str) -> None:
    """Delete without cascading; rows still referenced elsewhere are refused."""
    obj_id = obj.id
    try:
        db.delete(obj)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Refused to delete {resource} {obj_id}: still referenced")
        raise ConflictError(f"{resource} is referenced by other records and cannot be deleted")
