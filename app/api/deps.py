from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from app.db.session import SessionLocal
from app.db.models.user import User as DBUser
from app.db.models.enums import UserRole
from app.core import security
from app.core.exceptions import RequestValidationFailed


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


security_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db)
) -> DBUser:
    """
    Get the current authenticated user from the JWT token.
    """
    try:
        token = credentials.credentials
    except AttributeError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = security.verify_token(token)
    if payload is None or payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(DBUser).filter(DBUser.email == payload["sub"]).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found. Please login again.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated. Contact admin.",
        )

    return user


def require_role(allowed_roles: List[str]):
    """
    Dependency factory to check if user has required role.
    """
    def role_checker(current_user: DBUser = Depends(get_current_user)) -> DBUser:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {', '.join(allowed_roles)}. Your role: {current_user.role}"
            )
        return current_user
    return role_checker


get_super_admin = require_role([UserRole.SUPER_ADMIN.value])


def check_payload(validator, data: Dict[str, Any], is_update: bool = False) -> Dict[str, Any]:
    """Run an entity validator over the fields the client sent; 400 on any error."""
    errors = validator(data, is_update)
    if errors:
        raise RequestValidationFailed(errors)
    return data
