from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Any, List
import logging

from app.schemas.user import (
    User, UserCreate, UserUpdate, UserLogin, PasswordChange, LoginResponse
)
from app.db.models.user import User as DBUser
from app.core import security
from app.api.deps import get_db, get_current_user, get_super_admin

logger = logging.getLogger(__name__)

router = APIRouter()


def authenticate_user(db: Session, email: str, password: str) -> DBUser:
    user = db.query(DBUser).filter(DBUser.email == email.lower()).first()
    if not user:
        logger.warning(f"Login attempt with non-existent email: {email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    if not user.is_active:
        logger.warning(f"Login attempt with inactive user: {email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is deactivated. Contact admin.")
    if not security.verify_password(password, user.hashed_password):
        logger.warning(f"Login attempt with incorrect password for email: {email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return user


@router.post("/login", response_model=LoginResponse)
def login(*, db: Session = Depends(get_db), login_data: UserLogin) -> Any:
    """
    User login with email and password to get an access token
    """
    user = authenticate_user(db, login_data.email, login_data.password)
    user.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    logger.info(f"User logged in: {user.email}")
    return {"success": True, "token": security.create_user_token(user), "user": user}


@router.get("/me", response_model=User)
def read_me(current_user: DBUser = Depends(get_current_user)) -> Any:
    return current_user


@router.post("/change-password")
def change_password(
    *,
    db: Session = Depends(get_db),
    passwords: PasswordChange,
    current_user: DBUser = Depends(get_current_user)
) -> Any:
    if not security.verify_password(passwords.current_password, current_user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Current password is incorrect")
    current_user.hashed_password = security.get_password_hash(passwords.new_password)
    db.commit()
    logger.info(f"Password changed for {current_user.email}")
    return {"success": True, "message": "Password changed successfully"}


# User management (super admin only)

@router.get("/users", response_model=List[User])
def list_users(db: Session = Depends(get_db), admin: DBUser = Depends(get_super_admin)) -> Any:
    return db.query(DBUser).order_by(DBUser.created_at.desc(), DBUser.id.desc()).all()


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    *,
    db: Session = Depends(get_db),
    user_in: UserCreate,
    admin: DBUser = Depends(get_super_admin)
) -> Any:
    email = user_in.email.lower()
    if db.query(DBUser).filter(DBUser.email == email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    db_user = DBUser(
        email=email,
        name=user_in.name,
        hashed_password=security.get_password_hash(user_in.password),
        role=user_in.role,
        is_active=True,
    )
    try:
        db.add(db_user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Database integrity error creating user {email}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
    db.refresh(db_user)
    logger.info(f"User {db_user.email} ({db_user.role}) created by {admin.email}")
    return db_user


@router.put("/users/{user_id}", response_model=User)
def update_user(
    *,
    db: Session = Depends(get_db),
    user_id: int,
    user_in: UserUpdate,
    admin: DBUser = Depends(get_super_admin)
) -> Any:
    db_user = db.query(DBUser).filter(DBUser.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    update_data = user_in.model_dump(exclude_unset=True)
    password = update_data.pop("password", None)
    for field, value in update_data.items():
        if value is not None:
            setattr(db_user, field, value)
    if password:
        db_user.hashed_password = security.get_password_hash(password)

    db.commit()
    db.refresh(db_user)
    logger.info(f"User {db_user.email} updated by {admin.email}: {sorted(update_data)}")
    return db_user


@router.delete("/users/{user_id}")
def delete_user(
    *,
    db: Session = Depends(get_db),
    user_id: int,
    admin: DBUser = Depends(get_super_admin)
) -> Any:
    if user_id == admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account")
    db_user = db.query(DBUser).filter(DBUser.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    db.delete(db_user)
    db.commit()
    logger.info(f"User {user_id} deleted by {admin.email}")
    return {"success": True, "message": "User deleted"}
