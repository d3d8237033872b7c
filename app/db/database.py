from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.db.base import Base
from app.db.session import engine, SessionLocal
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """
    Initialize database by creating all tables.
    This function imports all models to ensure they are registered with SQLAlchemy.
    """
    try:
        # Registers every table on Base.metadata
        from app.db.models import (  # noqa: F401
            User, Vendor, Filament, Order, Payment, Procurement, PrintUsage
        )

        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Database error during initialization: {str(e)}")
        raise
    except Exception as e:
        logger.error(f"Unexpected error during database initialization: {str(e)}", exc_info=True)
        raise


def seed_first_admin(db: Session, email=None, password=None):
    """
    Create the first super admin from settings when no super admin exists yet.
    Returns the created user, or None when nothing was done.
    """
    from app.core.security import get_password_hash
    from app.db.models.user import User
    from app.db.models.enums import UserRole

    email = email or settings.FIRST_ADMIN_EMAIL
    password = password or settings.FIRST_ADMIN_PASSWORD
    if not email or not password:
        logger.info("FIRST_ADMIN_EMAIL/FIRST_ADMIN_PASSWORD not set, skipping admin seed")
        return None

    existing = db.query(User).filter(User.role == UserRole.SUPER_ADMIN.value).first()
    if existing:
        logger.info(f"Super admin already exists: {existing.email}")
        return None

    user = User(
        email=email.strip().lower(),
        name="Administrator",
        hashed_password=get_password_hash(password),
        role=UserRole.SUPER_ADMIN.value,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Seeded super admin {user.email}")
    return user
