from app.core.logging import setup_logging
from app.db.database import init_db, seed_first_admin
from app.db.session import SessionLocal


def main():
    setup_logging()
    print("Creating database tables...")
    init_db()
    print("Database tables created successfully!")

    db = SessionLocal()
    try:
        admin = seed_first_admin(db)
        if admin:
            print(f"Created super admin: {admin.email}")
    finally:
        db.close()

if __name__ == "__main__":
    main()
