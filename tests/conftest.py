"""
Pytest configuration and fixtures.

Every test gets its own SQLite file under tmp_path so sessions opened by the
API client, the service layer and the race tests all see the same database.
"""
import os
import tempfile
from datetime import date

# Keep the module-level engine in app.db.session away from ./app.db
os.environ.setdefault("DATABASE_URL", f"sqlite:///{tempfile.gettempdir()}/ownproto_test_default.db")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.api.deps import get_db
from app.db.database import init_db
from app.db.session import make_engine
from app.main import app as fastapi_app
from app.services import inventory, orders, procurement, vendors


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield TestClient(fastapi_app, raise_server_exceptions=False)
    fastapi_app.dependency_overrides.clear()


# Factories

@pytest.fixture
def make_vendor(db):
    def _make(**overrides):
        data = {"name": "Filament House", "contact": "9876543210", "payment_terms": "net30"}
        data.update(overrides)
        return vendors.create_vendor(db, data)
    return _make


@pytest.fixture
def make_filament(db, make_vendor):
    def _make(stock_kg=0, **overrides):
        data = {"type": "pla", "brand": "eSun", "color": "Black", "cost_per_kg": 1200.0}
        data.update(overrides)
        filament = inventory.create_filament(db, data)
        if stock_kg:
            inventory.adjust_stock(db, filament.id, stock_kg)
            db.commit()
            db.refresh(filament)
        return filament
    return _make


@pytest.fixture
def make_order(db):
    def _make(**overrides):
        data = {
            "customer_name": "Asha Rao",
            "order_date": date(2024, 3, 10),
            "total_amount": 1000.0,
            "advance_percentage": 0,
        }
        data.update(overrides)
        return orders.create_order(db, data)
    return _make


@pytest.fixture
def make_procurement(db, make_vendor, make_filament):
    def _make(vendor=None, filament=None, **overrides):
        vendor = vendor or make_vendor()
        filament = filament or make_filament()
        data = {
            "vendor_id": vendor.id,
            "filament_id": filament.id,
            "quantity_kg": 5.0,
            "cost_per_kg": 1100.0,
            "order_date": date(2024, 3, 1),
            "eta_delivery": date(2024, 3, 15),
        }
        data.update(overrides)
        return procurement.create_procurement(db, data)
    return _make
