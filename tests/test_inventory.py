import pytest

from app.core.exceptions import ConflictError, NotFoundError
from app.services import inventory, vendors


def test_create_filament_applies_defaults(db):
    filament = inventory.create_filament(db, {"type": "petg", "brand": "Polymaker", "color": "Blue", "cost_per_kg": 1500})

    assert filament.type == "PETG"
    assert filament.current_stock_kg == 0
    assert filament.diameter == "1.75mm"
    assert filament.weight_per_spool_kg == 1
    assert filament.min_stock_alert_kg == 1
    assert filament.quality_grade == "standard"
    assert filament.is_active is True


def test_update_never_touches_stock(db, make_filament):
    filament = make_filament(stock_kg=4)

    updated = inventory.update_filament(db, filament.id, {"current_stock_kg": 99, "color": "White", "type": "abs"})

    assert updated.current_stock_kg == 4
    assert updated.color == "White"
    assert updated.type == "ABS"


def test_adjust_stock_returns_new_level(db, make_filament):
    filament = make_filament()

    result = inventory.adjust_stock(db, filament.id, 2.5)

    assert result == {"id": filament.id, "delta_kg": 2.5, "new_stock": 2.5}
    # The loaded instance is refreshed, not left at the old value
    assert filament.current_stock_kg == 2.5
    db.commit()


def test_adjust_stock_has_no_floor(db, make_filament):
    filament = make_filament(stock_kg=1)

    result = inventory.adjust_stock(db, filament.id, -3)
    db.commit()

    assert result["new_stock"] == -2


def test_adjust_stock_missing_filament(db):
    with pytest.raises(NotFoundError) as exc:
        inventory.adjust_stock(db, 404, 1)
    assert exc.value.message == "Filament not found"


def test_consume_stock_guard(db, make_filament):
    filament = make_filament(stock_kg=3)

    assert inventory.consume_stock(db, filament.id, 5) is None
    assert inventory.consume_stock(db, filament.id, 3) == 0
    db.commit()


def test_low_stock_alerts(db, make_filament):
    empty = make_filament(color="Red")
    make_filament(color="Green", stock_kg=5, min_stock_alert_kg=2)
    at_threshold = make_filament(color="Grey", stock_kg=2, min_stock_alert_kg=2)

    alerts = inventory.get_low_stock_alerts(db)

    assert [f.id for f in alerts] == [empty.id, at_threshold.id]


def test_inventory_value_and_stock_by_type(db, make_filament):
    make_filament(type="pla", stock_kg=2, cost_per_kg=1000)
    make_filament(type="pla", color="White", stock_kg=3, cost_per_kg=800)
    make_filament(type="petg", stock_kg=1.5, cost_per_kg=1400)

    assert inventory.get_inventory_value(db) == pytest.approx(2000 + 2400 + 2100)
    assert inventory.get_stock_by_type(db) == [
        {"type": "PETG", "total_stock": 1.5},
        {"type": "PLA", "total_stock": 5.0},
    ]


def test_vendor_name_projection(db, make_vendor, make_filament):
    vendor = make_vendor(name="Robu")
    filament = make_filament(vendor_id=vendor.id)

    assert filament.vendor_name == "Robu"


def test_unknown_vendor_rejected(db):
    with pytest.raises(NotFoundError):
        inventory.create_filament(db, {"type": "pla", "brand": "eSun", "color": "Black", "cost_per_kg": 1, "vendor_id": 77})


def test_referenced_vendor_cannot_be_deleted(db, make_vendor, make_filament):
    vendor = make_vendor()
    make_filament(vendor_id=vendor.id)

    with pytest.raises(ConflictError):
        vendors.delete_vendor(db, vendor.id)
    assert vendors.get_vendor(db, vendor.id).name == vendor.name
