from datetime import date

import pytest

from app.core.exceptions import BadRequestError, NotFoundError
from app.services import inventory, procurement


def stock_of(db, filament):
    return inventory.get_current_stock(db, filament.id)


def test_create_computes_total_and_starts_pending(make_procurement):
    p = make_procurement(quantity_kg=5, cost_per_kg=1100, payment_status="PAID")

    assert p.total_amount == pytest.approx(5500)
    assert p.status == "pending"
    assert p.payment_status == "paid"
    assert p.final_delivery_date is None


def test_order_date_defaults_to_today(make_procurement):
    assert make_procurement(order_date=None).order_date == date.today()


def test_create_requires_known_vendor_and_filament(db, make_filament, make_vendor):
    filament = make_filament()
    vendor = make_vendor()
    base = {"quantity_kg": 1, "cost_per_kg": 10, "order_date": date(2024, 3, 1)}

    with pytest.raises(NotFoundError) as exc:
        procurement.create_procurement(db, {**base, "vendor_id": 999, "filament_id": filament.id})
    assert exc.value.message == "Vendor not found"

    with pytest.raises(NotFoundError) as exc:
        procurement.create_procurement(db, {**base, "vendor_id": vendor.id, "filament_id": 999})
    assert exc.value.message == "Filament not found"


def test_projection_fields(make_vendor, make_filament, make_procurement):
    vendor = make_vendor(name="Polymaker India")
    filament = make_filament(type="petg", brand="Polymaker", color="Teal")

    p = make_procurement(vendor=vendor, filament=filament)

    assert p.vendor_name == "Polymaker India"
    assert (p.filament_type, p.filament_brand, p.filament_color) == ("PETG", "Polymaker", "Teal")


class TestDelivery:
    def test_first_delivery_receives_stock(self, db, make_filament, make_procurement):
        filament = make_filament(stock_kg=2)
        p = make_procurement(filament=filament, quantity_kg=5)

        delivered = procurement.mark_delivered(db, p.id, {"final_delivery_date": date(2024, 3, 14)})

        assert delivered.status == "delivered"
        assert delivered.final_delivery_date == date(2024, 3, 14)
        assert stock_of(db, filament) == pytest.approx(7)

    def test_late_delivery_is_delayed(self, db, make_procurement):
        p = make_procurement(eta_delivery=date(2024, 3, 15))

        delivered = procurement.mark_delivered(db, p.id, {"final_delivery_date": date(2024, 3, 18)})

        assert delivered.status == "delayed"

    def test_delivery_on_eta_is_not_delayed(self, db, make_procurement):
        p = make_procurement(eta_delivery=date(2024, 3, 15))
        assert procurement.mark_delivered(db, p.id, {"final_delivery_date": date(2024, 3, 15)}).status == "delivered"

    def test_second_delivery_does_not_add_stock_again(self, db, make_filament, make_procurement):
        filament = make_filament()
        p = make_procurement(filament=filament, quantity_kg=5)

        procurement.mark_delivered(db, p.id, {"final_delivery_date": date(2024, 3, 14)})
        again = procurement.mark_delivered(db, p.id, {"final_delivery_date": date(2024, 3, 20)})

        assert stock_of(db, filament) == pytest.approx(5)
        assert again.final_delivery_date == date(2024, 3, 20)
        assert again.status == "delayed"

    def test_notes_after_delayed_delivery_keep_delayed(self, db, make_filament, make_procurement):
        filament = make_filament()
        p = make_procurement(filament=filament, quantity_kg=5, eta_delivery=date(2024, 3, 15))
        procurement.mark_delivered(db, p.id, {"final_delivery_date": date(2024, 3, 18)})

        updated = procurement.mark_delivered(db, p.id, {"notes": "Invoice filed"})

        assert updated.status == "delayed"
        assert updated.notes == "Invoice filed"
        assert stock_of(db, filament) == pytest.approx(5)

    def test_update_without_date_moves_no_stock(self, db, make_filament, make_procurement):
        filament = make_filament()
        p = make_procurement(filament=filament)

        updated = procurement.mark_delivered(db, p.id, {"tracking_number": "DTDC123"})

        assert updated.status == "delivered"
        assert updated.tracking_number == "DTDC123"
        assert stock_of(db, filament) == 0

    @pytest.mark.parametrize("changes", [{}, {"notes": None}, {"quantity_kg": 50}])
    def test_nothing_to_update(self, db, make_procurement, changes):
        p = make_procurement()

        with pytest.raises(BadRequestError) as exc:
            procurement.mark_delivered(db, p.id, changes)
        assert exc.value.message == "At least one field is required for update"

    def test_missing_procurement(self, db):
        with pytest.raises(NotFoundError):
            procurement.mark_delivered(db, 404, {"notes": "x"})

    def test_concurrent_deliveries_receive_once(self, session_factory, make_filament, make_procurement):
        filament = make_filament()
        p = make_procurement(filament=filament, quantity_kg=5)

        session_a, session_b = session_factory(), session_factory()
        try:
            # Both sessions see the procurement as undelivered
            assert procurement.get_procurement(session_b, p.id).final_delivery_date is None

            procurement.mark_delivered(session_a, p.id, {"final_delivery_date": date(2024, 3, 14)})
            procurement.mark_delivered(session_b, p.id, {"final_delivery_date": date(2024, 3, 14)})

            assert inventory.get_current_stock(session_a, filament.id) == pytest.approx(5)
        finally:
            session_a.close()
            session_b.close()


def test_pending_ordered_by_eta(db, make_procurement):
    later = make_procurement(eta_delivery=date(2024, 4, 1))
    sooner = make_procurement(eta_delivery=date(2024, 3, 20))
    done = make_procurement(eta_delivery=date(2024, 3, 5))
    procurement.mark_delivered(db, done.id, {"final_delivery_date": date(2024, 3, 5)})

    assert [p.id for p in procurement.get_pending(db)] == [sooner.id, later.id]


def test_delete_keeps_received_stock(db, make_filament, make_procurement):
    filament = make_filament()
    p = make_procurement(filament=filament, quantity_kg=3)
    procurement.mark_delivered(db, p.id, {"final_delivery_date": date(2024, 3, 10)})

    procurement.delete_procurement(db, p.id)

    with pytest.raises(NotFoundError):
        procurement.get_procurement(db, p.id)
    assert stock_of(db, filament) == pytest.approx(3)
