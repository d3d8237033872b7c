from datetime import date

import pytest

from app.core.exceptions import InsufficientStockError, NotFoundError
from app.db.models.filament import Filament
from app.db.models.print_usage import PrintUsage
from app.services import inventory, print_usage


def usage_data(order, filament, quantity_kg, **extra):
    data = {
        "order_id": order.id,
        "filament_id": filament.id,
        "quantity_used_kg": quantity_kg,
        "print_date": date(2024, 3, 11),
    }
    data.update(extra)
    return data


def test_usage_consumes_stock_and_prices_it(db, make_order, make_filament):
    order = make_order(customer_name="Meera Iyer", order_description="Drone frame")
    filament = make_filament(stock_kg=10, cost_per_kg=1200, type="abs", color="Red")

    usage = print_usage.create_print_usage(db, usage_data(order, filament, 1.5, print_duration_mins=240))

    assert inventory.get_current_stock(db, filament.id) == pytest.approx(8.5)
    assert usage.cost_consumed == pytest.approx(1800)
    assert usage.print_status == "success"
    assert usage.customer_name == "Meera Iyer"
    assert usage.order_description == "Drone frame"
    assert (usage.filament_type, usage.filament_color) == ("ABS", "Red")


def test_usage_can_take_exactly_what_is_left(db, make_order, make_filament):
    filament = make_filament(stock_kg=2)
    print_usage.create_print_usage(db, usage_data(make_order(), filament, 2))

    assert inventory.get_current_stock(db, filament.id) == 0


def test_insufficient_stock_writes_nothing(db, make_order, make_filament):
    order = make_order()
    filament = make_filament(stock_kg=2)

    with pytest.raises(InsufficientStockError) as exc:
        print_usage.create_print_usage(db, usage_data(order, filament, 3))

    assert exc.value.message == "Insufficient stock. Available: 2 kg"
    assert exc.value.available_kg == 2
    assert db.query(PrintUsage).count() == 0
    assert inventory.get_current_stock(db, filament.id) == pytest.approx(2)


def test_missing_order_or_filament(db, make_order, make_filament):
    order = make_order()
    filament = make_filament(stock_kg=5)

    with pytest.raises(NotFoundError) as exc:
        print_usage.create_print_usage(db, {"order_id": 999, "filament_id": filament.id, "quantity_used_kg": 1})
    assert exc.value.message == "Order not found"

    with pytest.raises(NotFoundError) as exc:
        print_usage.create_print_usage(db, {"order_id": order.id, "filament_id": 999, "quantity_used_kg": 1})
    assert exc.value.message == "Filament not found"


def test_delete_restores_stock(db, make_order, make_filament):
    filament = make_filament(stock_kg=4)
    usage = print_usage.create_print_usage(db, usage_data(make_order(), filament, 1.25))

    print_usage.delete_print_usage(db, usage.id)

    assert inventory.get_current_stock(db, filament.id) == pytest.approx(4)
    with pytest.raises(NotFoundError) as exc:
        print_usage.get_print_usage(db, usage.id)
    assert exc.value.message == "Print usage entry not found"


def test_print_date_defaults_to_today(db, make_order, make_filament):
    filament = make_filament(stock_kg=1)
    usage = print_usage.create_print_usage(db, {"order_id": make_order().id, "filament_id": filament.id,
                                                "quantity_used_kg": 0.5})
    assert usage.print_date == date.today()


def test_by_order(db, make_order, make_filament):
    order, other = make_order(), make_order()
    filament = make_filament(stock_kg=5)
    first = print_usage.create_print_usage(db, usage_data(order, filament, 1))
    print_usage.create_print_usage(db, usage_data(other, filament, 1))
    second = print_usage.create_print_usage(db, usage_data(order, filament, 1, print_status="failed",
                                                           failure_reason="Warping"))

    entries = print_usage.get_by_order_id(db, order.id)

    assert [u.id for u in entries] == [first.id, second.id]
    assert entries[1].print_status == "failed"


def test_concurrent_usage_cannot_overdraw(session_factory, make_order, make_filament):
    order = make_order()
    filament = make_filament(stock_kg=10)

    session_a, session_b = session_factory(), session_factory()
    try:
        # B reads 10 kg before A's usage lands
        stale = session_b.get(Filament, filament.id)
        assert stale.current_stock_kg == 10

        print_usage.create_print_usage(session_a, usage_data(order, filament, 6))

        with pytest.raises(InsufficientStockError) as exc:
            print_usage.create_print_usage(session_b, usage_data(order, filament, 6))
        assert exc.value.available_kg == pytest.approx(4)
    finally:
        session_a.close()
        session_b.close()

    check = session_factory()
    try:
        assert inventory.get_current_stock(check, filament.id) == pytest.approx(4)
        assert check.query(PrintUsage).count() == 1
    finally:
        check.close()


def test_insufficient_stock_message_keeps_full_precision(db, make_order, make_filament):
    filament = make_filament(stock_kg=123456.75)

    with pytest.raises(InsufficientStockError) as exc:
        print_usage.create_print_usage(db, usage_data(make_order(), filament, 200000))

    assert exc.value.message == "Insufficient stock. Available: 123456.75 kg"
