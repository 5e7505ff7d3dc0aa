from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.data.models import OrderItemModel, OrderModel, ProductModel
from app.domain.schemas import CartLine
from app.services.order_service import OrderService


def place(checkout_service, user_id, *lines):
    return checkout_service.checkout(
        user_id, [CartLine(product_id=p, quantity=q) for p, q in lines]
    )


@pytest.fixture()
def service(db):
    return OrderService(db)


def test_history_newest_first_with_totals(service, checkout_service, products):
    first = place(checkout_service, "u1", ("A", 1))
    second = place(checkout_service, "u1", ("C", 4), ("A", 2))
    place(checkout_service, "u2", ("C", 1))

    history = service.orders_with_details("u1")

    assert [o.order_id for o in history] == [second, first]
    assert history[0].total == Decimal("30.00")
    assert history[1].total == Decimal("10.00")
    assert [(i.product_id, i.quantity, i.line_total) for i in history[0].items] == [
        ("C", 4, Decimal("10.00")),
        ("A", 2, Decimal("20.00")),
    ]


def test_total_uses_current_price(db, service, checkout_service, products):
    place(checkout_service, "u1", ("A", 2))

    db.get(ProductModel, "A").price = Decimal("12.50")
    db.commit()

    [order] = service.orders_with_details("u1")
    assert order.total == Decimal("25.00")


def test_deleted_product_becomes_placeholder(db, service, checkout_service, products):
    place(checkout_service, "u1", ("A", 1), ("C", 2))

    db.delete(db.get(ProductModel, "C"))
    db.commit()

    [order] = service.orders_with_details("u1")
    placeholder = order.items[1]
    assert placeholder.name == "Unknown Product"
    assert placeholder.price == Decimal("0")
    assert placeholder.image_url == "default.jpg"
    assert order.total == Decimal("10.00")


def test_order_without_items_totals_zero(db, service):
    db.add(OrderModel(id="empty", user_id="u1", created_at=datetime.now(timezone.utc)))
    db.commit()

    [order] = service.orders_with_details("u1")
    assert order.items == []
    assert order.total == Decimal("0")


def test_no_orders(service):
    assert service.orders_with_details("nobody") == []


def test_admin_report(db, service, checkout_service, products, users):
    place(checkout_service, "u1", ("A", 1))
    place(checkout_service, "u2", ("B", 1), ("C", 2))
    place(checkout_service, "guest-42", ("C", 1))

    report = service.all_orders_with_details()

    assert len(report.orders) == 3
    by_user = {o.user_id: o for o in report.orders}
    assert by_user["u1"].username == "ash"
    assert by_user["u1"].display_name == "Ash Ketchum"
    assert by_user["u1"].email == "ash@example.com"
    assert by_user["u2"].display_name == "misty"
    assert by_user["guest-42"].username == "Unknown User"
    assert report.grand_total == Decimal("22.50")


def test_admin_report_newest_first(db, service):
    now = datetime.now(timezone.utc)
    db.add_all(
        [
            OrderModel(id="old", user_id="u1", created_at=now - timedelta(days=2)),
            OrderModel(id="new", user_id="u2", created_at=now),
            OrderModel(id="mid", user_id="u1", created_at=now - timedelta(days=1)),
        ]
    )
    db.commit()

    report = service.all_orders_with_details()

    assert [o.order_id for o in report.orders] == ["new", "mid", "old"]
    assert report.grand_total == Decimal("0")


def test_get_order_checks_owner(service, checkout_service, products):
    order_id = place(checkout_service, "u1", ("A", 1))

    assert service.get_order(order_id, "u1").total == Decimal("10.00")
    with pytest.raises(PermissionError):
        service.get_order(order_id, "u2")
    with pytest.raises(ValueError):
        service.get_order("missing", "u1")


def test_delete_order_cascades_to_items(db, service, checkout_service, products, order_counts):
    order_id = place(checkout_service, "u1", ("A", 1), ("C", 1))
    assert order_counts() == (1, 2)

    service.delete_order(order_id)

    assert order_counts() == (0, 0)
    with pytest.raises(ValueError):
        service.delete_order(order_id)


def test_items_keep_cart_order(db, service, checkout_service, products):
    order_id = place(checkout_service, "u1", ("C", 1), ("B", 1), ("A", 1))

    assert [i.product_id for i in service.get_order(order_id, "u1").items] == ["C", "B", "A"]
    assert db.query(OrderItemModel).filter_by(order_id=order_id).count() == 3
