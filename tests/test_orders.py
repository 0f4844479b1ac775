from datetime import datetime, timedelta

import pytest

from storefront.exceptions import ConstraintViolationError, NotFoundError
from storefront.models.cart import CartItem
from storefront.models.order import Order, OrderItem, OrderStatus
from storefront.schemas.cart import CartAddItem
from storefront.schemas.order import OrderCreate, OrderItemCreate
from storefront.services import orders as order_service
from storefront.services.cart import add_to_cart


@pytest.fixture
def shopper(make_user, make_address):
    user = make_user()
    return user, make_address(user)


def _order(db, user, address, items):
    return order_service.create_order(db, OrderCreate(
        user_id=user.id, shipping_address_id=address.id, items=items,
    ))


def test_create_order_total_is_sum_of_lines(db, shopper, make_product):
    user, address = shopper
    p1 = make_product(name="A")
    p2 = make_product(name="B")

    order = _order(db, user, address, [
        OrderItemCreate(product_id=p1.id, quantity=2, price=19.99),
        OrderItemCreate(product_id=p2.id, quantity=1, price=5.50),
    ])

    assert order.status == OrderStatus.PENDING
    assert order.total_amount == pytest.approx(45.48)
    items = db.query(OrderItem).filter(OrderItem.order_id == order.id).all()
    assert len(items) == 2


def test_create_order_keeps_supplied_prices(db, shopper, make_product):
    user, address = shopper
    product = make_product(price=100.0, stock_quantity=3)

    order = _order(db, user, address, [OrderItemCreate(product_id=product.id, quantity=1, price=80.0)])

    line = db.query(OrderItem).filter(OrderItem.order_id == order.id).one()
    assert line.price == pytest.approx(80.0)
    db.refresh(product)
    # Stock is not decremented by placing an order
    assert product.stock_quantity == 3


def test_create_order_without_items(db, shopper):
    user, address = shopper

    order = _order(db, user, address, [])

    assert order.total_amount == 0
    assert db.query(OrderItem).filter(OrderItem.order_id == order.id).count() == 0


def test_create_order_unknown_address(db, make_user):
    user = make_user()

    with pytest.raises(ConstraintViolationError, match="address"):
        order_service.create_order(db, OrderCreate(user_id=user.id, shipping_address_id=999, items=[]))


def test_create_order_with_someone_elses_address(db, make_user, make_address):
    user = make_user()
    stranger_address = make_address(make_user())

    with pytest.raises(ConstraintViolationError):
        _order(db, user, stranger_address, [])


def test_create_order_unknown_product_creates_nothing(db, shopper, make_product):
    user, address = shopper
    product = make_product()

    with pytest.raises(ConstraintViolationError, match="Product not found"):
        _order(db, user, address, [
            OrderItemCreate(product_id=product.id, quantity=1, price=1.0),
            OrderItemCreate(product_id=999, quantity=1, price=1.0),
        ])

    assert db.query(Order).count() == 0
    assert db.query(OrderItem).count() == 0


def test_update_order_status(db, shopper):
    user, address = shopper
    order = _order(db, user, address, [])

    updated = order_service.update_order_status(db, order.id, OrderStatus.SHIPPED)

    assert updated.status == OrderStatus.SHIPPED
    assert updated.updated_at > updated.created_at


def test_update_order_status_allows_any_transition(db, shopper):
    user, address = shopper
    order = _order(db, user, address, [])

    order_service.update_order_status(db, order.id, OrderStatus.DELIVERED)
    reopened = order_service.update_order_status(db, order.id, OrderStatus.PENDING)

    assert reopened.status == OrderStatus.PENDING


def test_update_order_status_missing(db):
    with pytest.raises(NotFoundError, match="Order not found"):
        order_service.update_order_status(db, 999, OrderStatus.CONFIRMED)


def test_get_user_orders_newest_first(db, shopper, make_user, make_address):
    user, address = shopper
    older = _order(db, user, address, [])
    newer = _order(db, user, address, [])
    other = make_user()
    _order(db, other, make_address(other), [])

    older.created_at = datetime.now() - timedelta(days=1)
    db.commit()

    assert [o.id for o in order_service.get_user_orders(db, user.id)] == [newer.id, older.id]
    assert len(order_service.get_orders(db)) == 3


def test_get_order_by_id_with_address_and_items(db, shopper, make_product):
    user, address = shopper
    product = make_product()
    order = _order(db, user, address, [OrderItemCreate(product_id=product.id, quantity=3, price=2.0)])

    found = order_service.get_order_by_id(db, order.id)

    assert found.shipping_address.id == address.id
    assert found.shipping_address.street == address.street
    assert [(i.product_id, i.quantity) for i in found.items] == [(product.id, 3)]


def test_get_order_by_id_missing(db):
    assert order_service.get_order_by_id(db, 999) is None


def test_checkout_cart_uses_current_prices_and_clears_cart(db, shopper, make_product):
    user, address = shopper
    cheap = make_product(name="Cheap", price=2.5)
    pricey = make_product(name="Pricey", price=40.0)
    add_to_cart(db, CartAddItem(user_id=user.id, product_id=cheap.id, quantity=4))
    add_to_cart(db, CartAddItem(user_id=user.id, product_id=pricey.id, quantity=1))

    order = order_service.checkout_cart(db, user.id, address.id)

    assert order.total_amount == pytest.approx(50.0)
    assert db.query(CartItem).filter(CartItem.user_id == user.id).count() == 0
    lines = db.query(OrderItem).filter(OrderItem.order_id == order.id).order_by(OrderItem.id).all()
    assert [(l.product_id, l.quantity, l.price) for l in lines] == [
        (cheap.id, 4, 2.5),
        (pricey.id, 1, 40.0),
    ]


def test_checkout_leaves_lines_added_during_checkout(db, shopper, make_product, monkeypatch):
    user, address = shopper
    first = make_product(name="First")
    late = make_product(name="Late")
    add_to_cart(db, CartAddItem(user_id=user.id, product_id=first.id, quantity=1))

    validate = order_service._validate_references

    def validate_then_add_line(*args, **kwargs):
        validate(*args, **kwargs)
        db.add(CartItem(user_id=user.id, product_id=late.id, quantity=3))
        db.flush()

    monkeypatch.setattr(order_service, "_validate_references", validate_then_add_line)

    order = order_service.checkout_cart(db, user.id, address.id)

    ordered = [l.product_id for l in db.query(OrderItem).filter(OrderItem.order_id == order.id)]
    remaining = db.query(CartItem).filter(CartItem.user_id == user.id).all()
    assert ordered == [first.id]
    assert [(ci.product_id, ci.quantity) for ci in remaining] == [(late.id, 3)]


def test_checkout_empty_cart(db, shopper):
    user, address = shopper

    with pytest.raises(ConstraintViolationError, match="Cart is empty"):
        order_service.checkout_cart(db, user.id, address.id)


def test_checkout_bad_address_keeps_cart(db, shopper, make_product):
    user, _ = shopper
    add_to_cart(db, CartAddItem(user_id=user.id, product_id=make_product().id, quantity=1))

    with pytest.raises(ConstraintViolationError):
        order_service.checkout_cart(db, user.id, 999)

    assert db.query(CartItem).filter(CartItem.user_id == user.id).count() == 1
    assert db.query(Order).count() == 0


def test_order_total_helper():
    items = [
        OrderItemCreate(product_id=1, quantity=3, price=0.1),
        OrderItemCreate(product_id=2, quantity=1, price=9.99),
    ]
    assert order_service.order_total(items) == pytest.approx(10.29)
    assert order_service.order_total([]) == 0
