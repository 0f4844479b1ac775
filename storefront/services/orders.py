# storefront/services/orders.py
import logging
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from storefront.exceptions import ConstraintViolationError, NotFoundError
from storefront.models.address import Address
from storefront.models.cart import CartItem
from storefront.models.order import Order, OrderItem, OrderStatus
from storefront.models.product import Product
from storefront.schemas.order import OrderCreate, OrderItemCreate
from storefront.services.users import get_user_by_id

logger = logging.getLogger(__name__)


def order_total(items: Iterable[OrderItemCreate]) -> float:
    """Sum of price x quantity over the line items."""
    return round(sum(item.price * item.quantity for item in items), 2)


def _validate_references(db: Session, user_id: int, shipping_address_id: int, product_ids):
    if not get_user_by_id(db, user_id):
        raise ConstraintViolationError("User not found")

    address = db.query(Address).filter(Address.id == shipping_address_id).first()
    if not address or address.user_id != user_id:
        raise ConstraintViolationError("Shipping address not found")

    wanted = set(product_ids)
    if wanted:
        found = {pid for (pid,) in db.query(Product.id).filter(Product.id.in_(wanted)).all()}
        missing = sorted(wanted - found)
        if missing:
            raise ConstraintViolationError(f"Product not found: {missing[0]}")


def _place_order(db: Session, user_id: int, shipping_address_id: int, items: List[OrderItemCreate]) -> Order:
    # Caller owns the transaction
    order = Order(
        user_id=user_id,
        shipping_address_id=shipping_address_id,
        status=OrderStatus.PENDING,
        total_amount=order_total(items),
    )
    db.add(order)
    db.flush()

    db.add_all([
        OrderItem(order_id=order.id, product_id=it.product_id, quantity=it.quantity, price=it.price)
        for it in items
    ])
    return order


def _commit_order(db: Session, order: Order) -> Order:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.exception("Order creation failed")
        raise ConstraintViolationError("Order violates data constraints") from e
    except Exception:
        db.rollback()
        logger.exception("Order creation failed")
        raise
    db.refresh(order)
    return order


def create_order(db: Session, payload: OrderCreate) -> Order:
    """Create a pending order and its line items atomically.

    Prices come from the caller and are stored as-is; stock is left untouched.
    """
    _validate_references(db, payload.user_id, payload.shipping_address_id,
                         [it.product_id for it in payload.items])

    order = _place_order(db, payload.user_id, payload.shipping_address_id, payload.items)
    order = _commit_order(db, order)
    logger.info("Order %s placed by user %s, total %.2f", order.id, order.user_id, order.total_amount)
    return order


def checkout_cart(db: Session, user_id: int, shipping_address_id: int) -> Order:
    """Turn the user's cart into an order at current prices and empty the cart."""
    cart = (
        db.query(CartItem)
        .options(joinedload(CartItem.product))
        .filter(CartItem.user_id == user_id)
        .order_by(CartItem.id)
        .with_for_update(of=CartItem)
        .all()
    )
    if not cart:
        raise ConstraintViolationError("Cart is empty")

    items = [
        OrderItemCreate(product_id=ci.product_id, quantity=ci.quantity, price=ci.product.price)
        for ci in cart
    ]
    _validate_references(db, user_id, shipping_address_id, [it.product_id for it in items])

    order = _place_order(db, user_id, shipping_address_id, items)
    # Only the lines that went into the order; anything added meanwhile stays in the cart
    ordered_ids = [ci.id for ci in cart]
    db.query(CartItem).filter(CartItem.id.in_(ordered_ids)).delete(synchronize_session=False)
    order = _commit_order(db, order)
    logger.info("Cart of user %s checked out as order %s", user_id, order.id)
    return order


def get_orders(db: Session) -> List[Order]:
    return db.query(Order).order_by(Order.created_at.desc(), Order.id.desc()).all()


def get_user_orders(db: Session, user_id: int) -> List[Order]:
    return (
        db.query(Order)
        .filter(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def get_order_by_id(db: Session, order_id: int) -> Optional[Order]:
    return (
        db.query(Order)
        .options(joinedload(Order.shipping_address), joinedload(Order.items))
        .filter(Order.id == order_id)
        .first()
    )


def update_order_status(db: Session, order_id: int, status: OrderStatus) -> Order:
    """Overwrite the order status. Any transition between known states is allowed."""
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise NotFoundError("Order not found")

    old_status = order.status
    order.status = OrderStatus(status)
    order.updated_at = datetime.now()
    db.commit()
    db.refresh(order)

    logger.info("Order %s status %s -> %s", order.id, OrderStatus(old_status).value, order.status.value)
    return order
