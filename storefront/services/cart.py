# storefront/services/cart.py
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager

from storefront.config import settings
from storefront.exceptions import ConstraintViolationError, NotFoundError
from storefront.models.cart import CartItem
from storefront.models.product import Product
from storefront.schemas.cart import CartAddItem, CartSummary
from storefront.services.users import get_user_by_id

logger = logging.getLogger(__name__)


def _merge_into_cart(db: Session, user_id: int, product_id: int, quantity: int) -> CartItem:
    # Lock the existing row so concurrent adds serialise where the backend supports it
    item = (
        db.query(CartItem)
        .filter(CartItem.user_id == user_id, CartItem.product_id == product_id)
        .with_for_update()
        .first()
    )
    if item:
        item.quantity += quantity
    else:
        item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
        db.add(item)
    db.flush()
    return item


def add_to_cart(db: Session, payload: CartAddItem) -> CartItem:
    """Add a product to the user's cart, merging with an existing line for it.

    Stock is not checked, the merged quantity may exceed it.
    """
    if not get_user_by_id(db, payload.user_id):
        raise ConstraintViolationError("User not found")

    if not db.query(Product).filter(Product.id == payload.product_id).first():
        raise ConstraintViolationError("Product not found")

    try:
        item = _merge_into_cart(db, payload.user_id, payload.product_id, payload.quantity)
        db.commit()
    except IntegrityError:
        # Another request inserted the (user, product) row first, merge into it
        db.rollback()
        logger.warning("Concurrent add for user %s product %s, retrying merge",
                       payload.user_id, payload.product_id)
        item = _merge_into_cart(db, payload.user_id, payload.product_id, payload.quantity)
        db.commit()

    db.refresh(item)
    return item


def get_cart_items(db: Session, user_id: int) -> List[CartItem]:
    return (
        db.query(CartItem)
        .options(contains_eager(CartItem.product))
        .join(CartItem.product)
        .filter(CartItem.user_id == user_id)
        .order_by(CartItem.id)
        .all()
    )


def update_cart_item(db: Session, item_id: int, quantity: int) -> CartItem:
    item = db.query(CartItem).filter(CartItem.id == item_id).first()
    if not item:
        raise NotFoundError("Cart item not found")

    item.quantity = quantity
    db.commit()
    db.refresh(item)
    return item


def remove_from_cart(db: Session, item_id: int) -> bool:
    """Delete one cart row. Returns False when there was nothing to delete."""
    deleted = db.query(CartItem).filter(CartItem.id == item_id).delete(synchronize_session=False)
    db.commit()
    return deleted > 0


def clear_cart(db: Session, user_id: int) -> bool:
    db.query(CartItem).filter(CartItem.user_id == user_id).delete(synchronize_session=False)
    db.commit()
    return True


def line_total(item: CartItem) -> float:
    return round(item.product.price * item.quantity, 2)


def get_cart_summary(db: Session, user_id: int) -> CartSummary:
    """Checkout totals at current catalog prices: flat tax, free shipping over a threshold."""
    items = get_cart_items(db, user_id)
    subtotal = round(sum(item.product.price * item.quantity for item in items), 2)

    tax = round(subtotal * settings.TAX_RATE, 2)
    if not items or subtotal >= settings.FREE_SHIPPING_THRESHOLD:
        shipping = 0.0
    else:
        shipping = settings.SHIPPING_COST

    return CartSummary(
        items_count=sum(item.quantity for item in items),
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=round(subtotal + tax + shipping, 2),
    )
