# storefront/routes/cart.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.cart import CartItem
from storefront.models.users import User
from storefront.schemas.cart import (
    CartAddItem, CartUpdateItem, CartItemOut, CartLineOut, CartProductOut, CartSummary
)
from storefront.schemas.common import ActionResult
from storefront.services import cart as cart_service
from storefront.utils.tokenJWT import get_current_user, ensure_self_or_admin, is_admin

router = APIRouter(prefix="/cart", tags=["Cart"])


def _ensure_item_access(db: Session, item_id: int, user: User):
    # Missing rows fall through, the service decides how to report them
    item = db.query(CartItem).filter(CartItem.id == item_id).first()
    if item and item.user_id != user.id and not is_admin(user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


def _line_to_out(item: CartItem) -> CartLineOut:
    return CartLineOut(
        id=item.id,
        user_id=item.user_id,
        product_id=item.product_id,
        quantity=item.quantity,
        created_at=item.created_at,
        product=CartProductOut.model_validate(item.product),
        line_total=cart_service.line_total(item),
    )


# Add a product, merging with an existing line (addToCart)
@router.post("/items", response_model=CartItemOut, status_code=status.HTTP_200_OK)
def add_to_cart(
    payload: CartAddItem,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_admin(current_user, payload.user_id)
    return cart_service.add_to_cart(db, payload)


# Change the quantity of one line (updateCartItem)
@router.put("/items/{item_id}", response_model=CartItemOut)
def update_cart_item(
    item_id: int,
    payload: CartUpdateItem,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _ensure_item_access(db, item_id, current_user)
    return cart_service.update_cart_item(db, item_id, payload.quantity)


# Remove one line, idempotent (removeFromCart)
@router.delete("/items/{item_id}", response_model=ActionResult)
def remove_from_cart(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _ensure_item_access(db, item_id, current_user)
    return {"success": cart_service.remove_from_cart(db, item_id)}


# List the user's cart with product data (getCartItems)
@router.get("/{user_id}", response_model=List[CartLineOut])
def get_cart_items(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_admin(current_user, user_id)
    return [_line_to_out(it) for it in cart_service.get_cart_items(db, user_id)]


# Subtotal, tax and shipping for the checkout screen
@router.get("/{user_id}/summary", response_model=CartSummary)
def get_cart_summary(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_admin(current_user, user_id)
    return cart_service.get_cart_summary(db, user_id)


# Empty the cart (clearCart)
@router.delete("/{user_id}", response_model=ActionResult)
def clear_cart(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_admin(current_user, user_id)
    return {"success": cart_service.clear_cart(db, user_id)}
