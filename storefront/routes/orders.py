# storefront/routes/orders.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.users import User
from storefront.schemas.order import (
    CheckoutRequest, OrderCreate, OrderDetailResponse, OrderResponse, OrderStatusPatch
)
from storefront.services import orders as order_service
from storefront.utils.tokenJWT import get_current_user, role_required, ensure_self_or_admin, is_admin

router = APIRouter(prefix="/orders", tags=["Orders"])


# Place an order from client-supplied line items (createOrder)
@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_admin(current_user, payload.user_id)
    return order_service.create_order(db, payload)


# Place an order from the stored cart and empty it
@router.post("/checkout", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def checkout(
    payload: CheckoutRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_admin(current_user, payload.user_id)
    return order_service.checkout_cart(db, payload.user_id, payload.shipping_address_id)


# All orders, newest first (getOrders, admin only)
@router.get("", response_model=List[OrderResponse])
def list_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    return order_service.get_orders(db)


# Order history of one user (getUserOrders)
@router.get("/user/{user_id}", response_model=List[OrderResponse])
def list_user_orders(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_admin(current_user, user_id)
    return order_service.get_user_orders(db, user_id)


# Get details of a specific order (getOrderById)
@router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = order_service.get_order_by_id(db, order_id)
    if not order or (order.user_id != current_user.id and not is_admin(current_user)):
        raise HTTPException(status_code=404, detail="Order not found or forbidden")
    return order


# Manually update order status (updateOrderStatus, admin only)
@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    payload: OrderStatusPatch,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    return order_service.update_order_status(db, order_id, payload.status)
