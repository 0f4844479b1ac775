from pydantic import BaseModel, Field
from typing import List
from datetime import datetime

from storefront.models.order import OrderStatus
from storefront.schemas.address import AddressOut


# Line item as supplied by the client at checkout
class OrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)


# Input schema for placing an order with explicit line items
class OrderCreate(BaseModel):
    user_id: int
    shipping_address_id: int
    items: List[OrderItemCreate]


# Input schema for turning the stored cart into an order
class CheckoutRequest(BaseModel):
    user_id: int
    shipping_address_id: int


# Output schema for a stored order line
class OrderItemOut(BaseModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: float
    created_at: datetime

    class Config:
        from_attributes = True


# Output schema for the order header
class OrderResponse(BaseModel):
    id: int
    user_id: int
    status: OrderStatus
    total_amount: float
    shipping_address_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# Order with its shipping address and lines
class OrderDetailResponse(OrderResponse):
    shipping_address: AddressOut
    items: List[OrderItemOut]


# Schema for updating order status
class OrderStatusPatch(BaseModel):
    status: OrderStatus
