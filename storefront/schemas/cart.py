from datetime import datetime
from pydantic import BaseModel, Field
from typing import List

# Request schema for adding an item to the cart
class CartAddItem(BaseModel):
    user_id: int
    product_id: int
    quantity: int = Field(gt=0)

# Request schema for updating cart item quantity
class CartUpdateItem(BaseModel):
    quantity: int = Field(gt=0)

# Response schema for a stored cart row
class CartItemOut(BaseModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: datetime

    class Config:
        from_attributes = True

# Product display data attached to a cart row
class CartProductOut(BaseModel):
    id: int
    name: str
    price: float
    stock_quantity: int
    images: List[str]

    class Config:
        from_attributes = True

# Cart row joined with its product
class CartLineOut(CartItemOut):
    product: CartProductOut
    line_total: float

# Price breakdown shown at checkout
class CartSummary(BaseModel):
    items_count: int
    subtotal: float
    tax: float
    shipping: float
    total: float
