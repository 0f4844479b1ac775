# storefront/models/cart.py
from datetime import datetime
from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from storefront.database import Base


# Represents a single line (product + quantity) in a user's cart
class CartItem(Base):
    __tablename__ = "cart_items" # Table name

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False) # Owner of the cart
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), index=True, nullable=False)
    quantity = Column(Integer, CheckConstraint("quantity > 0"), nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    user = relationship("User", back_populates="cart_items")
    product = relationship("Product")

    __table_args__ = (
        # One row per product in a user's cart, repeated adds merge into it
        UniqueConstraint("user_id", "product_id", name="uq_cartitem_user_product"),
    )
