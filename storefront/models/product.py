# storefront/models/product.py
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Numeric, Boolean, DateTime, JSON, ForeignKey, CheckConstraint
)
from sqlalchemy.orm import relationship
from storefront.database import Base

# Model Product
# A single catalog entry. Price is kept as numeric(10,2) in the database
# and read back as float; stock is a plain counter, never decremented by orders.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)

    price = Column(Numeric(10, 2, asdecimal=False), CheckConstraint("price > 0"), nullable=False)
    stock_quantity = Column(Integer, CheckConstraint("stock_quantity >= 0"), nullable=False)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    # List of image URLs
    images = Column(JSON, nullable=False, default=list)
    featured = Column(Boolean, nullable=False, default=False, index=True)

    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)

    category = relationship("Category", back_populates="products")
