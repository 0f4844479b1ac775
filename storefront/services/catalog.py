# storefront/services/catalog.py
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.exceptions import ConstraintViolationError, NotFoundError
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas.category import CategoryCreate
from storefront.schemas.product import ProductCreate, ProductUpdate
from storefront.services.common import commit_or_raise

logger = logging.getLogger(__name__)

# Columns that may be cleared with an explicit null in a patch
NULLABLE_FIELDS = {"description"}


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


# ---- CATEGORIES ----

def create_category(db: Session, payload: CategoryCreate) -> Category:
    category = Category(name=payload.name, description=payload.description)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def get_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.id).all()


def _ensure_category(db: Session, category_id: int):
    if not db.query(Category).filter(Category.id == category_id).first():
        raise ConstraintViolationError(f"Category with id {category_id} does not exist")


# ---- PRODUCTS ----

def create_product(db: Session, payload: ProductCreate) -> Product:
    _ensure_category(db, payload.category_id)

    product = Product(**payload.model_dump())
    db.add(product)
    commit_or_raise(db, "Product violates catalog constraints")
    db.refresh(product)
    logger.info("Product %s created in category %s", product.id, product.category_id)
    return product


def get_products(
    db: Session,
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    featured: Optional[bool] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> List[Product]:
    """List products newest first; every supplied filter must match."""
    query = db.query(Product)

    if category_id is not None:
        query = query.filter(Product.category_id == category_id)

    # Case-insensitive substring match on the name
    if search:
        query = query.filter(Product.name.ilike(_like_pattern(search), escape="\\"))

    if featured is not None:
        query = query.filter(Product.featured == featured)

    if limit is None:
        limit = settings.DEFAULT_PAGE_SIZE

    return query.order_by(Product.id.desc()).offset(offset).limit(limit).all()


def get_featured_products(db: Session) -> List[Product]:
    return db.query(Product).filter(Product.featured.is_(True)).order_by(Product.id.desc()).all()


def get_product_by_id(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def update_product(db: Session, product_id: int, payload: ProductUpdate) -> Product:
    """Patch a product. Fields absent from the payload keep their value."""
    product = get_product_by_id(db, product_id)
    if not product:
        raise NotFoundError("Product not found")

    changes = payload.model_dump(exclude_unset=True)
    changes = {k: v for k, v in changes.items() if v is not None or k in NULLABLE_FIELDS}

    if "category_id" in changes:
        _ensure_category(db, changes["category_id"])

    for field, value in changes.items():
        setattr(product, field, value)
    product.updated_at = datetime.now()

    commit_or_raise(db, "Product violates catalog constraints")
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: int) -> bool:
    """Delete a product, returning False when no such row existed.

    Cart rows holding the product go with it; order lines keep it alive.
    """
    product = get_product_by_id(db, product_id)
    if not product:
        return False

    db.delete(product)
    commit_or_raise(db, "Product is referenced by existing orders")
    logger.info("Product %s deleted", product_id)
    return True
