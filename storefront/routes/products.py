# storefront/routes/products.py
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.users import User
from storefront.schemas.common import ActionResult
from storefront.schemas.product import ProductCreate, ProductOut, ProductUpdate
from storefront.services import catalog
from storefront.utils.tokenJWT import role_required

router = APIRouter(prefix="/products", tags=["Products"])


# =========================
# PRODUCT LIST (getProducts)
# =========================
@router.get("", response_model=List[ProductOut])
def list_products(
    category_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None, description="Case-insensitive match on product name"),
    featured: Optional[bool] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return catalog.get_products(
        db, category_id=category_id, search=search, featured=featured, limit=limit, offset=offset
    )


# Declared before /{product_id} so "featured" is not parsed as an id
@router.get("/featured", response_model=List[ProductOut])
def featured_products(db: Session = Depends(get_db)):
    return catalog.get_featured_products(db)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = catalog.get_product_by_id(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# ADMIN
# =========================
@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    return catalog.create_product(db, payload)


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    return catalog.update_product(db, product_id, payload)


@router.delete("/{product_id}", response_model=ActionResult)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    return {"success": catalog.delete_product(db, product_id)}
