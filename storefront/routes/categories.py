from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.users import User
from storefront.schemas.category import CategoryCreate, CategoryOut
from storefront.services import catalog
from storefront.utils.tokenJWT import role_required

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryOut])
def get_categories(db: Session = Depends(get_db)):
    return catalog.get_categories(db)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    return catalog.create_category(db, payload)
