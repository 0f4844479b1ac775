from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.users import User
from storefront.schemas.address import AddressCreate, AddressOut
from storefront.services import addresses as address_service
from storefront.utils.tokenJWT import get_current_user, ensure_self_or_admin

router = APIRouter(prefix="/addresses", tags=["Addresses"])


# createAddress
@router.post("", response_model=AddressOut, status_code=status.HTTP_201_CREATED)
def create_address(
    payload: AddressCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_admin(current_user, payload.user_id)
    return address_service.create_address(db, payload)


# getUserAddresses
@router.get("/user/{user_id}", response_model=List[AddressOut])
def get_user_addresses(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_admin(current_user, user_id)
    return address_service.get_user_addresses(db, user_id)
