from typing import List

from sqlalchemy.orm import Session

from storefront.exceptions import ConstraintViolationError
from storefront.models.address import Address
from storefront.services.users import get_user_by_id
from storefront.schemas.address import AddressCreate


def create_address(db: Session, payload: AddressCreate) -> Address:
    if not get_user_by_id(db, payload.user_id):
        raise ConstraintViolationError(f"User with id {payload.user_id} does not exist")

    address = Address(**payload.model_dump())
    db.add(address)
    db.commit()
    db.refresh(address)
    return address


def get_user_addresses(db: Session, user_id: int) -> List[Address]:
    # Default addresses first
    return (
        db.query(Address)
        .filter(Address.user_id == user_id)
        .order_by(Address.is_default.desc(), Address.id)
        .all()
    )
