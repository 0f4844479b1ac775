# storefront/routes/admin.py
from fastapi import APIRouter, Depends, status
from typing import List
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.users import User
from storefront.schemas.user import UserCreate, UserResponse
from storefront.services import users as user_service
from storefront.utils.tokenJWT import role_required

router = APIRouter(tags=["Admin"])


# Retrieve every user account (getUsers, admin only)
@router.get("/users", response_model=List[UserResponse])
def get_all_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    return user_service.get_users(db)


# Create an account with any role (createUser, admin only)
@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    return user_service.create_user(db, payload)
