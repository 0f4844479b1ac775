# storefront/routes/auth.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.users import User, UserRole
from storefront.schemas import user as schemas
from storefront.services import users as user_service
from storefront.utils.tokenJWT import get_current_user, token_for_user

router = APIRouter(tags=["Auth"])
logger = logging.getLogger(__name__)

# Register a new customer account (createUser)
@router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserCreate, db: Session = Depends(get_db)):
    # Self-registration never grants admin
    payload = payload.model_copy(update={"role": UserRole.CUSTOMER})
    return user_service.create_user(db, payload)


# Authenticate user and issue JWT token (loginUser)
@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.UserLogin, db: Session = Depends(get_db)):
    user = user_service.login_user(db, payload.email, payload.password)

    # Unknown email and wrong password are reported the same way
    if user is None:
        logger.info("Failed login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return {"user": user, "access_token": token_for_user(user), "token_type": "bearer"}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
