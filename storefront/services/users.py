# storefront/services/users.py
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.exceptions import ConstraintViolationError
from storefront.models.users import User
from storefront.schemas.user import UserCreate
from storefront.services.common import commit_or_raise
from storefront.utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def create_user(db: Session, payload: UserCreate) -> User:
    """Register an account. Only the bcrypt hash of the password is stored."""
    email = normalize_email(payload.email)

    if get_user_by_email(db, email):
        logger.warning("Registration rejected, email already in use")
        raise ConstraintViolationError("Email already registered")

    user = User(
        email=email,
        password_hash=get_password_hash(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
    )
    db.add(user)
    # Unique index on email catches a concurrent registration
    commit_or_raise(db, "Email already registered")
    db.refresh(user)
    logger.info("User %s registered with role %s", user.id, user.role.value)
    return user


def login_user(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user when the credentials match, None otherwise.

    An unknown email and a wrong password give the same result.
    """
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def get_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()
