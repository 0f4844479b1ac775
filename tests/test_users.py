import pytest

from storefront.exceptions import ConstraintViolationError
from storefront.models.users import UserRole
from storefront.schemas.user import UserCreate
from storefront.services import users as user_service
from storefront.utils.hashing import get_password_hash, verify_password


def _payload(email="jane@example.com", password="supersecret", role=UserRole.CUSTOMER):
    return UserCreate(email=email, password=password, first_name="Jane", last_name="Doe", role=role)


def test_create_user_stores_hash_not_password(db):
    user = user_service.create_user(db, _payload())

    assert user.id is not None
    assert user.role == UserRole.CUSTOMER
    assert user.password_hash != "supersecret"
    assert verify_password("supersecret", user.password_hash)
    assert user.created_at is not None


def test_create_user_normalizes_email(db):
    user = user_service.create_user(db, _payload(email="Jane@Example.COM"))
    assert user.email == "jane@example.com"


def test_create_user_duplicate_email_fails(db):
    user_service.create_user(db, _payload())

    with pytest.raises(ConstraintViolationError, match="already registered"):
        user_service.create_user(db, _payload(email="JANE@example.com"))


def test_create_admin_user(db):
    user = user_service.create_user(db, _payload(role=UserRole.ADMIN))
    assert user.role == UserRole.ADMIN


def test_login_user_success(db):
    created = user_service.create_user(db, _payload())

    user = user_service.login_user(db, "jane@example.com", "supersecret")
    assert user is not None
    assert user.id == created.id


def test_login_user_wrong_password_and_unknown_email_look_the_same(db):
    user_service.create_user(db, _payload())

    wrong_password = user_service.login_user(db, "jane@example.com", "not-the-password")
    unknown_email = user_service.login_user(db, "nobody@example.com", "supersecret")

    assert wrong_password is None
    assert unknown_email is None


def test_get_users_lists_everyone(db, make_user):
    first = make_user()
    second = make_user(role=UserRole.ADMIN)

    users = user_service.get_users(db)
    assert [u.id for u in users] == [first.id, second.id]


def test_verify_password_malformed_hash():
    assert verify_password("secret", "not-a-bcrypt-hash") is False


def test_hashes_are_salted():
    assert get_password_hash("same-password") != get_password_hash("same-password")
