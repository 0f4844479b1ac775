"""
Pytest configuration and fixtures for storefront tests.

Every test gets a fresh in-memory SQLite database; the API client shares it
through a get_db override.
"""
import os

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-only"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.database import Base, enable_sqlite_foreign_keys, get_db, init_db
from storefront.main import app
from storefront.models.address import Address
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.models.users import User, UserRole
from storefront.utils.hashing import get_password_hash
from storefront.utils.tokenJWT import token_for_user

TEST_PASSWORD = "password123"
# Hash once, bcrypt is deliberately slow
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture
def engine():
    """In-memory database with foreign keys enforced."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============================================================================
# Factories
# ============================================================================

@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(email=None, role=UserRole.CUSTOMER, first_name="Test", last_name="User"):
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            password_hash=TEST_PASSWORD_HASH,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_category(db):
    def _make(name="Electronics", description=None):
        category = Category(name=name, description=description)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make


@pytest.fixture
def make_product(db, make_category):
    default_category = {}

    def _make(name="Widget", price=10.0, stock_quantity=100, category=None, featured=False, images=None):
        if category is None:
            if "c" not in default_category:
                default_category["c"] = make_category()
            category = default_category["c"]
        product = Product(
            name=name,
            description=f"{name} description",
            price=price,
            stock_quantity=stock_quantity,
            category_id=category.id,
            featured=featured,
            images=images or [],
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def make_address(db):
    def _make(user, is_default=False, street="123 Test St"):
        address = Address(
            user_id=user.id,
            street=street,
            city="Test City",
            state="TS",
            zip_code="12345",
            country="USA",
            is_default=is_default,
        )
        db.add(address)
        db.commit()
        db.refresh(address)
        return address

    return _make


@pytest.fixture
def customer(make_user):
    return make_user(email="customer@example.com")


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", role=UserRole.ADMIN)


def auth_headers(user):
    return {"Authorization": f"Bearer {token_for_user(user)}"}


@pytest.fixture
def auth():
    return auth_headers
