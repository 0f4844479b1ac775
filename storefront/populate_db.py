"""Seed a demo catalog, an admin and a customer into an empty database.

Run with: python -m storefront.populate_db
"""
import os

from storefront.database import SessionLocal, init_db
from storefront.models.address import Address
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.models.users import User, UserRole
from storefront.schemas.order import OrderCreate, OrderItemCreate
from storefront.services.orders import create_order
from storefront.utils.hashing import get_password_hash

# Configuration
ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin1234")
CUSTOMER_EMAIL = "customer@example.com"
CUSTOMER_PASSWORD = "customer1234"

CATALOG = {
    ("Electronics", "Gadgets and accessories"): [
        # name, price, stock, featured
        ("Wireless Headphones", 89.99, 40, True),
        ("USB-C Charger", 19.99, 8, False),
        ("Bluetooth Speaker", 49.50, 25, True),
    ],
    ("Books", "Paperbacks and hardcovers"): [
        ("Python Cookbook", 39.90, 15, False),
        ("Design Patterns", 44.00, 5, True),
    ],
    ("Home", None): [
        ("Ceramic Mug", 9.99, 120, False),
        ("Desk Lamp", 29.00, 3, False),
    ],
}
# End Configuration


def _user(email, password, first_name, last_name, role):
    return User(
        email=email,
        password_hash=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
    )


def populate_database():
    """Insert demo rows unless the database already holds users."""
    init_db()
    session = SessionLocal()
    try:
        if session.query(User).count():
            print("Database already has users, skipping seed.")
            return

        admin = _user(ADMIN_EMAIL, ADMIN_PASSWORD, "Store", "Admin", UserRole.ADMIN)
        customer = _user(CUSTOMER_EMAIL, CUSTOMER_PASSWORD, "Jane", "Doe", UserRole.CUSTOMER)
        session.add_all([admin, customer])
        session.flush()

        products = []
        for (cat_name, cat_desc), rows in CATALOG.items():
            category = Category(name=cat_name, description=cat_desc)
            session.add(category)
            session.flush()
            for name, price, stock, featured in rows:
                product = Product(
                    name=name,
                    description=f"{name} from the {cat_name} department.",
                    price=price,
                    stock_quantity=stock,
                    category_id=category.id,
                    images=[f"https://picsum.photos/seed/{name.replace(' ', '-').lower()}/300/300"],
                    featured=featured,
                )
                session.add(product)
                products.append(product)

        address = Address(
            user_id=customer.id,
            street="123 Main St",
            city="Springfield",
            state="IL",
            zip_code="62701",
            country="United States",
            is_default=True,
        )
        session.add(address)
        session.commit()

        # One historical order so the dashboard has something to show
        create_order(session, OrderCreate(
            user_id=customer.id,
            shipping_address_id=address.id,
            items=[
                OrderItemCreate(product_id=products[0].id, quantity=1, price=products[0].price),
                OrderItemCreate(product_id=products[5].id, quantity=4, price=products[5].price),
            ],
        ))

        print(f"Inserted {len(products)} products, admin account: {ADMIN_EMAIL}")
    finally:
        session.close()


if __name__ == "__main__":
    populate_database()
