# Importing every model registers its table on Base.metadata
from storefront.models.users import User, UserRole
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.models.cart import CartItem
from storefront.models.address import Address
from storefront.models.order import Order, OrderItem, OrderStatus
