"""
Centralized access to all database models of the storefront.

Importing this package registers every table with `Base.metadata`, so
`from medshop.models import Product, Order` (or a bare `import medshop.models`)
is enough before calling `Base.metadata.create_all`.
"""

from .user import User
from .category import Category
from .product import Product
from .order import Order, PENDING_STATUS
from .order_item import OrderItem

__all__ = [
    "User",
    "Category",
    "Product",
    "Order",
    "OrderItem",
    "PENDING_STATUS",
]
