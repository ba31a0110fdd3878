"""
Repositories package.

Exposes one read repository per entity. Writes go through `medshop.routines`.
"""

from .base_repository import BaseRepository
from .category_repository import CategoryRepository
from .order_repository import OrderRepository
from .product_repository import ProductRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "OrderRepository",
    "ProductRepository",
    "UserRepository",
]
