from .order_service import OrderService
from .product_service import ProductService, PURCHASE_SUCCESS_MESSAGE

__all__ = ["OrderService", "ProductService", "PURCHASE_SUCCESS_MESSAGE"]
