"""
Response shapes.

Summaries never embed the type that contains them, so every graph below is a tree:
    ProductDetailDto -> OrderItemDto -> OrderSummaryDto -> UserSummaryDto
    OrderDto -> OrderItemDetailDto -> ProductSummaryDto -> CategoryDto
    UserDto -> OrderSummaryDto -> UserSummaryDto
"""

from datetime import date

from .base import CamelModel, MoneyAmount


class CategoryDto(CamelModel):
    id: int
    name: str
    description: str | None = None


class UserSummaryDto(CamelModel):
    id: int
    user_name: str
    full_name: str | None = None


class ProductSummaryDto(CamelModel):
    id: int
    name: str
    price: MoneyAmount
    category: CategoryDto | None = None


class ProductDto(CamelModel):
    id: int
    name: str
    description: str | None = None
    price: MoneyAmount
    quantity: int
    sku: str | None = None
    image_url: str | None = None
    category: CategoryDto | None = None


class OrderSummaryDto(CamelModel):
    id: int
    order_date: date
    total_amount: MoneyAmount
    status: str
    user: UserSummaryDto


class OrderItemDto(CamelModel):
    """Order line as seen from a product: points back to its order, not to the product."""
    id: int
    order_id: int
    quantity: int
    unit_price: MoneyAmount
    total_price: MoneyAmount
    order: OrderSummaryDto


class ProductDetailDto(ProductDto):
    order_items: list[OrderItemDto] = []


class OrderItemDetailDto(CamelModel):
    """Order line as seen from an order: points at the product, not back to the order."""
    id: int
    quantity: int
    unit_price: MoneyAmount
    total_price: MoneyAmount
    product: ProductSummaryDto


class OrderDto(CamelModel):
    id: int
    order_date: date
    total_amount: MoneyAmount
    status: str
    user: UserSummaryDto
    order_items: list[OrderItemDetailDto] = []


class UserDto(CamelModel):
    id: int
    user_name: str
    full_name: str | None = None
    email: str | None = None
    orders: list[OrderSummaryDto] = []


class ExpensiveProductBuyerDto(CamelModel):
    user_id: int
    user_name: str
    full_name: str | None = None


class PurchaseResponse(CamelModel):
    message: str


class OrderCountResponse(CamelModel):
    count: int
