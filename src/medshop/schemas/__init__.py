from .base import CamelModel, MoneyAmount
from .dto import (
    CategoryDto,
    ExpensiveProductBuyerDto,
    OrderCountResponse,
    OrderDto,
    OrderItemDetailDto,
    OrderItemDto,
    OrderSummaryDto,
    ProductDetailDto,
    ProductDto,
    ProductSummaryDto,
    PurchaseResponse,
    UserDto,
    UserSummaryDto,
)
from .requests import CreateOrderRequest, PurchaseProductRequest
