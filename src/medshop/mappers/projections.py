"""
One-directional projections from loaded ORM graphs to response DTOs.

Each function reads only the relations its DTO needs; repositories are responsible
for eager-loading exactly those (relationships are `lazy="raise"`, so a missing
eager load fails loudly instead of issuing hidden queries).

Totals are always derived here: a line is `quantity * unit_price`, an order is the
sum of its lines. The stored columns are never echoed back.
"""

from decimal import Decimal

from medshop.models import Category, Order, OrderItem, Product, User
from medshop.schemas import (
    CategoryDto,
    ExpensiveProductBuyerDto,
    OrderDto,
    OrderItemDetailDto,
    OrderItemDto,
    OrderSummaryDto,
    ProductDetailDto,
    ProductDto,
    ProductSummaryDto,
    UserDto,
    UserSummaryDto,
)


def line_total(item: OrderItem) -> Decimal:
    return item.unit_price * item.quantity


def order_total(order: Order) -> Decimal:
    return sum((line_total(item) for item in order.items), Decimal("0"))


def to_category_dto(category: Category | None) -> CategoryDto | None:
    if category is None:
        return None
    return CategoryDto(id=category.id, name=category.name, description=category.description)


def to_user_summary_dto(user: User) -> UserSummaryDto:
    return UserSummaryDto(id=user.id, user_name=user.user_name, full_name=user.full_name)


def to_product_summary_dto(product: Product) -> ProductSummaryDto:
    return ProductSummaryDto(
        id=product.id,
        name=product.name,
        price=product.price,
        category=to_category_dto(product.category),
    )


def to_product_dto(product: Product) -> ProductDto:
    return ProductDto(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        quantity=product.quantity,
        sku=product.sku,
        image_url=product.image_url,
        category=to_category_dto(product.category),
    )


def to_order_summary_dto(order: Order, owner: User | None = None) -> OrderSummaryDto:
    """
    `owner` is the user we are already projecting (UserDto -> orders); passing it avoids
    touching `order.user`, which is not loaded on that path.
    """
    user = owner if owner is not None else order.user
    return OrderSummaryDto(
        id=order.id,
        order_date=order.order_date,
        total_amount=order_total(order),
        status=order.status,
        user=to_user_summary_dto(user),
    )


def to_order_item_dto(item: OrderItem) -> OrderItemDto:
    return OrderItemDto(
        id=item.id,
        order_id=item.order_id,
        quantity=item.quantity,
        unit_price=item.unit_price,
        total_price=line_total(item),
        order=to_order_summary_dto(item.order),
    )


def to_product_detail_dto(product: Product) -> ProductDetailDto:
    base = to_product_dto(product)
    return ProductDetailDto(
        **base.model_dump(),
        order_items=[to_order_item_dto(item) for item in product.order_items],
    )


def to_order_item_detail_dto(item: OrderItem) -> OrderItemDetailDto:
    return OrderItemDetailDto(
        id=item.id,
        quantity=item.quantity,
        unit_price=item.unit_price,
        total_price=line_total(item),
        product=to_product_summary_dto(item.product),
    )


def to_order_dto(order: Order) -> OrderDto:
    return OrderDto(
        id=order.id,
        order_date=order.order_date,
        total_amount=order_total(order),
        status=order.status,
        user=to_user_summary_dto(order.user),
        order_items=[to_order_item_detail_dto(item) for item in order.items],
    )


def to_user_dto(user: User) -> UserDto:
    return UserDto(
        id=user.id,
        user_name=user.user_name,
        full_name=user.full_name,
        email=user.email,
        orders=[to_order_summary_dto(order, owner=user) for order in user.orders],
    )


def to_expensive_product_buyer_dto(row) -> ExpensiveProductBuyerDto:
    """`row` is a result row (mapping) of the expensive-products function."""
    return ExpensiveProductBuyerDto(
        user_id=row["UserId"],
        user_name=row["UserName"],
        full_name=row["FullName"],
    )
