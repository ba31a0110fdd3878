"""
Product repository.

List view carries the category only; the detail view carries the sales history:
every order line, each with its order, and each order with its buyer and lines
(the lines are needed to compute the order total).
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from medshop.models.order import Order
from medshop.models.order_item import OrderItem
from medshop.models.product import Product
from .base_repository import BaseRepository

LIST_OPTIONS = (
    selectinload(Product.category),
)

DETAIL_OPTIONS = (
    selectinload(Product.category),
    selectinload(Product.order_items)
    .selectinload(OrderItem.order)
    .options(selectinload(Order.user), selectinload(Order.items)),
)


class ProductRepository(BaseRepository[Product]):

    def __init__(self, db: AsyncSession):
        super().__init__(Product, db)

    async def list_products(self) -> list[Product]:
        return await self.get_all(*LIST_OPTIONS)

    async def get_product_detail(self, product_id: int) -> Product:
        # The product's own lines come back again through Order.items. A refreshing load
        # would reset their `order` on the second pass, so start from an expired identity
        # map and load the graph once without populate_existing.
        await self.db.flush()
        self.db.expire_all()
        return await self.get_by_id_or_raise(product_id, *DETAIL_OPTIONS, populate_existing=False)
