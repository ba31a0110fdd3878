"""
Order repository.

Orders are always loaded fully: buyer, lines, each line's product and that
product's category. The stored `total_amount` is cross-checked against the sum of
the lines on every read; a disagreement is logged, and the computed value is the
one that reaches clients (see `medshop.mappers.order_total`).
"""

import logging
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from medshop.mappers.projections import order_total
from medshop.models.order import Order
from medshop.models.order_item import OrderItem
from medshop.models.product import Product
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

ORDER_OPTIONS = (
    selectinload(Order.user),
    selectinload(Order.items).selectinload(OrderItem.product).selectinload(Product.category),
)


class OrderRepository(BaseRepository[Order]):

    def __init__(self, db: AsyncSession):
        super().__init__(Order, db)

    def _check_totals(self, orders: Iterable[Order]) -> None:
        for order in orders:
            computed = order_total(order)
            if order.total_amount is not None and order.total_amount != computed:
                logger.warning(
                    "order.total_mismatch",
                    extra={
                        "order_id": order.id,
                        "stored_total": str(order.total_amount),
                        "computed_total": str(computed),
                    },
                )

    async def list_orders(self) -> list[Order]:
        orders = await self.get_all(*ORDER_OPTIONS)
        self._check_totals(orders)
        return orders

    async def get_order(self, order_id: int) -> Order:
        order = await self.get_by_id_or_raise(order_id, *ORDER_OPTIONS)
        self._check_totals([order])
        return order
