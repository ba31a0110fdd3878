"""
In-process implementation of the store routines.

Runs on any SQLAlchemy engine (SQLite in tests and local development) and enforces
the same rules as the SQL Server objects. Rule violations are raised as
`RaisedDatabaseError` with numbers in the application range, so they travel through
exactly the same translation path as RAISERROR coming back from the server.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Sequence

from sqlalchemy import func, insert, literal, select

from medshop.database.base import Money
from medshop.exceptions.error_classifier import RaisedDatabaseError
from medshop.models import Order, OrderItem, Product, User, PENDING_STATUS
from .base import StoreRoutines

logger = logging.getLogger(__name__)

# RAISERROR numbers used by the purchase procedure and the Orders trigger
INVALID_QUANTITY = 50001
PRODUCT_NOT_FOUND = 50002
USER_NOT_FOUND = 50003
INSUFFICIENT_STOCK = 50004
ORDER_NOT_FOUND = 50005
ORDER_OWNED_BY_OTHER_USER = 50006
ORDER_NOT_PENDING = 50007
DUPLICATE_PENDING_ORDER = 50010


class InProcessRoutines(StoreRoutines):

    name = "inprocess"

    # -----------------------
    # Orders insert (+ trigger)
    # -----------------------

    async def _pending_order_for(self, user_id: int, order_date: date) -> Order | None:
        result = await self.db.execute(
            select(Order)
            .where(Order.user_id == user_id, Order.order_date == order_date, Order.status == PENDING_STATUS)
            .order_by(Order.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def insert_pending_order(self, user_id: int, order_date: date) -> int:
        # Orders trigger: one pending order per user and day
        if await self._pending_order_for(user_id, order_date) is not None:
            raise RaisedDatabaseError(
                DUPLICATE_PENDING_ORDER,
                f"User {user_id} already has a pending order for {order_date.isoformat()}",
            )

        result = await self.db.execute(
            insert(Order)
            .values(user_id=user_id, order_date=order_date, total_amount=Decimal("0"), status=PENDING_STATUS)
            .returning(Order.id)
        )
        order_id = result.scalar_one()
        logger.debug("routine.insert_pending_order", extra={"order_id": order_id, "user_id": user_id})
        return order_id

    # -----------------------
    # usp_PurchaseProduct
    # -----------------------

    async def _target_order(self, user_id: int, order_id: int | None) -> Order:
        if order_id is None:
            today = date.today()
            order = await self._pending_order_for(user_id, today)
            if order is None:
                new_id = await self.insert_pending_order(user_id, today)
                order = await self.db.get(Order, new_id)
            return order

        order = await self.db.get(Order, order_id)
        if order is None:
            raise RaisedDatabaseError(ORDER_NOT_FOUND, f"Order {order_id} does not exist")
        if order.user_id != user_id:
            raise RaisedDatabaseError(ORDER_OWNED_BY_OTHER_USER, f"Order {order_id} belongs to another user")
        if order.status != PENDING_STATUS:
            raise RaisedDatabaseError(ORDER_NOT_PENDING, f"Order {order_id} is not pending (status: {order.status})")
        return order

    async def _order_lines(self, order_id: int) -> list[OrderItem]:
        result = await self.db.execute(
            select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        )
        return list(result.scalars().all())

    async def purchase_product(self, product_id: int, user_id: int, quantity: int, order_id: int | None) -> None:
        if quantity is None or quantity <= 0:
            raise RaisedDatabaseError(INVALID_QUANTITY, "Quantity must be greater than zero")

        product = await self.db.get(Product, product_id)
        if product is None:
            raise RaisedDatabaseError(PRODUCT_NOT_FOUND, f"Product {product_id} does not exist")

        if await self.db.get(User, user_id) is None:
            raise RaisedDatabaseError(USER_NOT_FOUND, f"User {user_id} does not exist")

        if product.quantity < quantity:
            raise RaisedDatabaseError(
                INSUFFICIENT_STOCK,
                f"Insufficient stock for product {product_id}: requested {quantity}, available {product.quantity}",
            )

        order = await self._target_order(user_id, order_id)

        # A line is extended only while the price it captured is still the current one
        lines = await self._order_lines(order.id)
        line = next(
            (item for item in lines if item.product_id == product_id and item.unit_price == product.price),
            None,
        )
        if line is None:
            line = OrderItem(
                order_id=order.id,
                product_id=product_id,
                quantity=quantity,
                unit_price=product.price,
                total_price=product.price * quantity,
            )
            self.db.add(line)
            lines.append(line)
        else:
            line.quantity += quantity
            line.total_price = line.unit_price * line.quantity

        product.quantity -= quantity
        order.total_amount = sum((item.unit_price * item.quantity for item in lines), Decimal("0"))

        await self.db.flush()
        logger.debug(
            "routine.purchase_product",
            extra={"product_id": product_id, "user_id": user_id, "order_id": order.id, "quantity": quantity},
        )

    # -----------------------
    # Functions
    # -----------------------

    async def users_with_expensive_products(self, min_price: Decimal, category_id: int) -> Sequence[Mapping[str, Any]]:
        query = (
            select(
                User.id.label("UserId"),
                User.user_name.label("UserName"),
                User.full_name.label("FullName"),
            )
            .join(Order, Order.user_id == User.id)
            .join(OrderItem, OrderItem.order_id == Order.id)
            .join(Product, Product.id == OrderItem.product_id)
            .where(Product.category_id == category_id, Product.price >= min_price)
            .distinct()
            .order_by(User.id)
        )
        result = await self.db.execute(query)
        return result.mappings().all()

    async def count_orders(self, max_amount: Decimal) -> int:
        totals = (
            select(
                Order.id.label("order_id"),
                func.coalesce(func.sum(OrderItem.quantity * OrderItem.unit_price), 0).label("total"),
            )
            .outerjoin(OrderItem, OrderItem.order_id == Order.id)
            .group_by(Order.id)
            .subquery()
        )
        result = await self.db.execute(
            select(func.count()).select_from(totals).where(totals.c.total < literal(max_amount, Money))
        )
        return int(result.scalar() or 0)
