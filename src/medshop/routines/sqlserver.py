import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Sequence

from sqlalchemy import text

from medshop.models.order import PENDING_STATUS
from .base import StoreRoutines

logger = logging.getLogger(__name__)

# NOCOUNT keeps the trigger's row counts out of the result stream; SCOPE_IDENTITY
# (not OUTPUT) because OUTPUT without INTO is rejected on tables with triggers.
INSERT_PENDING_ORDER_SQL = text(
    "SET NOCOUNT ON; "
    "INSERT INTO Orders (UserId, OrderDate, TotalAmount, Status) "
    "VALUES (:user_id, :order_date, 0, :status); "
    "SELECT CAST(SCOPE_IDENTITY() AS INT) AS Id"
)

PURCHASE_PRODUCT_SQL = text(
    "EXEC usp_PurchaseProduct @ProductId = :product_id, @UserId = :user_id, "
    "@Quantity = :quantity, @OrderId = :order_id"
)

USERS_WITH_EXPENSIVE_PRODUCTS_SQL = text(
    "SELECT * FROM GetUsersWithExpensiveProductsInCategory(:min_price, :category_id)"
)

COUNT_ORDERS_SQL = text("SELECT dbo.COUNT_ORDERS(:money)")


class SqlServerRoutines(StoreRoutines):
    """Calls the trigger-guarded insert, the procedure and the functions owned by the database."""

    name = "sqlserver"

    async def insert_pending_order(self, user_id: int, order_date: date) -> int:
        result = await self.db.execute(
            INSERT_PENDING_ORDER_SQL,
            {"user_id": user_id, "order_date": order_date, "status": PENDING_STATUS},
        )
        order_id = result.scalar_one()
        logger.debug("routine.insert_pending_order", extra={"order_id": order_id, "user_id": user_id})
        return order_id

    async def purchase_product(self, product_id: int, user_id: int, quantity: int, order_id: int | None) -> None:
        # order_id=None binds as NULL, which the procedure reads as "no order given"
        await self.db.execute(
            PURCHASE_PRODUCT_SQL,
            {"product_id": product_id, "user_id": user_id, "quantity": quantity, "order_id": order_id},
        )

    async def users_with_expensive_products(self, min_price: Decimal, category_id: int) -> Sequence[Mapping[str, Any]]:
        result = await self.db.execute(
            USERS_WITH_EXPENSIVE_PRODUCTS_SQL,
            {"min_price": min_price, "category_id": category_id},
        )
        return result.mappings().all()

    async def count_orders(self, max_amount: Decimal) -> int:
        result = await self.db.execute(COUNT_ORDERS_SQL, {"money": max_amount})
        value = result.scalar()
        return int(value or 0)
