import logging
from decimal import Decimal
from typing import Any, Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from medshop.exceptions.base import ErrorSource, InvalidOperationError
from medshop.exceptions.mapper import ErrorTranslator, db_error_handler
from medshop.routines.base import StoreRoutines

logger = logging.getLogger(__name__)

PURCHASE_SUCCESS_MESSAGE = "Purchase completed successfully"


class ProductService:
    """Purchase procedure and the two catalogue functions."""

    def __init__(self, db: AsyncSession, routines: StoreRoutines, translator: ErrorTranslator):
        self.db = db
        self.routines = routines
        self.translator = translator

    async def purchase(self, product_id: int, user_id: int, quantity: int = 1, order_id: int | None = None) -> str:
        if quantity <= 0:
            logger.info(
                "product.purchase.invalid_quantity",
                extra={"product_id": product_id, "user_id": user_id, "quantity": quantity},
            )
            raise InvalidOperationError(
                f"Quantity must be greater than zero (got {quantity})", fields=["quantity"]
            )

        async with db_error_handler(self.db, self.translator, source=ErrorSource.STORED_PROCEDURE, action="purchase"):
            await self.routines.purchase_product(product_id, user_id, quantity, order_id)
            await self.db.commit()

        logger.info(
            "product.purchase.success",
            extra={"product_id": product_id, "user_id": user_id, "quantity": quantity, "order_id": order_id},
        )
        return PURCHASE_SUCCESS_MESSAGE

    async def users_with_expensive_products(self, min_price: Decimal, category_id: int) -> Sequence[Mapping[str, Any]]:
        async with db_error_handler(self.db, self.translator, source=ErrorSource.FUNCTION,
                                    action="users_with_expensive_products"):
            return await self.routines.users_with_expensive_products(min_price, category_id)

    async def count_orders(self, max_amount: Decimal) -> int:
        async with db_error_handler(self.db, self.translator, source=ErrorSource.FUNCTION, action="count_orders"):
            return await self.routines.count_orders(max_amount)
