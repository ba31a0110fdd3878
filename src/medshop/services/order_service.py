import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from medshop.exceptions.base import ErrorSource
from medshop.exceptions.mapper import ErrorTranslator, db_error_handler
from medshop.models.order import Order
from medshop.repositories.order_repository import OrderRepository
from medshop.routines.base import StoreRoutines

logger = logging.getLogger(__name__)


class OrderService:
    """
    Order creation. The insert goes straight to the Orders table, so the table's
    trigger is the only validation: its rejections come back as business-rule errors
    tagged "Database Trigger".
    """

    def __init__(self, db: AsyncSession, routines: StoreRoutines, translator: ErrorTranslator):
        self.db = db
        self.routines = routines
        self.translator = translator
        self.orders = OrderRepository(db)

    async def create_order(self, user_id: int, order_date: date | None = None) -> Order:
        order_date = order_date or date.today()

        async with db_error_handler(self.db, self.translator, source=ErrorSource.TRIGGER, action="create_order"):
            order_id = await self.routines.insert_pending_order(user_id, order_date)
            await self.db.commit()

        logger.info(
            "order.create.success",
            extra={"order_id": order_id, "user_id": user_id, "order_date": order_date.isoformat()},
        )
        return await self.orders.get_order(order_id)
