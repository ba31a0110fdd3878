"""
Contract of the database-side routines the storefront depends on.

The real implementations live in SQL Server (a trigger on Orders, the
`usp_PurchaseProduct` procedure and two functions). Callers only rely on the
parameter lists and result shapes declared here; business-rule failures surface as
database errors numbered >= 50000, whichever backend runs them.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession


class StoreRoutines(ABC):
    """
    Routine calls bound to one session. Implementations flush but never commit;
    the calling service owns the transaction.
    """

    name: str = "abstract"

    def __init__(self, db: AsyncSession):
        self.db = db

    @abstractmethod
    async def insert_pending_order(self, user_id: int, order_date: date) -> int:
        """Insert an order with status "Pending" and total 0; return its new id."""

    @abstractmethod
    async def purchase_product(self, product_id: int, user_id: int, quantity: int, order_id: int | None) -> None:
        """Buy `quantity` units of a product into `order_id` (None lets the routine pick/create the order)."""

    @abstractmethod
    async def users_with_expensive_products(self, min_price: Decimal, category_id: int) -> Sequence[Mapping[str, Any]]:
        """Rows with the keys `UserId`, `UserName`, `FullName`."""

    @abstractmethod
    async def count_orders(self, max_amount: Decimal) -> int:
        """Number of orders whose total is below `max_amount`."""
