from datetime import date
from decimal import Decimal
from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from medshop.database.base import Base, Money
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .user import User
    from .order_item import OrderItem

PENDING_STATUS = "Pending"


class Order(Base):
    """
    SQLAlchemy model for an order.

    `total_amount` is whatever the last writer stored (0 at creation, restamped by the
    purchase routine). Readers recompute the total from the order lines.
    """
    __tablename__ = "Orders"

    id: Mapped[int] = mapped_column("Id", Integer, primary_key=True, autoincrement=True)

    # Date only, no time component
    order_date: Mapped[date] = mapped_column("OrderDate", Date, nullable=False)

    total_amount: Mapped[Decimal] = mapped_column("TotalAmount", Money, nullable=False, default=Decimal("0"))

    # e.g. "Pending"
    status: Mapped[str] = mapped_column("Status", String(20), nullable=False, index=True)

    user_id: Mapped[int] = mapped_column(
        "UserId",
        Integer,
        ForeignKey("Users.Id"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    # Many-to-One: each order belongs to a single user
    user: Mapped["User"] = relationship(
        "User",
        back_populates="orders",
        lazy="raise"
    )

    # One-to-Many: order lines
    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        lazy="raise",
        order_by="OrderItem.id"
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id!r}, user_id={self.user_id!r}, order_date={self.order_date!r}, status={self.status!r})>"
