from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from medshop.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .order import Order


class User(Base):
    """
    SQLAlchemy model for a storefront customer.

    Owns zero or more orders. Users are never deleted by the application; the
    restrict-on-delete foreign key on Orders rejects it at the storage layer.
    """
    __tablename__ = "Users"

    id: Mapped[int] = mapped_column("Id", Integer, primary_key=True, autoincrement=True)

    # Login name (must be unique and non-null)
    user_name: Mapped[str] = mapped_column(
        "UserName",
        String(80),
        unique=True,
        nullable=False
    )

    full_name: Mapped[str | None] = mapped_column("FullName", String(120), nullable=True)

    email: Mapped[str | None] = mapped_column("Email", String(120), nullable=True)

    # --- Relationships ---

    # One-to-Many: A user can place many orders
    orders: Mapped[list["Order"]] = relationship(
        "Order",
        back_populates="user",
        lazy="raise",
        order_by="Order.id"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, user_name={self.user_name!r})>"
