from decimal import Decimal
from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from medshop.database.base import Base, Money
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .order import Order
    from .product import Product


class OrderItem(Base):
    """
    One order line: `quantity` units of a product at the price captured when it
    was bought (`unit_price`). `total_price` is stored but equals quantity x unit price.
    """
    __tablename__ = "OrderItems"
    __table_args__ = (
        CheckConstraint("Quantity > 0", name="quantity_positive"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, primary_key=True, autoincrement=True)

    quantity: Mapped[int] = mapped_column("Quantity", Integer, nullable=False)

    # Snapshot of Product.price at purchase time
    unit_price: Mapped[Decimal] = mapped_column("UnitPrice", Money, nullable=False)

    total_price: Mapped[Decimal] = mapped_column("TotalPrice", Money, nullable=False)

    order_id: Mapped[int] = mapped_column(
        "OrderId",
        Integer,
        ForeignKey("Orders.Id"),
        nullable=False,
        index=True
    )

    product_id: Mapped[int] = mapped_column(
        "ProductId",
        Integer,
        ForeignKey("Products.Id"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    order: Mapped["Order"] = relationship("Order", back_populates="items", lazy="raise")

    product: Mapped["Product"] = relationship("Product", back_populates="order_items", lazy="raise")

    def __repr__(self) -> str:
        return (
            f"<OrderItem(id={self.id!r}, order_id={self.order_id!r}, product_id={self.product_id!r}, "
            f"quantity={self.quantity!r}, unit_price={self.unit_price!r})>"
        )
