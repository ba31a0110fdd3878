from decimal import Decimal
from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from medshop.database.base import Base, Money
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .category import Category
    from .order_item import OrderItem


class Product(Base):
    """
    SQLAlchemy model for a product in the catalogue.

    `quantity` is the stock count; the purchase routine decrements it.
    Every product belongs to exactly one category (restrict on delete).
    """
    __tablename__ = "Products"
    __table_args__ = (
        CheckConstraint("Price >= 0", name="price_non_negative"),
    )

    id: Mapped[int] = mapped_column("Id", Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column("Name", String(120), nullable=False)

    description: Mapped[str | None] = mapped_column("Description", String(400), nullable=True)

    # Current list price (money)
    price: Mapped[Decimal] = mapped_column("Price", Money, nullable=False)

    # Units in stock
    quantity: Mapped[int] = mapped_column("Quantity", Integer, nullable=False, default=0)

    sku: Mapped[str | None] = mapped_column("SKU", String(40), nullable=True)

    image_url: Mapped[str | None] = mapped_column("ImageUrl", String(300), nullable=True)

    category_id: Mapped[int] = mapped_column(
        "CategoryId",
        Integer,
        ForeignKey("Categories.Id"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    # Many-to-One: each product sits in one category
    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="products",
        lazy="raise"
    )

    # One-to-Many: sales history
    order_items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="product",
        lazy="raise",
        order_by="OrderItem.id"
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id!r}, name={self.name!r}, price={self.price!r}, quantity={self.quantity!r})>"
