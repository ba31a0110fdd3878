from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from medshop.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .product import Product


class Category(Base):
    """Product category. A category that still has products cannot be deleted."""
    __tablename__ = "Categories"

    id: Mapped[int] = mapped_column("Id", Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column("Name", String(80), unique=True, nullable=False)

    description: Mapped[str | None] = mapped_column("Description", String(200), nullable=True)

    # --- Relationships ---

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="category",
        lazy="raise",
        order_by="Product.id"
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r})>"
