from datetime import date

from pydantic import Field

from .base import CamelModel


class PurchaseProductRequest(CamelModel):
    product_id: int
    user_id: int
    # Non-positive quantities are rejected by the service, not here, so the
    # client gets the same 400 "invalid operation" answer as any other misuse.
    quantity: int = 1
    order_id: int | None = None


class CreateOrderRequest(CamelModel):
    user_id: int
    order_date: date | None = Field(default=None, description="Defaults to today")
