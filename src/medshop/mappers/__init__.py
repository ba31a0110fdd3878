from .projections import (
    line_total,
    order_total,
    to_category_dto,
    to_expensive_product_buyer_dto,
    to_order_dto,
    to_order_item_detail_dto,
    to_order_item_dto,
    to_order_summary_dto,
    to_product_detail_dto,
    to_product_dto,
    to_product_summary_dto,
    to_user_dto,
    to_user_summary_dto,
)
