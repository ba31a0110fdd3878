"""
Product routes.

The fixed paths (`/purchase`, `/users-with-expensive-products`, `/count-orders`)
are declared before `/{product_id}` so they are matched first.
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from medshop.mappers import to_expensive_product_buyer_dto, to_product_detail_dto, to_product_dto
from medshop.repositories import ProductRepository
from medshop.schemas import (
    ExpensiveProductBuyerDto,
    OrderCountResponse,
    ProductDetailDto,
    ProductDto,
    PurchaseProductRequest,
    PurchaseResponse,
)
from medshop.services import ProductService
from .dependencies import get_product_repository, get_product_service

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductDto])
async def list_products(repo: ProductRepository = Depends(get_product_repository)):
    return [to_product_dto(product) for product in await repo.list_products()]


@router.post("/purchase", response_model=PurchaseResponse)
async def purchase_product(payload: PurchaseProductRequest, service: ProductService = Depends(get_product_service)):
    message = await service.purchase(payload.product_id, payload.user_id, payload.quantity, payload.order_id)
    return PurchaseResponse(message=message)


@router.get("/users-with-expensive-products", response_model=list[ExpensiveProductBuyerDto])
async def users_with_expensive_products(
    min_price: Decimal = Query(..., alias="minPrice"),
    category_id: int = Query(..., alias="categoryId"),
    service: ProductService = Depends(get_product_service),
):
    rows = await service.users_with_expensive_products(min_price, category_id)
    return [to_expensive_product_buyer_dto(row) for row in rows]


@router.get("/count-orders", response_model=OrderCountResponse)
async def count_orders(
    max_amount: Decimal = Query(..., alias="maxAmount"),
    service: ProductService = Depends(get_product_service),
):
    return OrderCountResponse(count=await service.count_orders(max_amount))


@router.get("/{product_id}", response_model=ProductDetailDto)
async def get_product(product_id: int, repo: ProductRepository = Depends(get_product_repository)):
    return to_product_detail_dto(await repo.get_product_detail(product_id))
