from fastapi import APIRouter

from . import categories, orders, products, users

api_router = APIRouter()
api_router.include_router(categories.router)
api_router.include_router(products.router)
api_router.include_router(users.router)
api_router.include_router(orders.router)
