"""
FastAPI dependencies: per-request session, repositories, routines and services.

Everything is built from objects the app factory put on `app.state`; nothing here
reads process-wide configuration.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from medshop.database.session import get_async_session
from medshop.exceptions.mapper import ErrorTranslator
from medshop.repositories import CategoryRepository, OrderRepository, ProductRepository, UserRepository
from medshop.routines import StoreRoutines, build_routines
from medshop.services import OrderService, ProductService


def get_error_translator(request: Request) -> ErrorTranslator:
    return request.app.state.error_translator


def get_routines(request: Request, db: AsyncSession = Depends(get_async_session)) -> StoreRoutines:
    return build_routines(request.app.state.settings.routines_backend, db)


def get_category_repository(db: AsyncSession = Depends(get_async_session)) -> CategoryRepository:
    return CategoryRepository(db)


def get_product_repository(db: AsyncSession = Depends(get_async_session)) -> ProductRepository:
    return ProductRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_async_session)) -> UserRepository:
    return UserRepository(db)


def get_order_repository(db: AsyncSession = Depends(get_async_session)) -> OrderRepository:
    return OrderRepository(db)


def get_order_service(
    db: AsyncSession = Depends(get_async_session),
    routines: StoreRoutines = Depends(get_routines),
    translator: ErrorTranslator = Depends(get_error_translator),
) -> OrderService:
    return OrderService(db, routines, translator)


def get_product_service(
    db: AsyncSession = Depends(get_async_session),
    routines: StoreRoutines = Depends(get_routines),
    translator: ErrorTranslator = Depends(get_error_translator),
) -> ProductService:
    return ProductService(db, routines, translator)
