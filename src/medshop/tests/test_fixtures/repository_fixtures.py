"""Repository / routine / translator fixtures bound to the test session."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from medshop.exceptions.mapper import ErrorTranslator
from medshop.repositories import CategoryRepository, OrderRepository, ProductRepository, UserRepository
from medshop.routines import InProcessRoutines


@pytest.fixture
def category_repository(db_session: AsyncSession) -> CategoryRepository:
    return CategoryRepository(db_session)


@pytest.fixture
def product_repository(db_session: AsyncSession) -> ProductRepository:
    return ProductRepository(db_session)


@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def order_repository(db_session: AsyncSession) -> OrderRepository:
    return OrderRepository(db_session)


@pytest.fixture
def routines(db_session: AsyncSession) -> InProcessRoutines:
    return InProcessRoutines(db_session)


@pytest.fixture
def translator() -> ErrorTranslator:
    return ErrorTranslator(business_error_threshold=50000)
