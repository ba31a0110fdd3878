from sqlalchemy.ext.asyncio import AsyncSession

from medshop.models.category import Category
from .base_repository import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Categories are flat: no relations are loaded for either list or detail."""

    def __init__(self, db: AsyncSession):
        super().__init__(Category, db)

    async def list_categories(self) -> list[Category]:
        return await self.get_all()

    async def get_category(self, category_id: int) -> Category:
        return await self.get_by_id_or_raise(category_id)
