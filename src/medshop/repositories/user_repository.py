from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from medshop.models.order import Order
from medshop.models.user import User
from .base_repository import BaseRepository

# Orders with their lines; the order's user is the one being loaded, so it is not re-joined
USER_OPTIONS = (
    selectinload(User.orders).selectinload(Order.items),
)


class UserRepository(BaseRepository[User]):

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def list_users(self) -> list[User]:
        return await self.get_all(*USER_OPTIONS)

    async def get_user(self, user_id: int) -> User:
        return await self.get_by_id_or_raise(user_id, *USER_OPTIONS)
