from fastapi import APIRouter, Depends

from medshop.mappers import to_user_dto
from medshop.repositories import UserRepository
from medshop.schemas import UserDto
from .dependencies import get_user_repository

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserDto])
async def list_users(repo: UserRepository = Depends(get_user_repository)):
    return [to_user_dto(user) for user in await repo.list_users()]


@router.get("/{user_id}", response_model=UserDto)
async def get_user(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    return to_user_dto(await repo.get_user(user_id))
