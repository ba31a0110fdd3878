from fastapi import APIRouter, Depends

from medshop.mappers import to_category_dto
from medshop.repositories import CategoryRepository
from medshop.schemas import CategoryDto
from .dependencies import get_category_repository

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryDto])
async def list_categories(repo: CategoryRepository = Depends(get_category_repository)):
    return [to_category_dto(category) for category in await repo.list_categories()]


@router.get("/{category_id}", response_model=CategoryDto)
async def get_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    return to_category_dto(await repo.get_category(category_id))
