from fastapi import APIRouter, Depends, Request, Response, status

from medshop.mappers import to_order_dto
from medshop.repositories import OrderRepository
from medshop.schemas import CreateOrderRequest, OrderDto
from medshop.services import OrderService
from .dependencies import get_order_repository, get_order_service

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=list[OrderDto])
async def list_orders(repo: OrderRepository = Depends(get_order_repository)):
    return [to_order_dto(order) for order in await repo.list_orders()]


@router.get("/{order_id}", response_model=OrderDto)
async def get_order(order_id: int, repo: OrderRepository = Depends(get_order_repository)):
    return to_order_dto(await repo.get_order(order_id))


@router.post("", response_model=OrderDto, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: CreateOrderRequest,
    request: Request,
    response: Response,
    service: OrderService = Depends(get_order_service),
):
    """Insert a pending order (total 0) and return it with full detail."""
    order = await service.create_order(payload.user_id, payload.order_date)
    response.headers["Location"] = f"{request.app.state.settings.API_PREFIX}/orders/{order.id}"
    return to_order_dto(order)
