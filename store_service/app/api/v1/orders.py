from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ...models.session import Viewer
from ...services.orders_service import OrdersService, get_orders_service
from ..dependencies import get_viewer
from ..schemas.orders import MyOrderResponse, MyOrdersResponse

router = APIRouter()


@router.get("/me", response_model=MyOrdersResponse, summary="내 주문 목록")
def list_my_orders(
    viewer: Annotated[Viewer, Depends(get_viewer)],
    service: Annotated[OrdersService, Depends(get_orders_service)],
) -> MyOrdersResponse:
    views = service.list_my_orders(viewer.user_id)
    return MyOrdersResponse(
        total=len(views),
        items=[MyOrderResponse.from_view(v) for v in views],
    )
