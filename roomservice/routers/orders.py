"""
Order API Router
房東查看與處理訂單
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..schemas.context import OwnerContext
from ..schemas.order import Order, OrderStatusUpdate
from ..services.order_service import OrderService
from .deps import get_order_service, get_owner_context

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=List[Order])
def list_orders(
    unit_id: Optional[str] = None,
    building_id: Optional[str] = None,
    status: Optional[str] = None,
    ctx: OwnerContext = Depends(get_owner_context),
    service: OrderService = Depends(get_order_service),
):
    """取得訂單列表（新到舊）"""
    return service.list_orders(ctx, unit_id=unit_id, building_id=building_id, status=status)


@router.get("/{order_id}", response_model=Order)
def get_order(
    order_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: OrderService = Depends(get_order_service),
):
    return service.get_order(ctx, order_id)


@router.patch("/{order_id}/status", response_model=Order)
def set_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    ctx: OwnerContext = Depends(get_owner_context),
    service: OrderService = Depends(get_order_service),
):
    """更新訂單狀態"""
    return service.set_order_status(ctx, order_id, payload.status)


@router.delete("/{order_id}")
def delete_order(
    order_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: OrderService = Depends(get_order_service),
):
    service.delete_order(ctx, order_id)
    return {"success": True, "message": "Order deleted"}
