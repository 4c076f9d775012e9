"""
訂單 (Order) 與購物車 (CartLine) 資料模型
unit_number / building_name / 品名 / 單價皆為下單當下的快照，不回查目錄
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ConfigDict

from .catalog import ItemType

OrderStatus = Literal["pending", "confirmed", "processing", "completed", "cancelled"]

ORDER_STATUSES = ("pending", "confirmed", "processing", "completed", "cancelled")


class CartLine(BaseModel):
    """購物車明細（僅存在於房客端，不單獨保存）"""
    model_config = ConfigDict(validate_assignment=True)

    item_type: ItemType
    item_id: str = Field(..., min_length=1)
    name: str
    price: float = Field(..., ge=0, description="加入購物車當下的單價")
    quantity: int = Field(default=1, ge=1)
    notes: Optional[str] = None

    @property
    def key(self) -> tuple:
        return (self.item_type, self.item_id)


class OrderItem(BaseModel):
    """訂單明細"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    item_type: ItemType
    item_id: str
    name: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class Order(BaseModel):
    """完整訂單模型（含明細）"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    unit_id: str
    unit_number: str
    building_id: str
    building_name: Optional[str] = None
    status: OrderStatus = "pending"
    total_amount: float
    notes: Optional[str] = None
    order_items: List[OrderItem] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderStatusUpdate(BaseModel):
    """房東更新訂單狀態（任何狀態皆可互轉）"""
    status: OrderStatus


class GuestOrderRequest(BaseModel):
    """房客送出訂單"""
    unit_id: str = Field(..., min_length=1)
    notes: Optional[str] = Field(None, max_length=1000)
    items: List[CartLine] = Field(default_factory=list)
