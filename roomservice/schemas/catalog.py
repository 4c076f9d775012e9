"""
服務目錄 (Catalog) 資料模型
餐點 (menu) 與服務 (service) 為同一能力的兩種型別，以 item_type 明確區分
"""
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, ConfigDict, TypeAdapter

ItemType = Literal["menu", "service"]
MenuCategory = Literal["food", "drink", "dessert", "special", "other"]
ServiceCategory = Literal["housekeeping", "spa", "concierge", "maintenance"]

# item_type → 資料表
CATALOG_TABLES = {
    "menu": "menu_items",
    "service": "services",
}


class CatalogItemBase(BaseModel):
    """目錄項目共用欄位"""
    name: str = Field(..., min_length=1, description="名稱")
    description: Optional[str] = Field(None, description="說明")
    price: float = Field(..., ge=0, description="單價")
    is_available: bool = Field(default=True, description="是否供應中")
    building_id: Optional[str] = Field(
        None,
        description="所屬建築物，空值代表全域項目（所有建築物的房客皆可見）"
    )


class MenuItemCreate(CatalogItemBase):
    """建立餐點"""
    category: MenuCategory = Field(default="other", description="food/drink/dessert/special/other")
    image_url: Optional[str] = None


class ServiceItemCreate(CatalogItemBase):
    """建立服務"""
    category: ServiceCategory = Field(..., description="housekeeping/spa/concierge/maintenance")
    duration_minutes: int = Field(..., gt=0, description="服務時間（分鐘）")


class MenuItemUpdate(BaseModel):
    """更新餐點"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    is_available: Optional[bool] = None
    category: Optional[MenuCategory] = None
    image_url: Optional[str] = None


class ServiceItemUpdate(BaseModel):
    """更新服務"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    is_available: Optional[bool] = None
    category: Optional[ServiceCategory] = None
    duration_minutes: Optional[int] = Field(None, gt=0)


class MenuItem(MenuItemCreate):
    """完整餐點模型"""
    model_config = ConfigDict(from_attributes=True)

    item_type: Literal["menu"] = "menu"
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ServiceItem(ServiceItemCreate):
    """完整服務模型"""
    model_config = ConfigDict(from_attributes=True)

    item_type: Literal["service"] = "service"
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


CatalogItem = Annotated[Union[MenuItem, ServiceItem], Field(discriminator="item_type")]

_catalog_adapter = TypeAdapter(CatalogItem)


def parse_catalog_row(item_type: ItemType, row: dict) -> Union[MenuItem, ServiceItem]:
    """資料列沒有 item_type 欄位，由來源資料表決定型別"""
    return _catalog_adapter.validate_python({**row, "item_type": item_type})
