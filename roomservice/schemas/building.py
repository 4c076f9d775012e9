"""
建築物 (Building) 資料模型
每棟建築物只屬於一個帳號
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class BuildingBase(BaseModel):
    """建築物基礎模型"""
    name: str = Field(..., min_length=1, description="建築物名稱，例如：Harbor View Tower")
    address: str = Field(..., description="地址")
    total_units: int = Field(default=0, ge=0, description="房間總數")
    status: str = Field(
        default="active",
        pattern="^(active|inactive|maintenance)$",
        description="狀態：active/inactive/maintenance"
    )
    description: Optional[str] = Field(None, description="說明")


class BuildingCreate(BuildingBase):
    """建立建築物時使用的模型（owner 由登入身分決定，不接受輸入）"""
    pass


class BuildingUpdate(BaseModel):
    """更新建築物時使用的模型"""
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    total_units: Optional[int] = Field(None, ge=0)
    status: Optional[str] = Field(None, pattern="^(active|inactive|maintenance)$")
    description: Optional[str] = None


class Building(BuildingBase):
    """完整建築物模型（包含資料庫欄位）"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_account_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PublicBuilding(BuildingBase):
    """房客點餐頁看到的建築物（不含擁有者帳號）"""
    model_config = ConfigDict(from_attributes=True)

    id: str

    @classmethod
    def from_building(cls, building: Building) -> "PublicBuilding":
        return cls(**building.model_dump(exclude={"owner_account_id", "created_at", "updated_at"}))
