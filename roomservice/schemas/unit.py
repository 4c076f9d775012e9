"""
房間 (Unit) 資料模型
所有權經由 building_id 傳遞
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class UnitBase(BaseModel):
    """房間基礎模型"""
    unit_number: str = Field(..., min_length=1, description="房號，例如：101、A1-客房")
    floor_number: Optional[str] = Field(None, description="樓層")
    status: str = Field(
        default="available",
        pattern="^(available|occupied|maintenance|reserved)$",
        description="狀態：available/occupied/maintenance/reserved"
    )
    description: Optional[str] = Field(None, description="說明")


class UnitCreate(UnitBase):
    """
    建立房間時使用的模型

    qr_code_url 不在此模型內，只能由 QR Code 產生流程寫入。
    """
    building_id: str = Field(..., description="建築物 ID")


class UnitUpdate(BaseModel):
    """更新房間時使用的模型（不可移動到其他建築物）"""
    unit_number: Optional[str] = Field(None, min_length=1)
    floor_number: Optional[str] = None
    status: Optional[str] = Field(None, pattern="^(available|occupied|maintenance|reserved)$")
    description: Optional[str] = None


class Unit(UnitBase):
    """完整房間模型（包含資料庫欄位）"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    building_id: str
    qr_code_url: Optional[str] = Field(None, description="QR Code 圖檔公開網址")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
