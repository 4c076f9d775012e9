"""
存取情境 (Access Context)
每個服務呼叫都必須明確帶入 OwnerContext 或 GuestContext
"""
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class OwnerContext(BaseModel):
    """已登入的房東（擁有者模式）"""
    model_config = ConfigDict(frozen=True)

    account_id: str = Field(..., min_length=1, description="Auth 提供的帳號 ID")


class GuestContext(BaseModel):
    """掃描 QR Code 的房客（訪客模式），不帶任何身分"""
    model_config = ConfigDict(frozen=True)


AccessContext = Union[OwnerContext, GuestContext]
