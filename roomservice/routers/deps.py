"""
Router Dependencies
身分解析與服務組裝（FastAPI Depends）
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client

from ..config.settings import Settings, get_settings
from ..config.supabase import get_supabase
from ..schemas.context import GuestContext, OwnerContext
from ..services.access_guard import AccessGuard
from ..services.building_service import BuildingService
from ..services.catalog_service import CatalogService
from ..services.logger import get_logger
from ..services.order_service import OrderService
from ..services.qrcode_service import QRCodeService
from ..services.unit_service import UnitService

logger = get_logger("auth")


# JWT Token 驗證依賴
def get_owner_context(
    authorization: Optional[str] = Header(None),
    supabase: Client = Depends(get_supabase),
) -> OwnerContext:
    """
    從 Authorization Header 取得 JWT，交給 Supabase Auth 驗證
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")

    token = authorization.replace("Bearer ", "", 1)

    try:
        response = supabase.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token 驗證失敗: {e}")
        raise HTTPException(status_code=401, detail="Token is invalid or expired")

    user = getattr(response, "user", None) if response is not None else None
    if user is None:
        raise HTTPException(status_code=401, detail="Token is invalid or expired")

    return OwnerContext(account_id=str(user.id))


def get_guest_context() -> GuestContext:
    """點餐頁不帶任何身分"""
    return GuestContext()


def get_guard(supabase: Client = Depends(get_supabase)) -> AccessGuard:
    return AccessGuard(supabase)


def get_building_service(
    supabase: Client = Depends(get_supabase),
    guard: AccessGuard = Depends(get_guard),
) -> BuildingService:
    return BuildingService(supabase, guard)


def get_qrcode_service(
    supabase: Client = Depends(get_supabase),
    settings: Settings = Depends(get_settings),
) -> QRCodeService:
    return QRCodeService(supabase, settings)


def get_unit_service(
    supabase: Client = Depends(get_supabase),
    guard: AccessGuard = Depends(get_guard),
    qrcodes: QRCodeService = Depends(get_qrcode_service),
) -> UnitService:
    return UnitService(supabase, guard, qrcodes)


def get_catalog_service(
    supabase: Client = Depends(get_supabase),
    guard: AccessGuard = Depends(get_guard),
) -> CatalogService:
    return CatalogService(supabase, guard)


def get_order_service(
    supabase: Client = Depends(get_supabase),
    guard: AccessGuard = Depends(get_guard),
) -> OrderService:
    return OrderService(supabase, guard)
