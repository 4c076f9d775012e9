"""
Unit API Router
房間管理與 QR Code 綁定
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..schemas.context import OwnerContext
from ..schemas.unit import Unit, UnitCreate, UnitUpdate
from ..services.qrcode_service import QRCodeService
from ..services.unit_service import UnitService
from .deps import get_owner_context, get_qrcode_service, get_unit_service

router = APIRouter(prefix="/api/units", tags=["units"])


@router.get("", response_model=List[Unit])
def list_units(
    building_id: Optional[str] = None,
    ctx: OwnerContext = Depends(get_owner_context),
    service: UnitService = Depends(get_unit_service),
):
    """取得我的房間，可依建築物篩選"""
    return service.list_owned_units(ctx, building_id)


@router.get("/{unit_id}", response_model=Unit)
def get_unit(
    unit_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: UnitService = Depends(get_unit_service),
):
    return service.get_unit(ctx, unit_id)


@router.post("", response_model=Unit, status_code=201)
def create_unit(
    payload: UnitCreate,
    ctx: OwnerContext = Depends(get_owner_context),
    service: UnitService = Depends(get_unit_service),
):
    """
    新增房間
    建立後自動產生 QR Code；QR Code 失敗時仍回傳房間（qr_code_url 為空）
    """
    return service.create_unit(ctx, payload)


@router.patch("/{unit_id}", response_model=Unit)
def update_unit(
    unit_id: str,
    payload: UnitUpdate,
    ctx: OwnerContext = Depends(get_owner_context),
    service: UnitService = Depends(get_unit_service),
):
    return service.update_unit(ctx, unit_id, payload)


@router.delete("/{unit_id}")
def delete_unit(
    unit_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: UnitService = Depends(get_unit_service),
):
    service.delete_unit(ctx, unit_id)
    return {"success": True, "message": "Unit deleted"}


@router.post("/{unit_id}/qrcode")
def provision_qr_code(
    unit_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: UnitService = Depends(get_unit_service),
):
    """重新產生 QR Code（覆寫舊圖檔）"""
    url = service.provision_qr_code(ctx, unit_id)
    return {"success": True, "unit_id": unit_id, "qr_code_url": url}


@router.get("/{unit_id}/qrcode/preview")
def preview_qr_code(
    unit_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: UnitService = Depends(get_unit_service),
    qrcodes: QRCodeService = Depends(get_qrcode_service),
):
    """預覽 QR Code（data URL，不上傳）"""
    unit = service.get_unit(ctx, unit_id)
    return {
        "unit_id": unit.id,
        "order_url": qrcodes.build_order_link(unit.id),
        "data_url": qrcodes.render_data_url(unit.id),
    }
