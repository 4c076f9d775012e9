"""
Guest API Router
房客掃描 QR Code 後的點餐頁 API，不需要登入
錯誤訊息不透露內部原因
"""
from fastapi import APIRouter, Depends, HTTPException, Query

from ..schemas.building import Building, PublicBuilding
from ..schemas.context import GuestContext
from ..schemas.order import GuestOrderRequest, Order
from ..schemas.unit import Unit
from ..services.building_service import BuildingService
from ..services.catalog_service import CatalogService
from ..services.errors import DependencyFailed, NotFound, ValidationFailed
from ..services.logger import get_logger
from ..services.order_service import OrderService
from ..services.unit_service import UnitService
from .deps import (
    get_building_service,
    get_catalog_service,
    get_guest_context,
    get_order_service,
    get_unit_service,
)

router = APIRouter(prefix="/api/guest", tags=["guest"])

logger = get_logger("guest")

UNIT_NOT_FOUND = "Unit not found, the code may be invalid"
BUILDING_NOT_FOUND = "Building not found"
TRY_AGAIN = "Something went wrong, please try again"


def _load_unit(ctx: GuestContext, units: UnitService, unit_id: str) -> Unit:
    try:
        return units.get_unit(ctx, unit_id)
    except (NotFound, ValidationFailed):
        raise HTTPException(status_code=404, detail=UNIT_NOT_FOUND)
    except DependencyFailed as e:
        logger.error(f"訪客讀取房間 {unit_id} 失敗: {e}")
        raise HTTPException(status_code=503, detail=TRY_AGAIN)


def _load_building(ctx: GuestContext, buildings: BuildingService, building_id: str) -> Building:
    try:
        return buildings.get_building(ctx, building_id)
    except NotFound:
        raise HTTPException(status_code=404, detail=BUILDING_NOT_FOUND)
    except DependencyFailed as e:
        logger.error(f"訪客讀取建築物 {building_id} 失敗: {e}")
        raise HTTPException(status_code=503, detail=TRY_AGAIN)


@router.get("/units/{unit_id}", response_model=Unit)
def get_unit_for_guest(
    unit_id: str,
    ctx: GuestContext = Depends(get_guest_context),
    units: UnitService = Depends(get_unit_service),
):
    return _load_unit(ctx, units, unit_id)


@router.get("/buildings/{building_id}", response_model=PublicBuilding)
def get_building_for_guest(
    building_id: str,
    ctx: GuestContext = Depends(get_guest_context),
    buildings: BuildingService = Depends(get_building_service),
):
    return PublicBuilding.from_building(_load_building(ctx, buildings, building_id))


@router.get("/catalog")
def get_order_page(
    unit: str = Query(..., min_length=1, description="QR Code 連結中的 unit 參數"),
    ctx: GuestContext = Depends(get_guest_context),
    units: UnitService = Depends(get_unit_service),
    buildings: BuildingService = Depends(get_building_service),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    點餐頁初始資料：房間、建築物、可點的餐點與服務
    """
    unit_record = _load_unit(ctx, units, unit)
    building = _load_building(ctx, buildings, unit_record.building_id)

    try:
        items = catalog.list_for_guest(ctx, building.id)
    except DependencyFailed as e:
        logger.error(f"訪客讀取目錄失敗: {e}")
        raise HTTPException(status_code=503, detail=TRY_AGAIN)

    return {
        "unit": unit_record,
        "building": PublicBuilding.from_building(building),
        "menu_items": [item for item in items if item.item_type == "menu"],
        "services": [item for item in items if item.item_type == "service"],
    }


@router.post("/orders", response_model=Order, status_code=201)
def submit_order(
    payload: GuestOrderRequest,
    ctx: GuestContext = Depends(get_guest_context),
    units: UnitService = Depends(get_unit_service),
    buildings: BuildingService = Depends(get_building_service),
    orders: OrderService = Depends(get_order_service),
):
    """
    房客送出訂單
    品名、單價以目錄為準，總金額由伺服器重新計算，不接受前端傳入
    """
    if not payload.items:
        raise HTTPException(status_code=422, detail="Your cart is empty")

    unit_record = _load_unit(ctx, units, payload.unit_id)
    building = _load_building(ctx, buildings, unit_record.building_id)

    try:
        order = orders.submit(ctx, unit_record, building, payload.items, payload.notes)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationFailed as e:
        raise HTTPException(status_code=422, detail=e.message)
    except DependencyFailed as e:
        logger.error(f"房間 {payload.unit_id} 送單失敗: {e}")
        raise HTTPException(status_code=503, detail="Failed to submit order, please try again")

    return order
