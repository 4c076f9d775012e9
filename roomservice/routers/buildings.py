"""
Building API Router
房東的建築物管理
"""
from typing import List

from fastapi import APIRouter, Depends

from ..schemas.building import Building, BuildingCreate, BuildingUpdate
from ..schemas.context import OwnerContext
from ..services.building_service import BuildingService
from .deps import get_building_service, get_owner_context

router = APIRouter(prefix="/api/buildings", tags=["buildings"])


@router.get("", response_model=List[Building])
def list_buildings(
    ctx: OwnerContext = Depends(get_owner_context),
    service: BuildingService = Depends(get_building_service),
):
    """取得我的建築物"""
    return service.list_buildings(ctx)


@router.get("/{building_id}", response_model=Building)
def get_building(
    building_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: BuildingService = Depends(get_building_service),
):
    return service.get_building(ctx, building_id)


@router.post("", response_model=Building, status_code=201)
def create_building(
    payload: BuildingCreate,
    ctx: OwnerContext = Depends(get_owner_context),
    service: BuildingService = Depends(get_building_service),
):
    """新增建築物，擁有者為目前登入帳號"""
    return service.create_building(ctx, payload)


@router.patch("/{building_id}", response_model=Building)
def update_building(
    building_id: str,
    payload: BuildingUpdate,
    ctx: OwnerContext = Depends(get_owner_context),
    service: BuildingService = Depends(get_building_service),
):
    return service.update_building(ctx, building_id, payload)


@router.delete("/{building_id}")
def delete_building(
    building_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: BuildingService = Depends(get_building_service),
):
    service.delete_building(ctx, building_id)
    return {"success": True, "message": "Building deleted"}
