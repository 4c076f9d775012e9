"""
Catalog API Router
餐點 (/api/menu-items) 與服務 (/api/services) 管理
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..schemas.catalog import (
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
    ServiceItem,
    ServiceItemCreate,
    ServiceItemUpdate,
)
from ..schemas.context import OwnerContext
from ..services.catalog_service import CatalogService
from .deps import get_catalog_service, get_owner_context

menu_router = APIRouter(prefix="/api/menu-items", tags=["menu"])
service_router = APIRouter(prefix="/api/services", tags=["services"])


# ==================== 餐點 ====================

@menu_router.get("", response_model=List[MenuItem])
def list_menu_items(
    category: Optional[str] = None,
    building_id: Optional[str] = None,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.list_items(ctx, "menu", category, building_id)


@menu_router.get("/{item_id}", response_model=MenuItem)
def get_menu_item(
    item_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_item(ctx, "menu", item_id)


@menu_router.post("", response_model=MenuItem, status_code=201)
def create_menu_item(
    payload: MenuItemCreate,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_item(ctx, payload)


@menu_router.patch("/{item_id}", response_model=MenuItem)
def update_menu_item(
    item_id: str,
    payload: MenuItemUpdate,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_item(ctx, "menu", item_id, payload)


@menu_router.delete("/{item_id}")
def delete_menu_item(
    item_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    service.delete_item(ctx, "menu", item_id)
    return {"success": True, "message": "Menu item deleted"}


# ==================== 服務 ====================

@service_router.get("", response_model=List[ServiceItem])
def list_services(
    category: Optional[str] = None,
    building_id: Optional[str] = None,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.list_items(ctx, "service", category, building_id)


@service_router.get("/{item_id}", response_model=ServiceItem)
def get_service(
    item_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_item(ctx, "service", item_id)


@service_router.post("", response_model=ServiceItem, status_code=201)
def create_service(
    payload: ServiceItemCreate,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_item(ctx, payload)


@service_router.patch("/{item_id}", response_model=ServiceItem)
def update_service(
    item_id: str,
    payload: ServiceItemUpdate,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_item(ctx, "service", item_id, payload)


@service_router.delete("/{item_id}")
def delete_service(
    item_id: str,
    ctx: OwnerContext = Depends(get_owner_context),
    service: CatalogService = Depends(get_catalog_service),
):
    service.delete_item(ctx, "service", item_id)
    return {"success": True, "message": "Service deleted"}
