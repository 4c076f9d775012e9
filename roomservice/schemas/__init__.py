"""
Pydantic Schemas 統一匯出
"""

from .context import OwnerContext, GuestContext, AccessContext

from .building import (
    BuildingBase,
    BuildingCreate,
    BuildingUpdate,
    Building,
    PublicBuilding,
)

from .unit import (
    UnitBase,
    UnitCreate,
    UnitUpdate,
    Unit,
)

from .catalog import (
    ItemType,
    CATALOG_TABLES,
    MenuItemCreate,
    MenuItemUpdate,
    MenuItem,
    ServiceItemCreate,
    ServiceItemUpdate,
    ServiceItem,
    CatalogItem,
    parse_catalog_row,
)

from .order import (
    OrderStatus,
    ORDER_STATUSES,
    CartLine,
    OrderItem,
    Order,
    OrderStatusUpdate,
    GuestOrderRequest,
)

__all__ = [
    # Context
    "OwnerContext",
    "GuestContext",
    "AccessContext",

    # Building schemas
    "BuildingBase",
    "BuildingCreate",
    "BuildingUpdate",
    "Building",
    "PublicBuilding",

    # Unit schemas
    "UnitBase",
    "UnitCreate",
    "UnitUpdate",
    "Unit",

    # Catalog schemas
    "ItemType",
    "CATALOG_TABLES",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItem",
    "ServiceItemCreate",
    "ServiceItemUpdate",
    "ServiceItem",
    "CatalogItem",
    "parse_catalog_row",

    # Order schemas
    "OrderStatus",
    "ORDER_STATUSES",
    "CartLine",
    "OrderItem",
    "Order",
    "OrderStatusUpdate",
    "GuestOrderRequest",
]
