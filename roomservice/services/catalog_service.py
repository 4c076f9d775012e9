"""
服務目錄管理 (CatalogService)
餐點 (menu_items) 與服務 (services) 共用同一組操作，以 item_type 區分資料表
"""
from typing import List, Optional, Union

from supabase import Client

from ..schemas.catalog import (
    CATALOG_TABLES,
    ItemType,
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
    ServiceItem,
    ServiceItemCreate,
    ServiceItemUpdate,
    parse_catalog_row,
)
from ..schemas.context import AccessContext, GuestContext
from .access_guard import AccessGuard
from .base_db import BaseDBService
from .errors import DependencyFailed, ValidationFailed

CatalogCreate = Union[MenuItemCreate, ServiceItemCreate]
CatalogUpdate = Union[MenuItemUpdate, ServiceItemUpdate]
CatalogRecord = Union[MenuItem, ServiceItem]


def _table_for(item_type: str) -> str:
    try:
        return CATALOG_TABLES[item_type]
    except KeyError:
        raise ValidationFailed(f"Unknown catalog item type: {item_type}") from None


class CatalogService(BaseDBService):
    """餐點與服務目錄"""

    def __init__(self, supabase: Client, guard: Optional[AccessGuard] = None):
        super().__init__(supabase)
        self.guard = guard or AccessGuard(supabase)

    # ==================== 擁有者模式 ====================

    def list_items(
        self,
        ctx: AccessContext,
        item_type: ItemType,
        category: Optional[str] = None,
        building_id: Optional[str] = None,
    ) -> List[CatalogRecord]:
        """
        取得目前帳號建築物底下的目錄項目（依名稱排序）

        Args:
            ctx: 擁有者情境
            item_type: menu / service
            category: 分類篩選
            building_id: 只看某棟建築物
        """
        table = _table_for(item_type)
        query = self.guard.scope_query(ctx, self.supabase.table(table).select("*"), building_id)
        if query is None:
            return []

        if category:
            query = query.eq("category", category)

        rows = self._execute(query.order("name"), "SELECT", table)
        return [parse_catalog_row(item_type, row) for row in rows]

    def get_item(self, ctx: AccessContext, item_type: ItemType, item_id: str) -> CatalogRecord:
        table = _table_for(item_type)
        row = self.guard.fetch(ctx, table, item_id)
        return parse_catalog_row(item_type, row)

    def create_item(self, ctx: AccessContext, item_data: CatalogCreate) -> CatalogRecord:
        """
        建立餐點或服務

        必須指定目前帳號擁有的 building_id；全域項目不經由此處建立。
        """
        item_type: ItemType = "service" if isinstance(item_data, ServiceItemCreate) else "menu"
        table = _table_for(item_type)

        self.guard.authorize_create(ctx, item_data.building_id)

        data = item_data.model_dump()
        data["created_at"] = self._now()
        data["updated_at"] = self._now()

        rows = self._execute(self.supabase.table(table).insert(data), "INSERT", table)
        if not rows:
            raise DependencyFailed(f"{item_type} item was not created")

        self.logger.info(f"建立{'服務' if item_type == 'service' else '餐點'} {item_data.name}")
        return parse_catalog_row(item_type, rows[0])

    def update_item(
        self,
        ctx: AccessContext,
        item_type: ItemType,
        item_id: str,
        update_data: CatalogUpdate,
    ) -> CatalogRecord:
        """更新餐點或服務（先確認所屬建築物）"""
        table = _table_for(item_type)
        expected = ServiceItemUpdate if item_type == "service" else MenuItemUpdate
        if not isinstance(update_data, expected):
            raise ValidationFailed(f"Update payload does not match item type '{item_type}'")

        self.guard.authorize_record(ctx, table, item_id)

        data = update_data.model_dump(exclude_unset=True)
        data["updated_at"] = self._now()

        rows = self._execute(self.supabase.table(table).update(data).eq("id", item_id), "UPDATE", table)
        if not rows:
            raise DependencyFailed(f"{item_type} item was not updated")
        return parse_catalog_row(item_type, rows[0])

    def delete_item(self, ctx: AccessContext, item_type: ItemType, item_id: str) -> None:
        table = _table_for(item_type)
        self.guard.authorize_record(ctx, table, item_id)
        self._execute(self.supabase.table(table).delete().eq("id", item_id), "DELETE", table)

    # ==================== 訪客模式 ====================

    def list_for_guest(
        self,
        ctx: GuestContext,
        building_id: str,
        item_type: Optional[ItemType] = None,
    ) -> List[CatalogRecord]:
        """
        點餐頁目錄：供應中、且屬於該建築物或全域的項目

        Args:
            ctx: 訪客情境
            building_id: 房間所屬建築物
            item_type: 只取 menu 或 service，預設兩者都取
        """
        self.guard.read_for_guest(ctx, "buildings", building_id)

        item_types: List[ItemType] = [item_type] if item_type else ["menu", "service"]
        items: List[CatalogRecord] = []

        for kind in item_types:
            table = _table_for(kind)
            scoped = self._execute(
                self.supabase.table(table)
                .select("*")
                .eq("building_id", building_id)
                .eq("is_available", True),
                "SELECT",
                table,
            )
            shared = self._execute(
                self.supabase.table(table)
                .select("*")
                .is_("building_id", "null")
                .eq("is_available", True),
                "SELECT",
                table,
            )
            rows = sorted(scoped + shared, key=lambda r: r.get("name", ""))
            items.extend(parse_catalog_row(kind, row) for row in rows)

        return items
