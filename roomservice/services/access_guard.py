"""
存取守衛 (AccessGuard)
✅ 擁有者模式：所有讀寫都限縮在帳號擁有的建築物內
✅ 訪客模式：只做存在檢查，僅供點餐頁讀取房間 / 建築物 / 目錄
✅ 訪客寫入僅限建立訂單與訂單明細
✅ 每次操作都重新解析所有權，不跨請求快取
"""
from typing import Any, Dict, Optional, Set

from supabase import Client

from ..schemas.context import AccessContext, GuestContext, OwnerContext
from .base_db import BaseDBService
from .errors import Forbidden, NotFound, ValidationFailed
from .ownership_service import OwnershipService

GUEST_READABLE_TABLES = frozenset({"buildings", "units", "menu_items", "services"})
GUEST_WRITABLE_TABLES = frozenset({"orders", "order_items"})

# 資料表 → 給使用者看的名稱
RECORD_LABELS = {
    "buildings": "Building",
    "units": "Unit",
    "menu_items": "Menu item",
    "services": "Service",
    "orders": "Order",
}


class AccessGuard(BaseDBService):
    """存取守衛"""

    def __init__(self, supabase: Client, ownership: Optional[OwnershipService] = None):
        super().__init__(supabase)
        self.ownership = ownership or OwnershipService(supabase)

    # ==================== 模式檢查 ====================

    def require_owner(self, ctx: AccessContext) -> OwnerContext:
        """只允許擁有者模式"""
        if isinstance(ctx, OwnerContext):
            return ctx
        self.logger.warning("訪客嘗試執行擁有者操作")
        raise Forbidden("You must be signed in as the owner to perform this action")

    def ensure_guest_write(self, ctx: AccessContext, table: str) -> None:
        """訪客模式只能寫入訂單相關資料表"""
        if isinstance(ctx, GuestContext) and table not in GUEST_WRITABLE_TABLES:
            self.logger.warning(f"訪客嘗試寫入 {table}，已拒絕")
            raise Forbidden("Guests cannot modify this record")

    # ==================== 擁有者模式 ====================

    def owned_building_ids(self, ctx: AccessContext) -> Set[str]:
        owner = self.require_owner(ctx)
        return self.ownership.resolve_owned_building_ids(owner.account_id)

    def scope_query(self, ctx: AccessContext, query: Any, building_id: Optional[str] = None) -> Optional[Any]:
        """
        將查詢限縮在擁有的建築物

        Args:
            ctx: 存取情境（必須是擁有者）
            query: 尚未執行的 query builder
            building_id: 指定只看某棟建築物

        Returns:
            加上條件的 query；沒有任何可見範圍時回傳 None（呼叫端應回傳空列表）
        """
        owned = self.owned_building_ids(ctx)

        if building_id is not None:
            if building_id not in owned:
                self.logger.warning(f"建築物 {building_id} 不屬於目前帳號，回傳空結果")
                return None
            return query.eq("building_id", building_id)

        if not owned:
            return None
        return query.in_("building_id", sorted(owned))

    def authorize_building(self, ctx: AccessContext, building_id: str) -> Dict[str, Any]:
        """
        確認建築物存在且屬於目前帳號

        Returns:
            Dict: 建築物資料列

        Raises:
            NotFound: 建築物不存在
            Forbidden: 建築物不屬於目前帳號
        """
        owner = self.require_owner(ctx)
        row = self._fetch_by_id(building_id, "buildings")
        if row is None:
            raise NotFound("Building not found")
        if row.get("owner_account_id") != owner.account_id:
            self.logger.warning(f"帳號 {owner.account_id} 無權存取建築物 {building_id}")
            raise Forbidden("You do not have permission to access this building")
        return row

    def authorize_record(self, ctx: AccessContext, table: str, record_id: str) -> Dict[str, Any]:
        """
        確認子資料（房間 / 目錄項目 / 訂單）所屬建築物屬於目前帳號

        寫入前必須先呼叫；資料列的 building_id 每次都重新讀取。
        沒有 building_id 的全域目錄項目不屬於任何帳號，一律 Forbidden。
        """
        if table == "buildings":
            return self.authorize_building(ctx, record_id)

        owner = self.require_owner(ctx)
        label = RECORD_LABELS.get(table, "Record")

        row = self._fetch_by_id(record_id, table)
        if row is None:
            raise NotFound(f"{label} not found")

        building_id = row.get("building_id")
        if not building_id or not self.ownership.is_owned(owner.account_id, building_id):
            self.logger.warning(f"帳號 {owner.account_id} 無權存取 {table}/{record_id}")
            raise Forbidden(f"You do not have permission to access this {label.lower()}")
        return row

    def authorize_create(self, ctx: AccessContext, building_id: Optional[str]) -> None:
        """建立子資料前，確認上層建築物已屬於目前帳號"""
        owner = self.require_owner(ctx)
        if not building_id:
            raise ValidationFailed("building_id is required")
        if not self.ownership.is_owned(owner.account_id, building_id):
            self.logger.warning(f"帳號 {owner.account_id} 無權在建築物 {building_id} 下新增資料")
            raise Forbidden("You do not have permission to add records to this building")

    # ==================== 訪客模式 ====================

    def read_for_guest(self, ctx: GuestContext, table: str, record_id: str) -> Dict[str, Any]:
        """訪客讀取：只檢查資料是否存在，不檢查所有權"""
        if not isinstance(ctx, GuestContext):
            raise ValidationFailed("Guest reads require an explicit guest context")
        if table not in GUEST_READABLE_TABLES:
            raise Forbidden("Guests cannot read this record")

        row = self._fetch_by_id(record_id, table)
        if row is None:
            raise NotFound(f"{RECORD_LABELS.get(table, 'Record')} not found")
        return row

    # ==================== 依模式分派 ====================

    def fetch(self, ctx: AccessContext, table: str, record_id: str) -> Dict[str, Any]:
        """依情境取得單筆資料：訪客只做存在檢查，擁有者做所有權檢查"""
        if isinstance(ctx, GuestContext):
            return self.read_for_guest(ctx, table, record_id)
        return self.authorize_record(ctx, table, record_id)
