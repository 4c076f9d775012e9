"""
訂單服務 (OrderService)
✅ 房客送單：訂單主檔 + 明細，明細失敗時刪除主檔（補償式回滾）
✅ 品名 / 單價以目錄資料為準，總金額一律在伺服器端重新計算
✅ 品名 / 單價 / 房號 / 建築物名稱為下單當下快照
✅ 房東查詢、改狀態、刪除訂單（限擁有的建築物）
"""
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from supabase import Client

from ..schemas.building import Building
from ..schemas.catalog import CATALOG_TABLES
from ..schemas.context import AccessContext, OwnerContext
from ..schemas.order import ORDER_STATUSES, CartLine, Order, OrderItem
from ..schemas.unit import Unit
from .access_guard import RECORD_LABELS, AccessGuard
from .base_db import BaseDBService
from .cart import compute_total
from .errors import DependencyFailed, NotFound, PartialWriteRolledBack, ValidationFailed


class OrderService(BaseDBService):
    """訂單服務（不保存跨呼叫狀態）"""

    TABLE_NAME = "orders"
    ITEMS_TABLE = "order_items"

    def __init__(self, supabase: Client, guard: Optional[AccessGuard] = None):
        super().__init__(supabase)
        self.guard = guard or AccessGuard(supabase)

    # ==================== 送單 ====================

    def submit(
        self,
        ctx: AccessContext,
        unit: Optional[Unit],
        building: Optional[Building],
        cart_lines: Sequence[CartLine],
        notes: Optional[str] = None,
    ) -> Optional[Order]:
        """
        將購物車轉成訂單

        Args:
            ctx: 訪客或擁有者情境
            unit: 下單房間
            building: 房間所屬建築物
            cart_lines: 購物車明細
            notes: 整張訂單備註

        Returns:
            Order: 建立的訂單（含明細）；房間、建築物或購物車為空時不做任何事，回傳 None

        Raises:
            NotFound: 購物車中的目錄項目不存在
            ValidationFailed: 房間不屬於建築物，或目錄項目停售 / 屬於其他建築物
            PartialWriteRolledBack: 明細寫入失敗並已嘗試刪除主檔；訊息為原始錯誤
        """
        if unit is None or building is None or not cart_lines:
            self.logger.debug("房間、建築物或購物車為空，略過送單")
            return None

        self.guard.ensure_guest_write(ctx, self.TABLE_NAME)
        if isinstance(ctx, OwnerContext):
            self.guard.authorize_create(ctx, building.id)

        if unit.building_id != building.id:
            raise ValidationFailed("Unit does not belong to this building")

        lines = self._snapshot_from_catalog(self._merge_lines(cart_lines), building.id)
        total_amount = compute_total(lines)

        header = {
            "unit_id": unit.id,
            "unit_number": unit.unit_number,
            "building_id": building.id,
            "building_name": building.name,
            "status": "pending",
            "total_amount": total_amount,
            "notes": notes,
            "created_at": self._now(),
            "updated_at": self._now(),
        }
        rows = self._execute(self.supabase.table(self.TABLE_NAME).insert(header), "INSERT")
        if not rows:
            raise DependencyFailed("Order was not created")
        order_row = rows[0]
        order_id = order_row["id"]

        item_rows = [
            {
                "order_id": order_id,
                "item_type": line.item_type,
                "item_id": line.item_id,
                "name": line.name,
                "quantity": line.quantity,
                "price": line.price,
                "notes": line.notes,
            }
            for line in lines
        ]

        try:
            inserted = self._execute(
                self.supabase.table(self.ITEMS_TABLE).insert(item_rows),
                "INSERT",
                self.ITEMS_TABLE,
            )
            if len(inserted) != len(item_rows):
                raise DependencyFailed(
                    f"Failed to create order items: expected {len(item_rows)}, got {len(inserted)}"
                )
        except DependencyFailed as e:
            rolled_back = self._rollback(order_id)
            raise PartialWriteRolledBack(e, order_id, rolled_back) from e

        self.logger.info(
            f"房間 {unit.unit_number} 送出訂單 {order_id}：{len(inserted)} 項，總金額 {total_amount}"
        )
        return Order(**{**order_row, "order_items": [OrderItem(**r) for r in inserted]})

    @staticmethod
    def _merge_lines(cart_lines: Sequence[CartLine]) -> List[CartLine]:
        """同一 (item_type, item_id) 合併數量，保留第一次出現的快照"""
        merged: "OrderedDict[tuple, CartLine]" = OrderedDict()
        for line in cart_lines:
            line = CartLine.model_validate(line.model_dump())
            if line.key in merged:
                merged[line.key].quantity += line.quantity
            else:
                merged[line.key] = line
        return list(merged.values())

    def _snapshot_from_catalog(self, lines: List[CartLine], building_id: str) -> List[CartLine]:
        """
        以目錄資料列覆寫品名與單價（前端傳來的價格不採用）

        Raises:
            NotFound: 目錄項目不存在
            ValidationFailed: 項目已停售，或不屬於此建築物也不是全域項目
        """
        ids_by_type: Dict[str, List[str]] = {}
        for line in lines:
            ids_by_type.setdefault(line.item_type, []).append(line.item_id)

        rows_by_key: Dict[tuple, Dict] = {}
        for item_type, ids in ids_by_type.items():
            table = CATALOG_TABLES[item_type]
            rows = self._execute(
                self.supabase.table(table).select("*").in_("id", ids),
                "SELECT",
                table,
            )
            rows_by_key.update({(item_type, row["id"]): row for row in rows})

        for line in lines:
            label = RECORD_LABELS[CATALOG_TABLES[line.item_type]]
            row = rows_by_key.get(line.key)
            if row is None:
                raise NotFound(f"{label} {line.item_id} not found")
            if not row.get("is_available", True):
                raise ValidationFailed(f"{label} '{row.get('name')}' is not available")
            if row.get("building_id") not in (None, building_id):
                raise ValidationFailed(f"{label} '{row.get('name')}' is not offered in this building")

            if line.price != row["price"]:
                self.logger.warning(
                    f"{line.item_type}/{line.item_id} 送單價格 {line.price} 與目錄 {row['price']} 不符，以目錄為準"
                )
            line.name = row["name"]
            line.price = row["price"]

        return lines

    def _rollback(self, order_id: str) -> bool:
        """補償式回滾：刪除沒有明細的訂單主檔，回傳是否刪除成功"""
        try:
            self._execute(
                self.supabase.table(self.TABLE_NAME).delete().eq("id", order_id),
                "DELETE",
            )
            self.logger.warning(f"訂單明細寫入失敗，已刪除訂單主檔 {order_id}")
            return True
        except DependencyFailed as e:
            self.logger.error(f"回滾失敗，訂單 {order_id} 沒有明細: {e}")
            return False

    # ==================== 擁有者模式 ====================

    def list_orders(
        self,
        ctx: AccessContext,
        unit_id: Optional[str] = None,
        building_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Order]:
        """
        取得訂單列表（新到舊，含明細）

        Args:
            ctx: 擁有者情境
            unit_id: 房間篩選
            building_id: 建築物篩選
            status: 狀態篩選
        """
        query = self.guard.scope_query(ctx, self.supabase.table(self.TABLE_NAME).select("*"), building_id)
        if query is None:
            return []

        if unit_id:
            query = query.eq("unit_id", unit_id)
        if status:
            query = query.eq("status", status)

        rows = self._execute(query.order("created_at", desc=True), "SELECT")
        items_by_order = self._load_items([row["id"] for row in rows])

        return [
            Order(**{**row, "order_items": items_by_order.get(row["id"], [])})
            for row in rows
        ]

    def get_order(self, ctx: AccessContext, order_id: str) -> Order:
        row = self.guard.authorize_record(ctx, self.TABLE_NAME, order_id)
        items = self._load_items([order_id]).get(order_id, [])
        return Order(**{**row, "order_items": items})

    def set_order_status(self, ctx: AccessContext, order_id: str, status: str) -> Order:
        """
        更新訂單狀態

        任何狀態都可以改成任何狀態（包含 completed → pending），
        total_amount 不會被更動。
        """
        if status not in ORDER_STATUSES:
            raise ValidationFailed(f"Invalid order status: {status}")

        row = self.guard.authorize_record(ctx, self.TABLE_NAME, order_id)

        rows = self._execute(
            self.supabase.table(self.TABLE_NAME)
            .update({"status": status, "updated_at": self._now()})
            .eq("id", order_id),
            "UPDATE",
        )
        if not rows:
            raise DependencyFailed("Order status was not updated")

        self.logger.info(f"訂單 {order_id} 狀態 {row.get('status')} → {status}")
        items = self._load_items([order_id]).get(order_id, [])
        return Order(**{**rows[0], "order_items": items})

    def delete_order(self, ctx: AccessContext, order_id: str) -> None:
        """刪除訂單（明細由資料庫 cascade 刪除）"""
        self.guard.authorize_record(ctx, self.TABLE_NAME, order_id)
        self._execute(
            self.supabase.table(self.TABLE_NAME).delete().eq("id", order_id),
            "DELETE",
        )

    def _load_items(self, order_ids: List[str]) -> Dict[str, List[OrderItem]]:
        if not order_ids:
            return {}

        rows = self._execute(
            self.supabase.table(self.ITEMS_TABLE)
            .select("*")
            .in_("order_id", order_ids)
            .order("created_at"),
            "SELECT",
            self.ITEMS_TABLE,
        )

        grouped: Dict[str, List[OrderItem]] = {}
        for row in rows:
            grouped.setdefault(row["order_id"], []).append(OrderItem(**row))
        return grouped
