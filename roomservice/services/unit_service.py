"""
房間管理服務 (UnitService)
處理房間的 CRUD 操作與 QR Code 綁定
"""
from typing import List, Optional

from supabase import Client

from ..schemas.context import AccessContext
from ..schemas.unit import Unit, UnitCreate, UnitUpdate
from .access_guard import AccessGuard
from .base_db import BaseDBService
from .errors import ConsoleError, DependencyFailed
from .qrcode_service import QRCodeService


class UnitService(BaseDBService):
    """房間管理服務"""

    TABLE_NAME = "units"

    def __init__(
        self,
        supabase: Client,
        guard: Optional[AccessGuard] = None,
        qrcodes: Optional[QRCodeService] = None,
    ):
        super().__init__(supabase)
        self.guard = guard or AccessGuard(supabase)
        self.qrcodes = qrcodes or QRCodeService(supabase)

    def list_owned_units(self, ctx: AccessContext, building_id: Optional[str] = None) -> List[Unit]:
        """
        取得目前帳號可見的房間

        Args:
            ctx: 擁有者情境
            building_id: 只看某棟建築物；不屬於目前帳號時回傳空列表

        Returns:
            List[Unit]: 依房號排序的房間列表
        """
        query = self.guard.scope_query(
            ctx,
            self.supabase.table(self.TABLE_NAME).select("*"),
            building_id,
        )
        if query is None:
            return []

        rows = self._execute(query.order("unit_number"), "SELECT")
        return [Unit(**row) for row in rows]

    def get_unit(self, ctx: AccessContext, unit_id: str) -> Unit:
        """
        取得單一房間

        擁有者模式檢查所有權；訪客模式（掃描 QR Code）只檢查是否存在。
        """
        row = self.guard.fetch(ctx, self.TABLE_NAME, unit_id)
        return Unit(**row)

    def create_unit(self, ctx: AccessContext, unit_data: UnitCreate) -> Unit:
        """
        建立新房間並嘗試綁定 QR Code

        QR Code 任一步驟失敗都不影響建立結果，回傳尚未綁定的房間。

        Args:
            ctx: 擁有者情境
            unit_data: 房間資料

        Returns:
            Unit: 建立的房間
        """
        self.guard.authorize_create(ctx, unit_data.building_id)

        data = unit_data.model_dump()
        data["created_at"] = self._now()
        data["updated_at"] = self._now()

        rows = self._execute(self.supabase.table(self.TABLE_NAME).insert(data), "INSERT")
        if not rows:
            raise DependencyFailed("Unit was not created")

        unit = Unit(**rows[0])
        self.logger.info(f"建立房間 {unit.unit_number} ({unit.id})")

        try:
            url = self.qrcodes.provision(unit.id, unit.unit_number, unit.building_id)
        except ConsoleError as e:
            self.logger.error(f"房間 {unit.id} QR Code 產生失敗，先建立無 QR Code 的房間: {e}")
            return unit

        return unit.model_copy(update={"qr_code_url": url})

    def update_unit(self, ctx: AccessContext, unit_id: str, update_data: UnitUpdate) -> Unit:
        """更新房間資料（先確認所有權再寫入）"""
        self.guard.authorize_record(ctx, self.TABLE_NAME, unit_id)

        data = update_data.model_dump(exclude_unset=True)
        data["updated_at"] = self._now()

        rows = self._execute(
            self.supabase.table(self.TABLE_NAME).update(data).eq("id", unit_id),
            "UPDATE",
        )
        if not rows:
            raise DependencyFailed("Unit was not updated")
        return Unit(**rows[0])

    def delete_unit(self, ctx: AccessContext, unit_id: str) -> None:
        """刪除房間"""
        self.guard.authorize_record(ctx, self.TABLE_NAME, unit_id)
        self._execute(
            self.supabase.table(self.TABLE_NAME).delete().eq("id", unit_id),
            "DELETE",
        )
        self.logger.info(f"刪除房間 {unit_id}")

    def provision_qr_code(self, ctx: AccessContext, unit_id: str) -> str:
        """
        重新產生房間 QR Code（可重複執行，覆寫舊圖檔與網址）

        Returns:
            str: QR Code 圖檔公開網址
        """
        row = self.guard.authorize_record(ctx, self.TABLE_NAME, unit_id)
        return self.qrcodes.provision(row["id"], row["unit_number"], row["building_id"])
