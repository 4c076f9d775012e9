"""
建築物管理服務 (BuildingService)
處理建築物的 CRUD 操作，所有寫入都先經過 AccessGuard
"""
from typing import List, Optional

from supabase import Client

from ..schemas.building import Building, BuildingCreate, BuildingUpdate
from ..schemas.context import AccessContext
from .access_guard import AccessGuard
from .base_db import BaseDBService
from .errors import DependencyFailed


class BuildingService(BaseDBService):
    """建築物管理服務"""

    TABLE_NAME = "buildings"

    def __init__(self, supabase: Client, guard: Optional[AccessGuard] = None):
        super().__init__(supabase)
        self.guard = guard or AccessGuard(supabase)

    def list_buildings(self, ctx: AccessContext) -> List[Building]:
        """
        取得目前帳號的所有建築物（新到舊）

        Args:
            ctx: 擁有者情境

        Returns:
            List[Building]: 建築物列表
        """
        owner = self.guard.require_owner(ctx)
        rows = self._execute(
            self.supabase.table(self.TABLE_NAME)
            .select("*")
            .eq("owner_account_id", owner.account_id)
            .order("created_at", desc=True),
            "SELECT",
        )
        return [Building(**row) for row in rows]

    def get_building(self, ctx: AccessContext, building_id: str) -> Building:
        """
        取得單一建築物

        擁有者模式會檢查所有權；訪客模式（點餐頁）只檢查是否存在。
        """
        row = self.guard.fetch(ctx, self.TABLE_NAME, building_id)
        return Building(**row)

    def create_building(self, ctx: AccessContext, building_data: BuildingCreate) -> Building:
        """
        建立新建築物，擁有者取自登入身分

        Args:
            ctx: 擁有者情境
            building_data: 建築物資料

        Returns:
            Building: 建立的建築物
        """
        owner = self.guard.require_owner(ctx)

        data = building_data.model_dump()
        data["owner_account_id"] = owner.account_id
        data["created_at"] = self._now()
        data["updated_at"] = self._now()

        rows = self._execute(self.supabase.table(self.TABLE_NAME).insert(data), "INSERT")
        if not rows:
            raise DependencyFailed("Building was not created")

        self.logger.info(f"建立建築物 {rows[0]['id']} ({building_data.name})")
        return Building(**rows[0])

    def update_building(self, ctx: AccessContext, building_id: str, update_data: BuildingUpdate) -> Building:
        """更新建築物資料"""
        self.guard.authorize_building(ctx, building_id)

        data = update_data.model_dump(exclude_unset=True)
        data["updated_at"] = self._now()

        rows = self._execute(
            self.supabase.table(self.TABLE_NAME).update(data).eq("id", building_id),
            "UPDATE",
        )
        if not rows:
            raise DependencyFailed("Building was not updated")
        return Building(**rows[0])

    def delete_building(self, ctx: AccessContext, building_id: str) -> None:
        """刪除建築物（房間與訂單由資料庫 cascade 刪除）"""
        self.guard.authorize_building(ctx, building_id)
        self._execute(
            self.supabase.table(self.TABLE_NAME).delete().eq("id", building_id),
            "DELETE",
        )
        self.logger.info(f"刪除建築物 {building_id}")
