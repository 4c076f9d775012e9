"""
所有權解析服務 (OwnershipService)
帳號 → 建築物 → {房間, 目錄項目, 訂單}
"""
from typing import Set

from .base_db import BaseDBService


class OwnershipService(BaseDBService):
    """計算帳號擁有的建築物；查詢失敗時拋出 DependencyFailed，絕不回傳推測結果"""

    TABLE_NAME = "buildings"

    def resolve_owned_building_ids(self, account_id: str) -> Set[str]:
        """
        取得帳號擁有的所有建築物 ID

        Args:
            account_id: 帳號 ID

        Returns:
            Set[str]: 建築物 ID 集合，沒有任何建築物時為空集合
        """
        rows = self._execute(
            self.supabase.table(self.TABLE_NAME)
            .select("id")
            .eq("owner_account_id", account_id),
            "SELECT",
        )
        return {row["id"] for row in rows}

    def is_owned(self, account_id: str, building_id: str) -> bool:
        """檢查建築物是否屬於此帳號"""
        if not account_id or not building_id:
            return False

        rows = self._execute(
            self.supabase.table(self.TABLE_NAME)
            .select("id")
            .eq("id", building_id)
            .eq("owner_account_id", account_id)
            .limit(1),
            "SELECT",
        )
        return len(rows) > 0
