"""
基礎資料存取服務
✅ Supabase 客戶端由建構子注入（不使用全域單例）
✅ 統一的錯誤包裝：任何 store 例外 → DependencyFailed
✅ 不做內部重試，逾時與重試交給 Supabase 客戶端
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from supabase import Client

from .errors import DependencyFailed
from .logger import get_logger, log_db_operation


class BaseDBService:
    """基礎資料存取服務 - 所有服務的父類"""

    TABLE_NAME = ""

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.logger = get_logger(self.__class__.__name__)

    def _execute(self, query: Any, operation: str, table: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        執行 PostgREST 查詢並統一處理錯誤

        Args:
            query: 已組好條件的 query builder
            operation: 操作類型（SELECT / INSERT / UPDATE / DELETE）
            table: 資料表名稱，預設為 TABLE_NAME

        Returns:
            List[Dict]: 回傳的資料列（可能為空）
        """
        table = table or self.TABLE_NAME
        try:
            result = query.execute()
        except Exception as e:
            log_db_operation(operation, table, False, error=str(e))
            raise DependencyFailed(f"{operation} on {table} failed") from e

        data = result.data if result is not None else None
        if data is None:
            data = []
        elif isinstance(data, dict):
            data = [data]

        log_db_operation(operation, table, True, len(data))
        return data

    def _fetch_by_id(self, record_id: str, table: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """依 ID 取得單筆資料，不存在回傳 None"""
        table = table or self.TABLE_NAME
        rows = self._execute(
            self.supabase.table(table).select("*").eq("id", record_id).limit(1),
            "SELECT",
            table,
        )
        return rows[0] if rows else None

    @staticmethod
    def _now() -> str:
        return datetime.now().isoformat()
