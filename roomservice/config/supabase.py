"""
Supabase Client Configuration
統一管理 Supabase 連線
"""
from functools import lru_cache
from typing import Optional

from supabase import create_client, Client

from .settings import Settings, get_settings


def create_supabase(settings: Optional[Settings] = None) -> Client:
    """
    依設定建立 Supabase 客戶端

    Args:
        settings: 設定，未提供時從環境變數讀取

    Returns:
        Client: Supabase 客戶端
    """
    settings = settings or get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        raise ValueError("請在 .env 檔案中設定 SUPABASE_URL 和 SUPABASE_KEY")

    return create_client(settings.supabase_url, settings.supabase_key)


@lru_cache
def get_supabase() -> Client:
    """
    取得 Supabase 客戶端實例
    用於 FastAPI Dependency Injection（測試時以 dependency_overrides 替換）
    """
    return create_supabase()
