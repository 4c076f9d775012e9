"""
設定模組
"""

from .settings import Settings, get_settings
from .supabase import create_supabase, get_supabase

__all__ = [
    "Settings",
    "get_settings",
    "create_supabase",
    "get_supabase",
]
