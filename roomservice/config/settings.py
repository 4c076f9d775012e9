"""
Application Settings
從 .env / 環境變數讀取設定
"""
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    """執行期設定"""
    supabase_url: Optional[str] = Field(None, description="Supabase 專案 URL")
    supabase_key: Optional[str] = Field(None, description="Supabase API Key")
    order_page_url: str = Field(
        default="http://localhost:3000/order",
        description="房客點餐頁網址（QR Code 內嵌的連結）"
    )
    qr_bucket: str = Field(default="qrcodes", description="QR Code 圖檔的 Storage bucket")
    qr_image_size: int = Field(default=300, gt=0, description="QR Code 圖片邊長 (px)")
    qr_margin: int = Field(default=2, ge=0, description="QR Code 外框留白 (模組數)")
    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            supabase_url=os.getenv("SUPABASE_URL"),
            supabase_key=os.getenv("SUPABASE_KEY"),
            order_page_url=os.getenv("ORDER_PAGE_URL", "http://localhost:3000/order"),
            qr_bucket=os.getenv("QR_BUCKET", "qrcodes"),
            qr_image_size=int(os.getenv("QR_IMAGE_SIZE", "300")),
            qr_margin=int(os.getenv("QR_MARGIN", "2")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    """
    取得設定實例
    用於 FastAPI Dependency Injection
    """
    return Settings.from_env()
