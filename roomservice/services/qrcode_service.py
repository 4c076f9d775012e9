"""
QR Code 產生服務 (QRCodeService)
✅ 產生房間專屬點餐連結：<ORDER_PAGE_URL>?unit=<unit_id>
✅ 轉成固定尺寸黑白 PNG
✅ 上傳到 Storage（units/<building_id>/<unit_id>.png，可覆寫）
✅ 將公開網址寫回 units.qr_code_url
"""
import base64
from io import BytesIO
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_M
from supabase import Client

from ..config.settings import Settings, get_settings
from .base_db import BaseDBService
from .errors import ConsoleError, DependencyFailed, NotFound
from .logger import log_db_operation


class QRCodeService(BaseDBService):
    """QR Code 產生、上傳與綁定"""

    TABLE_NAME = "units"
    CONTENT_TYPE = "image/png"

    def __init__(self, supabase: Client, settings: Optional[Settings] = None):
        super().__init__(supabase)
        self.settings = settings or get_settings()

    @property
    def bucket(self) -> str:
        return self.settings.qr_bucket

    # ==================== 連結與圖片 ====================

    def build_order_link(self, unit_id: str) -> str:
        """房客點餐頁連結，唯一必要參數為 unit"""
        return f"{self.settings.order_page_url}?{urlencode({'unit': unit_id})}"

    def render_png(self, link: str) -> bytes:
        """
        將連結轉成 PNG

        Args:
            link: 要編碼的連結

        Returns:
            bytes: 固定邊長、固定留白、白底黑碼的 PNG
        """
        size = self.settings.qr_image_size
        try:
            qr = qrcode.QRCode(
                error_correction=ERROR_CORRECT_M,
                box_size=10,
                border=self.settings.qr_margin,
            )
            qr.add_data(link)
            qr.make(fit=True)

            img = qr.make_image(fill_color="black", back_color="white").get_image().convert("RGB")
            img = img.resize((size, size), Image.Resampling.NEAREST)

            buf = BytesIO()
            img.save(buf, format="PNG")
            return buf.getvalue()

        except Exception as e:
            self.logger.error(f"QR Code 產生失敗: {e}")
            raise DependencyFailed("Failed to generate QR code") from e

    def render_data_url(self, unit_id: str) -> str:
        """預覽用：回傳 data URL，不上傳"""
        png = self.render_png(self.build_order_link(unit_id))
        return f"data:{self.CONTENT_TYPE};base64," + base64.b64encode(png).decode("utf-8")

    # ==================== Storage ====================

    @staticmethod
    def artifact_path(building_id: str, unit_id: str) -> str:
        return f"units/{building_id}/{unit_id}.png"

    def ensure_bucket(self) -> None:
        """確認 bucket 存在，不存在就建立公開 bucket；檢查失敗不影響後續上傳"""
        try:
            buckets = self.supabase.storage.list_buckets()
            if any(getattr(b, "name", None) == self.bucket for b in buckets):
                return

            self.logger.warning(f"Storage bucket '{self.bucket}' 不存在，嘗試建立")
            self.supabase.storage.create_bucket(self.bucket, options={"public": True})

        except Exception as e:
            self.logger.warning(f"檢查 Storage bucket 失敗，直接嘗試上傳: {e}")

    def upload(self, building_id: str, unit_id: str, png: bytes) -> str:
        """
        上傳 PNG 並取得公開網址（同一路徑覆寫）

        Returns:
            str: 公開網址
        """
        path = self.artifact_path(building_id, unit_id)
        storage = self.supabase.storage.from_(self.bucket)

        try:
            storage.upload(path, png, {"content-type": self.CONTENT_TYPE, "upsert": "true"})
            url = storage.get_public_url(path)
        except Exception as e:
            log_db_operation("UPLOAD", self.bucket, False, error=str(e))
            raise DependencyFailed("Failed to upload QR code") from e

        log_db_operation("UPLOAD", self.bucket, True, 1)
        # 部分 storage3 版本會在公開網址結尾多一個 '?'
        return url.rstrip("?")

    def attach(self, unit_id: str, url: str) -> Dict[str, Any]:
        """將網址寫回房間；qr_code_url 只由這裡寫入"""
        rows = self._execute(
            self.supabase.table(self.TABLE_NAME)
            .update({"qr_code_url": url, "updated_at": self._now()})
            .eq("id", unit_id),
            "UPDATE",
        )
        if not rows:
            raise NotFound("Unit not found")
        return rows[0]

    # ==================== 完整流程 ====================

    def provision(self, unit_id: str, unit_number: str, building_id: str) -> str:
        """
        產生並綁定房間 QR Code（可重複執行，結果覆寫）

        Args:
            unit_id: 房間 ID
            unit_number: 房號（僅用於日誌）
            building_id: 建築物 ID

        Returns:
            str: QR Code 圖檔公開網址

        Raises:
            DependencyFailed / NotFound: 任一步驟失敗。上傳成功但綁定失敗時，
            已上傳的圖檔保留不清除。
        """
        link = self.build_order_link(unit_id)
        png = self.render_png(link)

        self.ensure_bucket()
        url = self.upload(building_id, unit_id, png)

        try:
            self.attach(unit_id, url)
        except ConsoleError:
            self.logger.warning(
                f"QR Code 已上傳但綁定房間 {unit_number} ({unit_id}) 失敗，"
                f"保留圖檔 {self.artifact_path(building_id, unit_id)}"
            )
            raise

        self.logger.info(f"房間 {unit_number} ({unit_id}) QR Code 綁定完成")
        return url
