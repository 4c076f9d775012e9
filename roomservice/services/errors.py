"""
錯誤分類
所有服務層錯誤皆繼承 ConsoleError，由 routers 轉成 HTTP 回應
"""
from typing import Optional


class ConsoleError(Exception):
    """服務層錯誤基底類別"""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(ConsoleError):
    """資料不存在（Building / Unit / CatalogItem / Order）"""

    status_code = 404
    default_message = "Record not found"


class Forbidden(ConsoleError):
    """資料存在，但呼叫者不擁有其所屬建築物"""

    status_code = 403
    default_message = "You do not have permission to access this record"


class ValidationFailed(ConsoleError):
    """輸入格式錯誤，例如空購物車、非正數數量"""

    status_code = 422
    default_message = "Invalid input"


class DependencyFailed(ConsoleError):
    """Store / Storage / Auth 呼叫失敗或逾時"""

    status_code = 503
    default_message = "A backing service is unavailable, please try again"


class PartialWriteRolledBack(DependencyFailed):
    """
    訂單主檔已建立、明細寫入失敗，已發出刪除主檔的補償操作

    訊息沿用原始明細寫入錯誤；原始例外保留在 original 與 __cause__。
    rolled_back 為 False 時代表補償刪除也失敗，主檔仍留在資料庫（沒有明細）。
    """

    def __init__(self, original: Exception, order_id: str, rolled_back: bool = True):
        self.original = original
        self.order_id = order_id
        self.rolled_back = rolled_back
        message = original.message if isinstance(original, ConsoleError) else str(original)
        super().__init__(message)
