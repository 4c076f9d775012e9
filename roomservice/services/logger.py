"""
日誌工具
roomservice 的所有 logger 都掛在 "roomservice" 底下，store / storage 呼叫統一用 log_db_operation 記錄
"""
import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

logger = logging.getLogger("roomservice")


def _parse_level(level: Optional[str]) -> int:
    return getattr(logging, (level or "INFO").upper(), logging.INFO)


def configure_logging(level: Optional[str] = None) -> None:
    """
    設定 roomservice logger 的等級

    Args:
        level: 等級名稱，未提供時讀取 LOG_LEVEL 環境變數
    """
    resolved = _parse_level(level or os.getenv("LOG_LEVEL"))
    # 只有在尚未設定 root handler 時才生效（uvicorn / pytest 會自己設定）
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logger.setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    """取得子 logger，例如 roomservice.OrderService"""
    return logger.getChild(name)


def log_db_operation(
    operation: str,
    target: str,
    success: bool,
    rows: Optional[int] = None,
    error: Optional[str] = None,
) -> None:
    """
    記錄一次 store / storage 操作

    Args:
        operation: SELECT / INSERT / UPDATE / DELETE / UPLOAD
        target: 資料表或 bucket 名稱
        success: 是否成功
        rows: 回傳列數
        error: 失敗原因
    """
    kind = "STORAGE" if operation == "UPLOAD" else "DB"
    msg = f"[{kind}] {operation} {target} - {'SUCCESS' if success else 'FAILED'}"

    if rows is not None:
        msg += f" (rows={rows})"

    if success:
        logger.debug(msg)
        return

    if error:
        msg += f" | error={error}"
    logger.error(msg)


configure_logging()
