"""
Services Package
統一管理所有服務層邏輯
"""

from .base_db import BaseDBService
from .ownership_service import OwnershipService
from .access_guard import AccessGuard
from .building_service import BuildingService
from .unit_service import UnitService
from .catalog_service import CatalogService
from .qrcode_service import QRCodeService
from .cart import Cart, compute_total
from .order_service import OrderService
from .errors import (
    ConsoleError,
    NotFound,
    Forbidden,
    ValidationFailed,
    DependencyFailed,
    PartialWriteRolledBack,
)
from .logger import logger

__all__ = [
    'BaseDBService',
    'OwnershipService',
    'AccessGuard',
    'BuildingService',
    'UnitService',
    'CatalogService',
    'QRCodeService',
    'Cart',
    'compute_total',
    'OrderService',
    'ConsoleError',
    'NotFound',
    'Forbidden',
    'ValidationFailed',
    'DependencyFailed',
    'PartialWriteRolledBack',
    'logger',
]
