import pytest
from fastapi.testclient import TestClient

from roomservice.config.settings import Settings, get_settings
from roomservice.config.supabase import get_supabase
from roomservice.main import create_app
from roomservice.schemas.context import GuestContext, OwnerContext
from roomservice.services.access_guard import AccessGuard
from roomservice.services.building_service import BuildingService
from roomservice.services.catalog_service import CatalogService
from roomservice.services.order_service import OrderService
from roomservice.services.qrcode_service import QRCodeService
from roomservice.services.unit_service import UnitService

from .fakes import FakeSupabase
from .seed import (
    BUILDING_X,
    BUILDING_Y,
    CAKE,
    CLEANING,
    COFFEE,
    MASSAGE,
    OWNER_A,
    OWNER_B,
    UNIT_X1,
    UNIT_X2,
    UNIT_Y1,
)


@pytest.fixture
def settings():
    return Settings(
        supabase_url="https://fake.supabase.co",
        supabase_key="test-key",
        order_page_url="https://console.example.com/order",
        qr_bucket="qrcodes",
        qr_image_size=300,
        qr_margin=2,
    )


@pytest.fixture
def db():
    fake = FakeSupabase()
    fake.seed(
        "buildings",
        {"id": BUILDING_X, "owner_account_id": OWNER_A, "name": "Harbor View",
         "address": "1 Pier Rd", "total_units": 2, "status": "active"},
        {"id": BUILDING_Y, "owner_account_id": OWNER_B, "name": "Hillside Lodge",
         "address": "9 Ridge Ave", "total_units": 1, "status": "active"},
    )
    fake.seed(
        "units",
        {"id": UNIT_X1, "building_id": BUILDING_X, "unit_number": "101", "status": "available"},
        {"id": UNIT_X2, "building_id": BUILDING_X, "unit_number": "102", "status": "occupied"},
        {"id": UNIT_Y1, "building_id": BUILDING_Y, "unit_number": "A1", "status": "available"},
    )
    fake.seed(
        "menu_items",
        {"id": COFFEE, "building_id": BUILDING_X, "name": "Coffee", "price": 3.5,
         "category": "drink", "is_available": True},
        {"id": CAKE, "building_id": BUILDING_Y, "name": "Cheesecake", "price": 6.0,
         "category": "dessert", "is_available": True},
    )
    fake.seed(
        "services",
        {"id": MASSAGE, "building_id": BUILDING_X, "name": "Massage", "price": 85.0,
         "category": "spa", "duration_minutes": 60, "is_available": True},
        {"id": CLEANING, "building_id": None, "name": "Daily Room Cleaning", "price": 25.0,
         "category": "housekeeping", "duration_minutes": 30, "is_available": True},
    )
    fake.auth.tokens.update({"token-a": OWNER_A, "token-b": OWNER_B})
    return fake


@pytest.fixture
def owner_a():
    return OwnerContext(account_id=OWNER_A)


@pytest.fixture
def owner_b():
    return OwnerContext(account_id=OWNER_B)


@pytest.fixture
def guest():
    return GuestContext()


@pytest.fixture
def guard(db):
    return AccessGuard(db)


@pytest.fixture
def qrcodes(db, settings):
    return QRCodeService(db, settings)


@pytest.fixture
def buildings(db, guard):
    return BuildingService(db, guard)


@pytest.fixture
def units(db, guard, qrcodes):
    return UnitService(db, guard, qrcodes)


@pytest.fixture
def catalog(db, guard):
    return CatalogService(db, guard)


@pytest.fixture
def orders(db, guard):
    return OrderService(db, guard)


@pytest.fixture
def client(db, settings):
    app = create_app()
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
