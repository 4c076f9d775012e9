"""
Menu and service catalog: owner CRUD scoping and the guest ordering view.
"""
import pytest

from roomservice.schemas.catalog import (
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
    ServiceItem,
    ServiceItemCreate,
    ServiceItemUpdate,
)
from roomservice.services.errors import Forbidden, NotFound, ValidationFailed

from .seed import BUILDING_X, BUILDING_Y, CAKE, CLEANING, COFFEE, MASSAGE


class TestOwnerCatalog:
    def test_list_is_scoped_to_owned_buildings(self, catalog, owner_a, owner_b):
        assert [i.id for i in catalog.list_items(owner_a, "menu")] == [COFFEE]
        assert [i.id for i in catalog.list_items(owner_b, "menu")] == [CAKE]
        # global items are not part of any owner's list
        assert [i.id for i in catalog.list_items(owner_a, "service")] == [MASSAGE]

    def test_list_category_and_building_filter(self, catalog, owner_a):
        assert catalog.list_items(owner_a, "menu", category="food") == []
        assert catalog.list_items(owner_a, "menu", building_id=BUILDING_Y) == []

    def test_unknown_item_type(self, catalog, owner_a):
        with pytest.raises(ValidationFailed):
            catalog.list_items(owner_a, "spa-package")

    def test_items_carry_their_type(self, catalog, owner_a):
        assert isinstance(catalog.get_item(owner_a, "menu", COFFEE), MenuItem)
        massage = catalog.get_item(owner_a, "service", MASSAGE)
        assert isinstance(massage, ServiceItem)
        assert massage.item_type == "service"
        assert massage.duration_minutes == 60

    def test_create_menu_item(self, db, catalog, owner_a):
        item = catalog.create_item(
            owner_a, MenuItemCreate(name="Club Sandwich", price=12.0, category="food", building_id=BUILDING_X)
        )
        assert item.item_type == "menu"
        assert any(row["id"] == item.id for row in db.rows("menu_items"))

    def test_create_service_item(self, db, catalog, owner_a):
        item = catalog.create_item(
            owner_a,
            ServiceItemCreate(name="Laundry", price=15.0, category="housekeeping",
                              duration_minutes=120, building_id=BUILDING_X),
        )
        assert item.item_type == "service"
        assert any(row["id"] == item.id for row in db.rows("services"))

    def test_create_requires_owned_building(self, db, catalog, owner_a):
        with pytest.raises(Forbidden):
            catalog.create_item(owner_a, MenuItemCreate(name="Tea", price=2.0, building_id=BUILDING_Y))
        with pytest.raises(ValidationFailed):
            catalog.create_item(owner_a, MenuItemCreate(name="Tea", price=2.0))
        assert ("menu_items", "insert") not in db.calls

    def test_update_own_item(self, catalog, owner_a):
        item = catalog.update_item(owner_a, "menu", COFFEE, MenuItemUpdate(price=4.0, is_available=False))
        assert (item.price, item.is_available, item.name) == (4.0, False, "Coffee")

    def test_update_with_wrong_payload_type(self, catalog, owner_a):
        with pytest.raises(ValidationFailed):
            catalog.update_item(owner_a, "menu", COFFEE, ServiceItemUpdate(price=4.0))

    def test_foreign_item_is_forbidden(self, db, catalog, owner_a):
        with pytest.raises(Forbidden):
            catalog.update_item(owner_a, "menu", CAKE, MenuItemUpdate(price=0.0))
        with pytest.raises(Forbidden):
            catalog.delete_item(owner_a, "menu", CAKE)
        assert any(row["id"] == CAKE for row in db.rows("menu_items"))

    def test_global_item_is_read_only_for_owners(self, catalog, owner_a):
        with pytest.raises(Forbidden):
            catalog.update_item(owner_a, "service", CLEANING, ServiceItemUpdate(price=1.0))

    def test_delete_own_item(self, catalog, owner_a):
        catalog.delete_item(owner_a, "service", MASSAGE)
        with pytest.raises(NotFound):
            catalog.get_item(owner_a, "service", MASSAGE)

    def test_guest_cannot_write(self, catalog, guest):
        with pytest.raises(Forbidden):
            catalog.create_item(guest, MenuItemCreate(name="Tea", price=2.0, building_id=BUILDING_X))


class TestGuestCatalog:
    def test_building_items_plus_global_items(self, catalog, guest):
        items = catalog.list_for_guest(guest, BUILDING_X)
        assert [(i.item_type, i.id) for i in items] == [
            ("menu", COFFEE),
            ("service", CLEANING),
            ("service", MASSAGE),
        ]

    def test_other_buildings_items_are_hidden(self, catalog, guest):
        ids = [i.id for i in catalog.list_for_guest(guest, BUILDING_Y)]
        assert ids == [CAKE, CLEANING]

    def test_unavailable_items_are_hidden(self, db, catalog, guest):
        db.tables["menu_items"][0]["is_available"] = False
        assert catalog.list_for_guest(guest, BUILDING_X, "menu") == []

    def test_type_filter(self, catalog, guest):
        assert [i.id for i in catalog.list_for_guest(guest, BUILDING_X, "service")] == [CLEANING, MASSAGE]

    def test_unknown_building(self, catalog, guest):
        with pytest.raises(NotFound):
            catalog.list_for_guest(guest, "bld-missing")
