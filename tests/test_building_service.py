import pytest

from roomservice.schemas.building import BuildingCreate, BuildingUpdate
from roomservice.services.errors import DependencyFailed, Forbidden, NotFound

from .seed import BUILDING_X, BUILDING_Y, OWNER_A, OWNER_B


def test_list_returns_only_own_buildings(buildings, owner_a, owner_b):
    assert [b.id for b in buildings.list_buildings(owner_a)] == [BUILDING_X]
    assert [b.id for b in buildings.list_buildings(owner_b)] == [BUILDING_Y]


def test_create_stamps_owner(db, buildings, owner_b):
    building = buildings.create_building(owner_b, BuildingCreate(name="Lakeside", address="3 Shore Ln"))
    assert building.owner_account_id == OWNER_B
    assert [b.id for b in buildings.list_buildings(owner_b)].count(building.id) == 1


def test_guest_cannot_create(buildings, guest):
    with pytest.raises(Forbidden):
        buildings.create_building(guest, BuildingCreate(name="Nope", address="-"))


def test_get_building_per_mode(buildings, owner_a, guest):
    assert buildings.get_building(owner_a, BUILDING_X).name == "Harbor View"
    assert buildings.get_building(guest, BUILDING_Y).name == "Hillside Lodge"
    with pytest.raises(Forbidden):
        buildings.get_building(owner_a, BUILDING_Y)


def test_update_and_delete_require_ownership(db, buildings, owner_a):
    with pytest.raises(Forbidden):
        buildings.update_building(owner_a, BUILDING_Y, BuildingUpdate(name="Mine now"))
    with pytest.raises(Forbidden):
        buildings.delete_building(owner_a, BUILDING_Y)

    row = next(r for r in db.rows("buildings") if r["id"] == BUILDING_Y)
    assert row["name"] == "Hillside Lodge"


def test_update_own_building(buildings, owner_a):
    building = buildings.update_building(owner_a, BUILDING_X, BuildingUpdate(status="maintenance"))
    assert building.status == "maintenance"
    assert building.owner_account_id == OWNER_A


def test_missing_building(buildings, owner_a):
    with pytest.raises(NotFound):
        buildings.update_building(owner_a, "bld-missing", BuildingUpdate(name="x"))


def test_delete_own_building(db, buildings, owner_a):
    buildings.delete_building(owner_a, BUILDING_X)
    assert buildings.list_buildings(owner_a) == []


def test_store_failure_is_dependency_failure(db, buildings, owner_a):
    db.fail("buildings", "select")
    with pytest.raises(DependencyFailed):
        buildings.list_buildings(owner_a)
