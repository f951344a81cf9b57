"""API tests: locations endpoints using test DB (client fixture overrides get_db)."""
import uuid

import pytest

from catalog_core.barcode import validate

pytestmark = pytest.mark.api


def _create(client, **body):
    return client.post("/api/locations", json=body)


@pytest.fixture
def building(client):
    r = _create(client, type="building", name=f"Building {uuid.uuid4().hex[:6]}", address="1 Main St")
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def room(client, building):
    r = _create(client, type="room", name="Reading Room", parent_id=building["id"])
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def cabinet(client, room):
    r = _create(client, type="cabinet", name="Cabinet A", parent_id=room["id"])
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def shelf(client, cabinet):
    r = _create(client, type="shelf", name="Shelf 1", parent_id=cabinet["id"])
    assert r.status_code == 201, r.text
    return r.json()


def test_create_building_issues_location_barcode(building):
    """POST creates a building with a valid EAN-13 from the location prefix."""
    assert building["type"] == "building"
    assert building["parent_id"] is None
    assert building["address"] == "1 Main St"
    assert validate(building["barcode"])
    assert building["barcode"].startswith("210")


def test_barcodes_are_distinct(building, room, cabinet, shelf):
    codes = {loc["barcode"] for loc in (building, room, cabinet, shelf)}
    assert len(codes) == 4


def test_create_building_without_address(client):
    r = _create(client, type="building", name="No Address")
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_create_building_with_parent(client, building):
    r = _create(client, type="building", name="Nested", address="2 Main St", parent_id=building["id"])
    assert r.status_code == 422
    assert r.json()["code"] == "LOCATION_CANNOT_HAVE_PARENT"


def test_create_invalid_type(client):
    r = _create(client, type="floor", name="Floor 1")
    assert r.status_code == 422
    assert r.json()["code"] == "INVALID_LOCATION_TYPE"


def test_create_blank_name(client, building):
    r = _create(client, type="room", name="   ", parent_id=building["id"])
    assert r.status_code == 400


def test_create_cabinet_under_building_rejected(client, building):
    r = _create(client, type="cabinet", name="Cab", parent_id=building["id"])
    assert r.status_code == 422
    assert r.json()["code"] == "INVALID_LOCATION_TYPE"


def test_create_room_under_shelf_rejected(client, shelf):
    r = _create(client, type="room", name="Odd Room", parent_id=shelf["id"])
    assert r.status_code == 422
    assert r.json()["code"] == "INVALID_LOCATION_TYPE"


def test_create_with_unknown_parent(client):
    r = _create(client, type="room", name="Orphan", parent_id=str(uuid.uuid4()))
    assert r.status_code == 422
    assert r.json()["code"] == "PARENT_NOT_FOUND"


def test_get_by_id_and_404(client, room):
    r = client.get(f"/api/locations/{room['id']}")
    assert r.status_code == 200
    assert r.json()["name"] == "Reading Room"
    assert client.get(f"/api/locations/{uuid.uuid4()}").status_code == 404


def test_get_by_barcode(client, cabinet):
    r = client.get(f"/api/locations/barcode/{cabinet['barcode']}")
    assert r.status_code == 200
    assert r.json()["id"] == cabinet["id"]


def test_get_by_invalid_barcode(client):
    r = client.get("/api/locations/barcode/1234567890123")
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_BARCODE"


def test_list_by_type(client, building):
    r = client.get("/api/locations/type/building")
    assert r.status_code == 200
    assert building["id"] in [loc["id"] for loc in r.json()]
    assert client.get("/api/locations/type/attic").status_code == 422


def test_children(client, building, room):
    r = client.get(f"/api/locations/{building['id']}/children", params={"type": "room"})
    assert r.status_code == 200
    assert [loc["id"] for loc in r.json()] == [room["id"]]
    r = client.get(f"/api/locations/{building['id']}/children")
    assert [loc["id"] for loc in r.json()] == [room["id"]]


def test_children_wrong_type(client, building):
    r = client.get(f"/api/locations/{building['id']}/children", params={"type": "shelf"})
    assert r.status_code == 422
    assert r.json()["code"] == "INVALID_LOCATION_TYPE"


def test_children_of_shelf_with_type(client, shelf):
    """A shelf has no child type, so any requested type is rejected."""
    r = client.get(f"/api/locations/{shelf['id']}/children", params={"type": "shelf"})
    assert r.status_code == 422
    assert r.json()["code"] == "INVALID_LOCATION_TYPE"
    assert client.get(f"/api/locations/{shelf['id']}/children").json() == []


def test_children_of_missing_parent(client):
    r = client.get(f"/api/locations/{uuid.uuid4()}/children")
    assert r.status_code == 422
    assert r.json()["code"] == "PARENT_NOT_FOUND"


def test_location_barcode_png(client, room):
    r = client.get(f"/api/locations/{room['id']}/barcode")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content.startswith(b"\x89PNG\r\n\x1a\n")
    assert client.get(f"/api/locations/{uuid.uuid4()}/barcode").status_code == 404


def test_update_name_and_description(client, room):
    r = client.put(f"/api/locations/{room['id']}", json={"name": "Quiet Room", "description": "No phones"})
    assert r.status_code == 200
    data = r.json()
    assert data["name"] == "Quiet Room"
    assert data["description"] == "No phones"
    assert data["barcode"] == room["barcode"]


def test_update_blank_name_rejected(client, room):
    r = client.put(f"/api/locations/{room['id']}", json={"name": " "})
    assert r.status_code == 400


def test_reparent_cabinet(client, building, cabinet):
    other = _create(client, type="room", name="Annex", parent_id=building["id"]).json()
    r = client.put(f"/api/locations/{cabinet['id']}", json={"parent_id": other["id"]})
    assert r.status_code == 200
    assert r.json()["parent_id"] == other["id"]


def test_reparent_cabinet_under_building_rejected(client, building, cabinet):
    r = client.put(f"/api/locations/{cabinet['id']}", json={"parent_id": building["id"]})
    assert r.status_code == 422
    assert r.json()["code"] == "INVALID_LOCATION_TYPE"


def test_reparent_building_rejected(client, building, room):
    r = client.put(f"/api/locations/{building['id']}", json={"parent_id": room["id"]})
    assert r.status_code == 422
    assert r.json()["code"] == "LOCATION_CANNOT_HAVE_PARENT"


def test_reparent_to_missing_parent(client, cabinet):
    r = client.put(f"/api/locations/{cabinet['id']}", json={"parent_id": str(uuid.uuid4())})
    assert r.status_code == 422
    assert r.json()["code"] == "PARENT_NOT_FOUND"


def test_delete_with_children_then_without(client, cabinet, shelf):
    """A cabinet with a shelf cannot be deleted until the shelf is gone."""
    r = client.delete(f"/api/locations/{cabinet['id']}")
    assert r.status_code == 409
    assert r.json()["code"] == "LOCATION_HAS_CHILDREN"

    assert client.delete(f"/api/locations/{shelf['id']}").status_code == 204
    assert client.delete(f"/api/locations/{cabinet['id']}").status_code == 204
    assert client.get(f"/api/locations/{cabinet['id']}").status_code == 404


def test_delete_404(client):
    r = client.delete("/api/locations/unknown-loc")
    assert r.status_code == 404
