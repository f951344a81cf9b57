"""API tests: books endpoints."""
import uuid

import pytest

from catalog_core.barcode import validate
from catalog_core.location_types import LocationType
from repositories.book_repository import create_book
from repositories.location_repository import create_location

pytestmark = pytest.mark.api


@pytest.fixture
def locations(db_session, new_barcode):
    """building > room > cabinet > shelf created through the repository; returns {type: id}."""
    ids = {}
    parent = None
    for loc_type in LocationType:
        loc = create_location(
            db_session,
            type=loc_type,
            name=f"{loc_type.value}-{uuid.uuid4().hex[:6]}",
            barcode=new_barcode(),
            parent_id=parent,
            address="9 Book Ln" if loc_type is LocationType.BUILDING else None,
        )
        ids[loc_type.value] = parent = loc.id
    return ids


def test_create_book_issues_book_barcode(client):
    r = client.post("/api/books", json={"title": "The Name of the Rose", "year": 1980})
    assert r.status_code == 201, r.text
    data = r.json()
    assert validate(data["barcode"])
    assert data["barcode"].startswith("200")
    assert data["factory_barcode"] is None


def test_create_book_on_shelf(client, locations):
    r = client.post("/api/books", json={"title": "Shelved", "location_id": locations["shelf"]})
    assert r.status_code == 201
    assert r.json()["location_id"] == locations["shelf"]
    listed = client.get(f"/api/books/location/{locations['shelf']}").json()
    assert [b["title"] for b in listed] == ["Shelved"]


def test_create_book_not_on_shelf(client, locations):
    r = client.post("/api/books", json={"title": "Misplaced", "location_id": locations["cabinet"]})
    assert r.status_code == 422
    assert r.json()["code"] == "INVALID_LOCATION_TYPE"


def test_create_book_unknown_location(client):
    """An unknown location_id in the body is a bad reference, not a missing resource."""
    r = client.post("/api/books", json={"title": "Lost", "location_id": str(uuid.uuid4())})
    assert r.status_code == 422
    assert r.json()["code"] == "PARENT_NOT_FOUND"


def test_create_book_invalid_factory_barcode(client):
    r = client.post("/api/books", json={"title": "Bad code", "factory_barcode": "4006381333932"})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_BARCODE"


def test_create_book_duplicate_factory_barcode(client, new_barcode):
    factory = new_barcode()
    first = client.post("/api/books", json={"title": "First", "factory_barcode": factory})
    assert first.status_code == 201
    r = client.post("/api/books", json={"title": "Second", "factory_barcode": factory})
    assert r.status_code == 409
    assert r.json()["code"] == "BARCODE_EXISTS"


def test_create_book_blank_title(client):
    assert client.post("/api/books", json={"title": "  "}).status_code == 400


def test_scan_by_issued_factory_and_id(client, new_barcode):
    factory = new_barcode()
    book = client.post("/api/books", json={"title": "Scannable", "factory_barcode": factory}).json()
    for value in (book["barcode"], factory, book["id"]):
        r = client.get(f"/api/books/scan/{value}")
        assert r.status_code == 200
        assert r.json()["id"] == book["id"]


def test_scan_invalid_value(client):
    r = client.get("/api/books/scan/not-a-barcode")
    assert r.status_code == 400


def test_scan_not_found(client, new_barcode):
    assert client.get(f"/api/books/scan/{new_barcode()}").status_code == 404


def test_get_and_delete_book(client):
    book = client.post("/api/books", json={"title": "Short lived"}).json()
    assert client.get(f"/api/books/{book['id']}").status_code == 200
    assert client.delete(f"/api/books/{book['id']}").status_code == 204
    assert client.get(f"/api/books/{book['id']}").status_code == 404
    assert client.delete(f"/api/books/{book['id']}").status_code == 404


def test_shelf_with_book_cannot_be_deleted(client, locations):
    client.post("/api/books", json={"title": "Anchor", "location_id": locations["shelf"]})
    r = client.delete(f"/api/locations/{locations['shelf']}")
    assert r.status_code == 409
    assert r.json()["code"] == "LOCATION_HAS_CHILDREN"


def test_book_barcode_png(client):
    book = client.post("/api/books", json={"title": "Labelled"}).json()
    r = client.get(f"/api/books/{book['id']}/barcode")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content.startswith(b"\x89PNG\r\n\x1a\n")


def test_book_barcode_png_unknown_book(client):
    assert client.get(f"/api/books/{uuid.uuid4()}/barcode").status_code == 404


def test_book_barcode_png_rejects_malformed_stored_code(client, db_session):
    """A row whose barcode fails the check digit is not rendered."""
    book = create_book(db_session, barcode="4006381333932", title="Imported with a typo")
    r = client.get(f"/api/books/{book.id}/barcode")
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_BARCODE"
