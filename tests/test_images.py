import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from main import app
from database import get_db
from conftest import property_payload
import models

client = TestClient(app)


@pytest.fixture(autouse=True)
def clean_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def property_id(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    return client.post("/properties/", json=property_payload()).json()["id"]


def test_create_image_success(property_id):
    payload = {
        "property_id": property_id,
        "image_url": "https://example.com/terrace.jpg",
        "alt_text": "Terrace",
        "is_primary": True,
        "sort_order": 3
    }

    response = client.post("/images/", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["property_id"] == property_id
    assert data["image_url"] == "https://example.com/terrace.jpg"
    assert data["is_primary"] is True
    assert data["sort_order"] == 3


def test_create_image_defaults(property_id):
    response = client.post("/images/", json={"property_id": property_id, "image_url": "https://example.com/a.jpg"})

    assert response.status_code == 201
    assert response.json()["is_primary"] is False
    assert response.json()["sort_order"] == 0
    assert response.json()["alt_text"] == ""


def test_second_primary_image_demotes_first(property_id):
    first = client.post("/images/", json={
        "property_id": property_id, "image_url": "https://example.com/a.jpg", "is_primary": True
    }).json()
    client.post("/images/", json={
        "property_id": property_id, "image_url": "https://example.com/b.jpg", "is_primary": True
    })

    images = client.get(f"/properties/{property_id}").json()["images"]

    assert [i["is_primary"] for i in images] == [False, True]
    assert images[0]["id"] == first["id"]


def test_create_image_property_not_found():
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    mock_db.query.return_value.filter.return_value.with_for_update.return_value.first.return_value = None

    response = client.post("/images/", json={"property_id": 999, "image_url": "https://example.com/a.jpg"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Property not found"
    assert not mock_db.add.called


def test_create_image_invalid_url():
    app.dependency_overrides[get_db] = lambda: MagicMock()

    response = client.post("/images/", json={"property_id": 1, "image_url": "not a url"})
    assert response.status_code == 422


def test_update_image_primary_flag(property_id):
    first = client.post("/images/", json={
        "property_id": property_id, "image_url": "https://example.com/a.jpg", "is_primary": True
    }).json()
    second = client.post("/images/", json={
        "property_id": property_id, "image_url": "https://example.com/b.jpg", "sort_order": 1
    }).json()

    response = client.patch(f"/images/{second['id']}", json={"is_primary": True})

    assert response.status_code == 200
    images = client.get(f"/properties/{property_id}").json()["images"]
    assert {i["id"]: i["is_primary"] for i in images} == {first["id"]: False, second["id"]: True}


def test_update_image_not_found(db_session):
    app.dependency_overrides[get_db] = lambda: db_session

    response = client.patch("/images/999", json={"alt_text": "x"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Image not found"


def test_delete_image(property_id, db_session):
    image = client.post("/images/", json={"property_id": property_id, "image_url": "https://example.com/a.jpg"}).json()

    response = client.delete(f"/images/{image['id']}")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert db_session.query(models.PropertyImage).count() == 0
    assert client.delete(f"/images/{image['id']}").status_code == 404
