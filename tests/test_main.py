import pytest
from unittest.mock import MagicMock, patch
from fastapi.testclient import TestClient
from main import app
from database import get_db
from conftest import property_payload

client = TestClient(app)


@pytest.fixture(autouse=True)
def clean_overrides():
    yield
    app.dependency_overrides.clear()
    client.cookies.clear()


def test_healthcheck():
    response = client.get("/healthcheck")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "timestamp" in response.json()


@patch("main.templates.TemplateResponse")
def test_catalog_page_with_session_cookie(mock_template):
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    mock_template.return_value = "rendered"

    client.cookies.set("session_id", "session_123")

    response = client.get("/?city=porto")

    assert response.status_code == 200
    assert mock_template.called
    assert mock_template.call_args[0][1] == "catalog.html"
    context = mock_template.call_args[0][2]
    assert context["filters"].city.value == "porto"


def test_catalog_page_renders_listings(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    client.post("/properties/", json=property_payload(title="Casa do Mar", city="faro", is_featured=True))
    client.post("/properties/", json=property_payload(title="Flat in Braga", city="braga"))

    response = client.get("/?city=faro")

    assert response.status_code == 200
    assert "Casa do Mar" in response.text
    assert "Flat in Braga" not in response.text


def test_catalog_page_marks_favorites(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    prop = client.post("/properties/", json=property_payload(title="Loved")).json()
    client.post("/favorites/", json={"session_id": "session_123", "property_id": prop["id"]})

    client.cookies.set("session_id", "session_123")
    response = client.get(f"/catalog/{prop['id']}")

    assert response.status_code == 200
    assert "Loved" in response.text
    assert 'class="favorite"' in response.text


def test_property_page_not_found(db_session):
    app.dependency_overrides[get_db] = lambda: db_session

    response = client.get("/catalog/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Property not found"
