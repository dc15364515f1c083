import inspect
import json
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from branddna.app.main import app, import_brand
from branddna.engine.serializer import to_json, to_shareable_link


@pytest.fixture
def client():
    with TestClient(app) as client:
        yield client


def test_root_and_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    body = client.get("/").json()
    assert body["version"] == "1.0.0"
    assert "/import" in body["endpoints"]


def test_validate_valid_brand(client, default_data):
    response = client.post("/validate", json=default_data)
    assert response.status_code == 200
    assert response.json() == {"valid": True, "errors": []}


def test_validate_reports_field_errors(client, make_data):
    data = make_data({"colors": {"light": {"accent": "400 50% 50%"}}})
    body = client.post("/validate", json=data).json()
    assert body["valid"] is False
    assert body["errors"] == [{
        "field": "colors.light.accent",
        "message": "Invalid HSL color format: 400 50% 50%",
        "code": "INVALID_COLOR",
        "severity": "error",
    }]


def test_validate_strict_query(client, make_data):
    data = make_data({"colors": {"light": {"primary": "0 0% 0%", "background": "0 0% 5%"}}})
    assert client.post("/validate", json=data).json()["valid"] is True
    assert client.post("/validate?strict=true", json=data).json()["valid"] is False


def test_import_json(client, rich_brand):
    response = client.post("/import", json={"json": to_json(rich_brand)})
    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["brandDNA"]["metadata"]["name"] == "Acme Rockets"
    assert body["brandDNA"]["typography"]["fontHeading"]["name"] == "Inter"


def test_import_invalid_json_is_not_an_http_error(client):
    body = client.post("/import", json={"json": "{broken"}).json()
    assert body["success"] is False
    assert body["error"] == "Invalid JSON format"
    assert body["validation"]["errors"][0]["code"] == "INVALID_JSON"


def test_import_link(client, rich_brand):
    body = client.post("/import", json={"link": to_shareable_link(rich_brand)}).json()
    assert body["success"] is True
    assert body["brandDNA"]["strategy"]["values"][0]["id"] == "v1"


def test_import_url(client, brand):
    response = MagicMock(ok=True, status_code=200, text=to_json(brand))
    with patch("branddna.engine.importer.requests.get", return_value=response):
        body = client.post("/import", json={"url": "https://example.com/brand.json"}).json()
    assert body["success"] is True


def test_import_handler_runs_off_the_event_loop():
    # Coroutine handlers run on the loop; blocking URL fetches must not
    assert not inspect.iscoroutinefunction(import_brand)


@pytest.mark.parametrize("payload", [{}, {"json": "{}", "link": "abc"}])
def test_import_requires_exactly_one_source(client, payload):
    assert client.post("/import", json=payload).status_code == 400


def test_import_preview(client, brand):
    body = client.post("/import/preview", json={"json": to_json(brand)}).json()
    assert body["valid"] is True
    assert body["summary"]["brandName"] == "Quickfy"
    assert body["summary"]["colors"] == 11
    assert "No primary logo uploaded" in body["warnings"]


def test_compare(client, brand, rich_brand):
    payload = {"current": brand.to_data(), "imported": rich_brand.to_data()}
    body = client.post("/compare", json=payload).json()
    assert body == [{"field": "Brand Name", "current": "Quickfy", "imported": "Acme Rockets"}]


@pytest.mark.parametrize("fmt, media_type, filename", [
    ("json", "application/json", "quickfy-brand.json"),
    ("css", "text/css", "quickfy-brand.css"),
    ("tailwind", "application/javascript", "quickfy-brand.js"),
    ("typescript", "text/plain", "quickfy-brand.ts"),
])
def test_export(client, brand, fmt, media_type, filename):
    response = client.post(f"/export/{fmt}", json=brand.to_data())
    assert response.status_code == 200
    assert response.headers["content-type"].startswith(media_type)
    assert response.headers["content-disposition"] == f'attachment; filename="{filename}"'


def test_export_non_ascii_name(client, make_brand):
    response = client.post("/export/css", json=make_brand({"metadata": {"name": "品牌"}}).to_data())
    assert response.status_code == 200
    assert response.headers["content-disposition"] == (
        "attachment; filename=\"brand.css\"; filename*=UTF-8''%E5%93%81%E7%89%8C-brand.css"
    )


def test_export_json_round_trips(client, rich_brand):
    response = client.post("/export/json", json=rich_brand.to_data())
    data = json.loads(response.text)
    assert data["exportVersion"] == "1.0.0"
    assert data["metadata"]["name"] == "Acme Rockets"


def test_export_unknown_format(client, brand):
    response = client.post("/export/pdf", json=brand.to_data())
    assert response.status_code == 400
    assert "pdf" in response.json()["detail"]


def test_share(client, brand):
    body = client.post("/share", json=brand.to_data()).json()
    assert body == {"token": to_shareable_link(brand)}


def test_contrast(client):
    body = client.get("/contrast", params={"foreground": "0 0% 0%", "background": "0 0% 100%"}).json()
    assert body == {"ratio": 21.0, "aa": True, "aaa": True, "aaLarge": True, "aaaLarge": True}


def test_contrast_rejects_invalid_color(client):
    response = client.get("/contrast", params={"foreground": "red", "background": "0 0% 100%"})
    assert response.status_code == 400


def test_templates(client):
    listed = client.get("/templates").json()
    assert [t["id"] for t in listed][:2] == ["default", "minimal"]
    assert len(listed) == 7

    filtered = client.get("/templates", params={"category": "professional"}).json()
    assert [t["id"] for t in filtered] == ["professional", "startup"]


def test_template_detail(client):
    body = client.get("/templates/vibrant").json()
    assert body["brandDNA"]["metadata"]["name"] == "Vibrant Brand"
    assert client.get("/templates/missing").status_code == 404


def test_fonts(client):
    assert len(client.get("/fonts").json()) == 18
    serif = client.get("/fonts", params={"category": "serif", "q": "p"}).json()
    assert [f["name"] for f in serif] == ["Playfair Display", "PT Serif"]
    assert len(client.get("/fonts/pairings").json()) == 6
