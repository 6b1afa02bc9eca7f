from recipe_importer.app.core.config import get_settings
from recipe_importer.app.schemas.import_result import ImportResult
from recipe_importer.app.services import import_service


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_import_text_endpoint(client):
    response = client.post(
        "/recipes/import/text",
        json={"text": "Pancakes\nIngredients\n1 cup flour\n2 eggs\nDirections\n1. Mix well\n2. Bake at 350"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["title"] == "Pancakes"
    assert body["ingredients_text"] == "1 cup flour\n2 eggs"
    assert body["error"] is None


def test_import_text_endpoint_reports_empty(client):
    response = client.post("/recipes/import/text", json={"text": ""})
    assert response.status_code == 200
    assert response.json()["error"] == "No text found."


def test_import_html_endpoint(client):
    html = (
        '<script type="application/ld+json">{"@type": "Recipe", "name": "Toast",'
        ' "recipeIngredient": ["2 slices bread"], "recipeInstructions": ["Toast the bread."]}</script>'
    )
    response = client.post("/recipes/import/html", json={"html": html})
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Toast"
    assert body["steps"] == "Toast the bread."


def test_import_url_endpoint(client, monkeypatch):
    async def fake_import(url):
        assert url == "https://example.com/toast"
        return ImportResult(success=True, title="Toast", steps="Toast the bread.")

    monkeypatch.setattr(import_service, "import_recipe_from_url", fake_import)
    response = client.post("/recipes/import/url", json={"url": "https://example.com/toast"})
    assert response.status_code == 200
    assert response.json()["title"] == "Toast"


def test_import_url_endpoint_rejects_private_host(client):
    response = client.post("/recipes/import/url", json={"url": "http://127.0.0.1/admin"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "HTML import failed: URL points to a private or disallowed host"


def test_import_url_missing_field(client):
    response = client.post("/recipes/import/url", json={})
    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == "validation_error"
    assert body["details"][0]["field"] == "body.url"


def test_import_pdf_endpoint(client, monkeypatch):
    received = []

    def fake_import(data):
        received.append(data)
        return ImportResult(success=True, title="Scanned")

    monkeypatch.setattr(import_service, "import_recipe_from_pdf", fake_import)
    response = client.post(
        "/recipes/import/pdf", files={"file": ("recipe.pdf", b"%PDF-1.4 data", "application/pdf")}
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Scanned"
    assert received == [b"%PDF-1.4 data"]


def test_import_pdf_too_large(client, monkeypatch):
    monkeypatch.setenv("RECIPE_PDF_MAX_BYTES", "8")
    get_settings.cache_clear()
    response = client.post(
        "/recipes/import/pdf", files={"file": ("recipe.pdf", b"0123456789", "application/pdf")}
    )
    assert response.status_code == 413
    assert response.json()["detail"] == "PDF too large"


def test_import_pdf_empty_upload(client):
    response = client.post("/recipes/import/pdf", files={"file": ("recipe.pdf", b"", "application/pdf")})
    assert response.status_code == 400
