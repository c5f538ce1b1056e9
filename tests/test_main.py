import pytest
from fastapi.testclient import TestClient

from label_registry.main import create_app, get_port_from_args


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["--port", "3215"], 3215),
        (["--port=4000"], 4000),
        (["--reload", "--port", "81"], 81),
        (["--port", "abc"], None),
        (["--port"], None),
        ([], None),
    ],
)
def test_get_port_from_args(argv, expected):
    assert get_port_from_args(argv) == expected


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "mode": "derived"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_startup_creates_data_file(derived_settings, tmp_path):
    with TestClient(create_app(derived_settings)):
        pass

    assert (tmp_path / "data" / "db.json").exists()


def test_frontend_fallback_serves_index(make_settings, tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html>etiquetas</html>", encoding="utf-8")
    (public / "app.js").write_text("console.log(1)", encoding="utf-8")

    with TestClient(create_app(make_settings())) as test_client:
        index = test_client.get("/cualquier/ruta")
        asset = test_client.get("/app.js")
        root = test_client.get("/")

    assert index.status_code == 200
    assert "etiquetas" in index.text
    assert asset.text == "console.log(1)"
    assert "etiquetas" in root.text


def test_frontend_missing_index(client):
    response = client.get("/no-existe")

    assert response.status_code == 404
    assert response.json() == {"error": "No encontrado"}
