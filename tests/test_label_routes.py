from fastapi.testclient import TestClient

from label_registry.main import create_app


def test_list_labels_empty(client):
    response = client.get("/api/labels")

    assert response.status_code == 200
    assert response.json() == []


def test_generate_and_list(client):
    response = client.post("/api/labels/generate", json={"count": 3, "item": " Vela "})

    assert response.status_code == 200
    body = response.json()
    assert [label["code"] for label in body["added"]] == [
        "KIOSCO-922-00001",
        "KIOSCO-922-00002",
        "KIOSCO-922-00003",
    ]
    assert {label["art"] for label in body["added"]} == {"Vela"}
    assert set(body["added"][0]) == {"id", "code", "art", "createdAt"}
    assert body["state"] == {"prefix": "KIOSCO-922-", "digits": 5, "next": 4, "nameSeq": 4}

    listed = client.get("/api/labels").json()
    assert listed == body["added"]


def test_generate_without_body_creates_one_label(client):
    response = client.post("/api/labels/generate")

    assert response.status_code == 200
    assert response.json()["added"][0]["art"] == "Articulo 01"


def test_generate_count_out_of_range(client):
    for count in (0, 1000):
        response = client.post("/api/labels/generate", json={"count": count})
        assert response.status_code == 400
        assert "error" in response.json()

    assert client.get("/api/labels").json() == []


def test_generate_count_not_a_number(client):
    response = client.post("/api/labels/generate", json={"count": "muchos"})

    assert response.status_code == 400
    assert "count" in response.json()["error"]


def test_update_label(client):
    client.post("/api/labels/generate", json={"count": 2})

    response = client.put("/api/labels/1", json={"art": " Nuevo ", "code": "ZZ-1"})

    assert response.status_code == 200
    assert response.json()["art"] == "Nuevo"
    assert response.json()["code"] == "ZZ-1"
    assert response.json()["createdAt"].endswith("Z")


def test_update_label_errors(client):
    client.post("/api/labels/generate", json={"count": 2})

    conflict = client.put("/api/labels/2", json={"code": "KIOSCO-922-00001"})
    empty = client.put("/api/labels/2", json={"code": "  "})
    missing = client.put("/api/labels/99", json={"art": "x"})
    bad_id = client.put("/api/labels/abc", json={"art": "x"})
    own = client.put("/api/labels/2", json={"code": "KIOSCO-922-00002"})

    assert conflict.status_code == 409
    assert conflict.json() == {"error": "code duplicado"}
    assert empty.status_code == 400
    assert missing.status_code == 404
    assert bad_id.status_code == 400
    assert own.status_code == 200


def test_delete_label(client):
    client.post("/api/labels/generate", json={"count": 2})

    first = client.delete("/api/labels/1")
    second = client.delete("/api/labels/1")

    assert first.status_code == 200
    assert first.json() == {"ok": True}
    assert second.status_code == 404
    assert second.json() == {"error": "Etiqueta no encontrada"}
    assert [label["id"] for label in client.get("/api/labels").json()] == [2]


def test_delete_all_not_available_in_derived_mode(client):
    response = client.delete("/api/labels")

    assert response.status_code == 404


def test_state_derived(client):
    client.post("/api/labels/generate", json={"count": 2})

    read = client.get("/api/state")
    patched = client.patch("/api/state", json={"prefix": "OTRO", "digits": 1, "next": 100})

    expected = {"prefix": "KIOSCO-922-", "digits": 5, "next": 3, "nameSeq": 3}
    assert read.json() == expected
    assert patched.status_code == 200
    assert patched.json() == expected


def test_stored_mode_flow(stored_client):
    generated = stored_client.post("/api/labels/generate", json={"count": 3}).json()
    assert [label["code"] for label in generated["added"]] == ["A-001", "A-002", "A-003"]
    assert [label["art"] for label in generated["added"]] == ["Articulo"] * 3
    assert generated["state"] == {"prefix": "A-", "digits": 3, "next": 4}

    patched = stored_client.patch("/api/state", json={"prefix": "B-", "next": 10})
    assert patched.json() == {"prefix": "B-", "digits": 3, "next": 10}

    invalid = stored_client.patch("/api/state", json={"digits": -2})
    assert invalid.status_code == 400

    cleared = stored_client.delete("/api/labels")
    assert cleared.json() == {"ok": True, "state": {"prefix": "B-", "digits": 3, "next": 1}}
    assert stored_client.get("/api/labels").json() == []


def test_stored_mode_survives_restart(stored_settings):
    with TestClient(create_app(stored_settings)) as first:
        added = first.post("/api/labels/generate", json={"count": 3}).json()["added"]

    with TestClient(create_app(stored_settings)) as second:
        assert second.get("/api/labels").json() == added
        assert second.get("/api/state").json()["next"] == 4


def test_derived_patch_ignores_ill_typed_body(client):
    response = client.patch("/api/state", json={"digits": "muchos", "next": [1]})

    assert response.status_code == 200
    assert response.json() == {"prefix": "KIOSCO-922-", "digits": 5, "next": 1, "nameSeq": 1}


def test_derived_patch_ignores_non_object_body(client):
    response = client.patch("/api/state", json=["x"])

    assert response.status_code == 200
    assert response.json()["next"] == 1


def test_stored_patch_rejects_ill_typed_body(stored_client):
    wrong_type = stored_client.patch("/api/state", json={"digits": "muchos"})
    not_object = stored_client.patch("/api/state", json=[1, 2])

    assert wrong_type.status_code == 400
    assert "digits" in wrong_type.json()["error"]
    assert not_object.status_code == 400
    assert stored_client.get("/api/state").json() == {"prefix": "A-", "digits": 3, "next": 1}


def test_generate_ignores_non_string_item(client):
    response = client.post("/api/labels/generate", json={"count": 1, "item": 5})

    assert response.status_code == 200
    assert response.json()["added"][0]["art"] == "Articulo 01"
