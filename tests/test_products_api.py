# tests/test_products_api.py
import logging

import pytest
from fastapi.testclient import TestClient


def _create(client, auth, **overrides):
    body = {"name": "Tst", "price": 10, "category": "x"}
    body.update(overrides)
    r = client.post("/products", json=body, headers=auth)
    assert r.status_code == 201, r.text
    return r.json()


def test_root_welcome(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "/products" in r.json()["message"]


def test_create_then_get(client, auth, laptop):
    r = client.post("/products", json=laptop, headers=auth)
    assert r.status_code == 201
    created = r.json()
    assert created["id"]
    assert {k: v for k, v in created.items() if k != "id"} == laptop

    r2 = client.get(f"/products/{created['id']}")
    assert r2.status_code == 200
    assert r2.json() == created


def test_create_defaults_optional_fields(client, auth):
    p = _create(client, auth)
    assert p["description"] is None
    assert p["inStock"] is True


def test_create_ignores_client_id(client, auth):
    p = _create(client, auth, id="mine")
    assert p["id"] != "mine"


def test_get_unknown_is_404(client):
    r = client.get("/products/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "NotFound", "message": "Product not found"}


def test_create_without_key_fails_before_validation(client):
    # invalid body too: auth runs first
    r = client.post("/products", json={"price": -1})
    assert r.status_code == 401
    assert r.json()["error"] == "AuthenticationError"


def test_create_with_wrong_key(client, laptop):
    r = client.post("/products", json=laptop, headers={"x-api-key": "wrong-key"})
    assert r.status_code == 401


def test_mutations_rejected_when_no_key_configured(store, laptop):
    from app.config import Settings
    from app.main import create_app

    app = create_app(settings=Settings(_env_file=None, API_KEY=None, SEED_SAMPLE_DATA=False), store=store)
    r = TestClient(app).post("/products", json=laptop, headers={"x-api-key": ""})
    assert r.status_code == 401


def test_create_missing_name(client, auth):
    r = client.post("/products", json={"price": 5, "category": "x"}, headers=auth)
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "ValidationError"
    assert "name" in body["fields"]


def test_create_reports_every_bad_field(client, auth):
    r = client.post("/products", json={"name": "", "price": -3, "category": 7, "colour": "red"}, headers=auth)
    assert r.status_code == 400
    assert set(r.json()["fields"]) == {"name", "price", "category", "colour"}


def test_create_rejects_non_json_body(client, auth):
    r = client.post("/products", content=b"not json", headers={**auth, "content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["fields"] == ["body"]


def test_create_rejects_array_body(client, auth):
    r = client.post("/products", json=[1, 2], headers=auth)
    assert r.status_code == 400
    assert r.json()["fields"] == ["body"]


def test_update_keeps_id(client, auth, laptop):
    p = _create(client, auth)
    body = dict(laptop, id="other-id", price=999)
    r = client.put(f"/products/{p['id']}", json=body, headers=auth)
    assert r.status_code == 200
    updated = r.json()
    assert updated["id"] == p["id"]
    assert updated["price"] == 999
    assert client.get("/products/other-id").status_code == 404


def test_update_keeps_omitted_optional_fields(client, auth):
    p = _create(client, auth, description="blue", inStock=False)
    r = client.put(f"/products/{p['id']}", json={"name": "Renamed", "price": 1, "category": "x"}, headers=auth)
    assert r.status_code == 200
    assert r.json()["description"] == "blue"
    assert r.json()["inStock"] is False


def test_update_requires_full_body(client, auth):
    p = _create(client, auth)
    r = client.put(f"/products/{p['id']}", json={"price": 3}, headers=auth)
    assert r.status_code == 400
    assert set(r.json()["fields"]) == {"name", "category"}


def test_update_unknown_id(client, auth, laptop):
    r = client.put("/products/missing", json=laptop, headers=auth)
    assert r.status_code == 404


def test_update_requires_key(client, auth, laptop):
    p = _create(client, auth)
    r = client.put(f"/products/{p['id']}", json=laptop)
    assert r.status_code == 401


def test_delete_twice(client, auth):
    p = _create(client, auth)
    r1 = client.delete(f"/products/{p['id']}", headers=auth)
    assert r1.status_code == 204
    assert r1.content == b""
    r2 = client.delete(f"/products/{p['id']}", headers=auth)
    assert r2.status_code == 404
    assert r2.json()["error"] == "NotFound"


def test_delete_requires_key(client, auth):
    p = _create(client, auth)
    assert client.delete(f"/products/{p['id']}").status_code == 401
    assert client.get(f"/products/{p['id']}").status_code == 200


def test_list_filters_and_paginates(client, auth):
    for i in range(25):
        _create(client, auth, name=f"Laptop {i}", category="electronics")
    _create(client, auth, name="Kettle", category="kitchen")

    r = client.get("/products", params={"category": "electronics", "limit": 10})
    body = r.json()
    assert len(body["data"]) == 10
    assert body["pagination"] == {"total": 25, "page": 1, "totalPages": 3}

    r3 = client.get("/products", params={"category": "electronics", "page": 3, "limit": 10})
    assert len(r3.json()["data"]) == 5
    assert r3.json()["data"][-1]["name"] == "Laptop 24"

    r4 = client.get("/products", params={"category": "electronics", "page": 4, "limit": 10})
    assert r4.json()["data"] == []
    assert r4.json()["pagination"]["total"] == 25


def test_list_search_is_case_insensitive(client, auth):
    _create(client, auth, name="Laptop")
    _create(client, auth, name="Mouse")
    r = client.get("/products", params={"search": "lap"})
    assert [p["name"] for p in r.json()["data"]] == ["Laptop"]


def test_list_empty(client):
    r = client.get("/products")
    assert r.json() == {"data": [], "pagination": {"total": 0, "page": 1, "totalPages": 0}}


@pytest.mark.parametrize("params", [{"page": "0"}, {"limit": "-5"}, {"limit": "abc"}, {"page": "1.5"}])
def test_list_rejects_bad_paging(client, params):
    r = client.get("/products", params=params)
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidQuery"


def test_stats_route_is_not_an_id(client, auth):
    _create(client, auth, price=1200, category="electronics")
    _create(client, auth, price=800, category="electronics")
    _create(client, auth, price=50, category="kitchen")
    r = client.get("/products/stats")
    assert r.status_code == 200
    stats = r.json()
    assert stats["totalProducts"] == 3
    assert stats["categoryCount"] == {"electronics": 2, "kitchen": 1}
    assert stats["totalValue"] == 2050
    assert stats["averagePrice"] == pytest.approx(683.33, abs=0.01)


def test_stats_empty(client):
    assert client.get("/products/stats").json() == {
        "totalProducts": 0,
        "categoryCount": {},
        "totalValue": 0,
        "averagePrice": 0,
    }


def test_unknown_route_and_method(client):
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert r.json()["error"] == "NotFound"
    r2 = client.patch("/products/abc")
    assert r2.status_code == 405
    assert r2.json()["error"] == "MethodNotAllowed"


def test_unexpected_error_is_500(app, auth, laptop, monkeypatch):
    store = app.state.store

    def boom(fields):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(store, "insert", boom)
    # translated in-process: nothing is re-raised to the test client
    client = TestClient(app)
    r = client.post("/products", json=laptop, headers=auth)
    assert r.status_code == 500
    assert r.json() == {"error": "Internal", "message": "An unexpected error occurred"}


def test_seeded_app_has_sample_catalog():
    from app.config import Settings
    from app.main import create_app

    app = create_app(settings=Settings(_env_file=None, API_KEY="k", SEED_SAMPLE_DATA=True))
    stats = TestClient(app).get("/products/stats").json()
    assert stats["totalProducts"] == 3
    assert stats["categoryCount"] == {"electronics": 2, "kitchen": 1}


def test_non_ascii_api_key_matches_utf8_header(store, laptop):
    from app.config import Settings
    from app.main import create_app

    app = create_app(settings=Settings(_env_file=None, API_KEY="clé", SEED_SAMPLE_DATA=False), store=store)
    client = TestClient(app)
    r = client.post("/products", json=laptop, headers=[(b"x-api-key", "clé".encode("utf-8"))])
    assert r.status_code == 201
    r2 = client.post("/products", json=laptop, headers=[(b"x-api-key", "clé".encode("latin-1"))])
    assert r2.status_code == 401


def test_integer_prices_echo_unchanged(client, auth):
    p = _create(client, auth, price=1200)
    assert isinstance(p["price"], int)
    _create(client, auth, price=850)
    stats = client.get("/products/stats").json()
    assert stats["totalValue"] == 2050
    assert isinstance(stats["totalValue"], int)
    assert isinstance(_create(client, auth, price=9.5)["price"], float)


def test_every_request_is_logged(app, auth, laptop, monkeypatch, caplog):
    caplog.set_level(logging.INFO, logger="app.main")
    client = TestClient(app)
    client.get("/products")

    def boom(fields):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(app.state.store, "insert", boom)
    assert client.post("/products", json=laptop, headers=auth).status_code == 500

    lines = [rec.getMessage() for rec in caplog.records if rec.name == "app.main"]
    assert any(line.startswith("GET /products 200 ") for line in lines)
    assert any(line.startswith("POST /products 500 ") for line in lines)
