import pytest

from shared.core.auth import create_access_token
from shared.core.exceptions import StorageError
from inventory_service.app.core.snapshot_store import InMemorySnapshotStore, get_snapshot_store
from inventory_service.app.main import app

from conftest import item_ids

NEW_TOILET = {
    "product_type": "toilet",
    "product_details": {"name": "Champion 4", "brand": "American Standard", "color": "Bone"},
    "quantity": 6,
    "location": "Aisle 2",
}


def test_health_needs_no_token(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.headers["cache-control"].startswith("no-cache")
    body = resp.json()
    assert body["status"] == "Success"
    assert body["data"]["status"] == "OK"
    assert body["data"]["environment"]


def test_missing_token_is_rejected(client):
    resp = client.get("/api/inventory/")
    assert resp.status_code in (401, 403)


def test_invalid_token_is_rejected(client):
    resp = client.get("/api/inventory/", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401
    assert resp.json()["status"] == "Failure"
    assert resp.json()["status_code"] == "201"


def test_expired_token_is_rejected(client):
    token = create_access_token({"username": "admin", "role": "admin"}, expires_minutes=-1)
    resp = client.get("/api/inventory/", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.json()["status_code"] == "202"


def test_list_is_wrapped_in_envelope(client, sales_headers):
    resp = client.get("/api/inventory/", headers=sales_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "Success"
    assert body["status_code"] == "100"
    data = body["data"]
    assert data["totalItems"] == 5
    assert data["totalPages"] == 1
    assert data["currentPage"] == 1
    assert data["items"][0]["product_details"]["color_name"] == "Arctic White"


def test_list_query_parameters(client, sales_headers):
    resp = client.get(
        "/api/inventory/",
        params={"product_type": "wall", "in_stock_only": "true", "search": "white"},
        headers=sales_headers,
    )
    assert item_ids(resp.json()["data"]["items"]) == ["2"]

    resp = client.get("/api/inventory/", params={"page": 2, "limit": 2}, headers=sales_headers)
    data = resp.json()["data"]
    assert item_ids(data["items"]) == ["6", "8"]
    assert data["totalPages"] == 3


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "abc"}])
def test_bad_pagination_is_422(client, sales_headers, params):
    resp = client.get("/api/inventory/", params=params, headers=sales_headers)

    assert resp.status_code == 422
    assert resp.json()["status"] == "Failure"


def test_unknown_product_type_filter_is_400(client, sales_headers):
    resp = client.get("/api/inventory/", params={"product_type": "sink"}, headers=sales_headers)

    assert resp.status_code == 400
    body = resp.json()
    assert body["status_code"] == "300"
    assert body["data"]["field"] == "product_type"


def test_stats(client, sales_headers):
    resp = client.get("/api/inventory/stats", headers=sales_headers)

    data = resp.json()["data"]
    assert data["totalItems"] == 5
    assert data["totalInStock"] == 3
    assert data["byProductType"]["vanity"] == {"count": 1, "totalQuantity": 5, "inStock": 1}


def test_export(client, sales_headers):
    resp = client.get("/api/inventory/export", params={"in_stock_only": "true"},
                      headers=sales_headers)

    data = resp.json()["data"]
    assert data["filename"].endswith(".xlsx")
    assert [row["Item ID"] for row in data["data"]] == ["2", "6", "10"]


def test_get_item(client, sales_headers):
    resp = client.get("/api/inventory/10", headers=sales_headers)

    assert resp.status_code == 200
    assert resp.json()["data"]["product_details"]["brand"] == "Kohler"


def test_get_unknown_item_is_404(client, sales_headers):
    resp = client.get("/api/inventory/nope", headers=sales_headers)

    assert resp.status_code == 404
    body = resp.json()
    assert body["status"] == "Failure"
    assert body["status_code"] == "402"
    assert body["message"] == "Item not found"


def test_sales_rep_cannot_write(client, store, sales_headers):
    before = store.load().model_dump()

    assert client.post("/api/inventory/", json=NEW_TOILET, headers=sales_headers).status_code == 403
    assert client.put("/api/inventory/2", json={"quantity": 1},
                      headers=sales_headers).status_code == 403
    resp = client.delete("/api/inventory/2", headers=sales_headers)
    assert resp.status_code == 403
    assert resp.json()["status_code"] == "204"

    assert store.load().model_dump() == before


def test_create_item(client, store, warehouse_headers):
    resp = client.post("/api/inventory/", json=NEW_TOILET, headers=warehouse_headers)

    assert resp.status_code == 201
    body = resp.json()
    assert body["status_code"] == "101"
    assert body["message"] == "Item added successfully"
    created = body["data"]
    assert created["id"] == "12"
    assert created["product_details_id"] == "11"
    assert created["notes"] == ""
    assert created["product_details"]["name"] == "Champion 4"
    assert [t.id for t in store.load().toilets] == ["3", "11"]


@pytest.mark.parametrize("payload", [
    {**NEW_TOILET, "quantity": -1},
    {**NEW_TOILET, "product_type": "sink"},
    {key: value for key, value in NEW_TOILET.items() if key != "quantity"},
])
def test_create_rejects_invalid_payload(client, store, admin_headers, payload):
    before = store.load().model_dump()

    resp = client.post("/api/inventory/", json=payload, headers=admin_headers)

    assert resp.status_code == 422
    assert resp.json()["status"] == "Failure"
    assert store.load().model_dump() == before


def test_update_item(client, store, admin_headers):
    resp = client.put(
        "/api/inventory/2",
        json={"quantity": 0, "product_details": {"finish": "Satin"}},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status_code"] == "102"
    assert body["data"]["quantity"] == 0
    assert body["data"]["product_details"]["finish"] == "Satin"
    assert body["data"]["product_details"]["color_name"] == "Arctic White"
    assert store.load().items[0].quantity == 0


def test_update_unknown_item_is_404(client, admin_headers):
    resp = client.put("/api/inventory/nope", json={"quantity": 1}, headers=admin_headers)
    assert resp.status_code == 404


def test_delete_item(client, store, admin_headers):
    resp = client.delete("/api/inventory/6", headers=admin_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["status_code"] == "103"
    assert body["data"] == {"id": "6", "product_details_id": "5"}
    assert "6" not in item_ids(store.load().items)
    assert store.load().vanities == []

    assert client.get("/api/inventory/6", headers=admin_headers).status_code == 404


def test_delete_unknown_item_is_404(client, store, admin_headers):
    before = store.load().model_dump()

    resp = client.delete("/api/inventory/nope", headers=admin_headers)

    assert resp.status_code == 404
    assert store.load().model_dump() == before


class BrokenStore(InMemorySnapshotStore):
    def load(self):
        raise StorageError(message="Unable to read inventory data")


def test_storage_failure_is_500(client, sales_headers):
    app.dependency_overrides[get_snapshot_store] = lambda: BrokenStore()

    resp = client.get("/api/inventory/stats", headers=sales_headers)

    assert resp.status_code == 500
    body = resp.json()
    assert body["status"] == "Failure"
    assert body["status_code"] == "403"


@pytest.mark.parametrize("quantity", [True, "3", 2.5])
def test_create_requires_an_integer_quantity(client, store, admin_headers, quantity):
    before = store.load().model_dump()

    resp = client.post("/api/inventory/", json={**NEW_TOILET, "quantity": quantity},
                       headers=admin_headers)

    assert resp.status_code == 422
    assert store.load().model_dump() == before


@pytest.mark.parametrize("quantity", [True, "7"])
def test_update_requires_an_integer_quantity(client, store, admin_headers, quantity):
    before = store.load().model_dump()

    resp = client.put("/api/inventory/2", json={"quantity": quantity}, headers=admin_headers)

    assert resp.status_code == 422
    assert store.load().model_dump() == before


def test_bad_detail_patch_is_400_even_when_details_are_missing(client, store, admin_headers):
    snapshot = store.load()
    snapshot.walls = []
    store.save(snapshot)
    before = store.load().model_dump()

    for item_id in ("2", "6"):
        resp = client.put(f"/api/inventory/{item_id}",
                          json={"quantity": 1, "product_details": {"color_name": 5, "name": 5}},
                          headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["data"]["field"] == "product_details"

    assert store.load().model_dump() == before
