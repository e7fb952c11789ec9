from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from shared.core.auth import create_access_token
from shared.helpers.id_helper import CounterIdGenerator
from inventory_service.app.core.snapshot_store import InMemorySnapshotStore, get_snapshot_store
from inventory_service.app.crud.inventory import inventory_crud as crud
from inventory_service.app.main import app
from inventory_service.app.router.inventory.inventory_router import get_id_generator
from inventory_service.app.schemas.inventory.inventory_schemas import InventorySnapshot

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
LATER = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)

# (product_type, product_details, quantity); ids are assigned detail first, item second
SEED_ITEMS = [
    ("wall", {"product_line": "Classic", "color_name": "Arctic White",
              "dimensions": "60x32", "finish": "Gloss"}, 3),                       # item "2"
    ("toilet", {"name": "Cadet 3", "brand": "American Standard",
                "model": "CT-3", "color": "White"}, 0),                             # item "4"
    ("vanity", {"name": "Oak Vanity", "brand": "Fresca", "color": "Oak",
                "description": "Double sink with white top"}, 5),                   # item "6"
    ("wall", {"product_line": "Stone", "color_name": "Charcoal", "finish": "Matte"}, 0),  # item "8"
    ("tub", {"name": "Soaking Tub", "brand": "Kohler", "dimensions": "60x30"}, 2),  # item "10"
]


def build_snapshot(new_id, items=SEED_ITEMS) -> InventorySnapshot:
    snapshot = InventorySnapshot()
    for product_type, details, quantity in items:
        snapshot, _ = crud.create_inventory_item(
            snapshot, product_type, details, quantity, new_id=new_id, now=NOW)
    return snapshot


def item_ids(items):
    return [item.id if hasattr(item, "id") else item["id"] for item in items]


@pytest.fixture
def new_id():
    return CounterIdGenerator()


@pytest.fixture
def snapshot(new_id):
    return build_snapshot(new_id)


@pytest.fixture
def store(snapshot):
    return InMemorySnapshotStore(snapshot)


@pytest.fixture
def client(store, new_id):
    app.dependency_overrides[get_snapshot_store] = lambda: store
    app.dependency_overrides[get_id_generator] = lambda: new_id
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(username: str, role: str) -> dict:
    token = create_access_token({"username": username, "role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return auth_headers("admin", "admin")


@pytest.fixture
def warehouse_headers():
    return auth_headers("warehouse", "warehouse_manager")


@pytest.fixture
def sales_headers():
    return auth_headers("sales1", "sales_rep")
