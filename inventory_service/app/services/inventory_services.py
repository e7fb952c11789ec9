# app/services/inventory_services.py
import logging

from shared.core.schemas import ExportResponse
from shared.helpers.id_helper import IdGenerator
from ..core.snapshot_store import SnapshotStore
from ..crud.inventory import inventory_crud as crud
from ..schemas.inventory.inventory_schemas import (
    InventoryCreate, InventoryDeleteOut, InventoryListResponse, InventoryOut,
    InventoryRequest, InventoryStats, InventoryUpdate)

logger = logging.getLogger(__name__)


def list_items(store: SnapshotStore, params: InventoryRequest) -> InventoryListResponse:
    return crud.list_inventory(store.load(), params)


def get_item(store: SnapshotStore, item_id: str) -> InventoryOut:
    return crud.get_inventory_item(store.load(), item_id)


def get_stats(store: SnapshotStore) -> InventoryStats:
    return crud.get_inventory_stats(store.load())


def export_items(store: SnapshotStore, params: InventoryRequest) -> ExportResponse:
    return crud.get_inventory_export(store.load(), params)


def create_item(store: SnapshotStore, new_id: IdGenerator, item: InventoryCreate) -> InventoryOut:
    snapshot, created = crud.create_inventory_item(
        store.load(),
        item.product_type,
        item.product_details,
        item.quantity,
        item.location,
        item.notes,
        new_id=new_id,
    )
    store.save(snapshot)
    logger.info("Created %s item %s (quantity=%s)",
                created.product_type.value, created.id, created.quantity)
    return created


def update_item(store: SnapshotStore, item_id: str, item: InventoryUpdate) -> InventoryOut:
    snapshot, updated = crud.update_inventory_item(
        store.load(), item_id, item.model_dump(exclude_unset=True))
    store.save(snapshot)
    logger.info("Updated item %s", item_id)
    return updated


def delete_item(store: SnapshotStore, item_id: str) -> InventoryDeleteOut:
    snapshot, deleted = crud.delete_inventory_item(store.load(), item_id)
    store.save(snapshot)
    logger.info("Deleted item %s and product details %s",
                deleted.id, deleted.product_details_id)
    return deleted
