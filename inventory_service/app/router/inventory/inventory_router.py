# app/router/inventory/inventory_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query

from shared.core.auth import require_write_access, validate_current_token
from shared.core.schemas import ExportResponse, UserToken
from shared.helpers.id_helper import IdGenerator, generate_uuid
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...core.snapshot_store import SnapshotStore, get_snapshot_store
from ...schemas.inventory.inventory_schemas import (
    InventoryCreate, InventoryListResponse, InventoryOut, InventoryRequest,
    InventoryStats, InventoryUpdate)
from ...services import inventory_services as service

router = APIRouter(
    prefix="/api/inventory",
    tags=["inventory"],
    dependencies=[Depends(validate_current_token)]
)


def get_id_generator() -> IdGenerator:
    return generate_uuid


def get_inventory_params(
    product_type: Optional[str] = Query(None, description="Product type or 'all'"),
    search: Optional[str] = Query(None),
    in_stock_only: bool = Query(False),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
) -> InventoryRequest:
    return InventoryRequest(
        product_type=product_type,
        search=search,
        in_stock_only=in_stock_only,
        page=page,
        limit=limit,
    )


@router.get("/", response_model=InventoryListResponse)
def get_inventory(
        params: InventoryRequest = Depends(get_inventory_params),
        store: SnapshotStore = Depends(get_snapshot_store)):
    return service.list_items(store, params)


@router.get("/stats", response_model=InventoryStats)
def get_inventory_stats(store: SnapshotStore = Depends(get_snapshot_store)):
    return service.get_stats(store)


@router.get("/export", response_model=ExportResponse)
def export_inventory(
        params: InventoryRequest = Depends(get_inventory_params),
        store: SnapshotStore = Depends(get_snapshot_store)):
    return service.export_items(store, params)


@router.get("/{item_id}", response_model=InventoryOut)
def get_inventory_item(
        item_id: str,
        store: SnapshotStore = Depends(get_snapshot_store)):
    return service.get_item(store, item_id)


@router.post("/", status_code=201, response_model=None)
def create_inventory_item(
        item: InventoryCreate,
        store: SnapshotStore = Depends(get_snapshot_store),
        new_id: IdGenerator = Depends(get_id_generator),
        current_user: UserToken = Depends(require_write_access)):
    created = service.create_item(store, new_id, item)
    return success_response(
        data=created,
        message="Item added successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.put("/{item_id}", response_model=None)
def update_inventory_item(
        item_id: str,
        item: InventoryUpdate,
        store: SnapshotStore = Depends(get_snapshot_store),
        current_user: UserToken = Depends(require_write_access)):
    updated = service.update_item(store, item_id, item)
    return success_response(
        data=updated,
        message="Item updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{item_id}", response_model=None)
def delete_inventory_item(
        item_id: str,
        store: SnapshotStore = Depends(get_snapshot_store),
        current_user: UserToken = Depends(require_write_access)):
    deleted = service.delete_item(store, item_id)
    return success_response(
        data=deleted,
        message="Item deleted successfully",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY)
