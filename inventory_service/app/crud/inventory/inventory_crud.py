# app/crud/inventory/inventory_crud.py
import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from shared.core.exceptions import NotFoundError, ValidationError
from shared.core.schemas import ExportResponse
from shared.exporthelper import export_to_excel
from ...enum.inventory_enum import PRODUCT_TYPE_ALL, ProductType
from ...schemas.inventory.inventory_schemas import (
    InventoryDeleteOut, InventoryListResponse, InventoryOut, InventoryRecord,
    InventoryRequest, InventorySnapshot, InventoryStats, ProductTypeStats)
from .product_details_crud import (
    build_product_details, get_collection, matches_search,
    merge_product_details, parse_product_type, resolve_product_details,
    validate_attributes)

logger = logging.getLogger(__name__)

# Inventory fields an update may change
UPDATABLE_FIELDS = ("quantity", "location", "notes")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ----------------------------------------------------------------------
# JOIN / QUERY
# ----------------------------------------------------------------------

def join_inventory_record(record: InventoryRecord, details) -> InventoryOut:
    return InventoryOut(
        **record.model_dump(),
        product_details=details.model_dump(mode="json") if details else None,
    )


def to_inventory_out(snapshot: InventorySnapshot, record: InventoryRecord) -> InventoryOut:
    details = resolve_product_details(
        snapshot, record.product_type, record.product_details_id)
    return join_inventory_record(record, details)


def validate_quantity(quantity: Any) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
        raise ValidationError(
            message="quantity must be a non-negative integer",
            details={"field": "quantity", "value": quantity},
        )
    return quantity


def validate_pagination(params: InventoryRequest):
    if params.page < 1:
        raise ValidationError(message="page must be >= 1",
                              details={"field": "page", "value": params.page})
    if params.limit < 1:
        raise ValidationError(message="limit must be >= 1",
                              details={"field": "limit", "value": params.limit})


def filter_inventory(snapshot: InventorySnapshot, params: InventoryRequest) -> List[InventoryOut]:
    """Join every record to its details, then apply type, stock and search filters."""
    product_type = None
    if params.product_type and params.product_type != PRODUCT_TYPE_ALL:
        product_type = parse_product_type(params.product_type)

    term = (params.search or "").strip().lower()

    results = []
    for record in snapshot.items:
        if product_type and record.product_type != product_type:
            continue
        if params.in_stock_only and record.quantity <= 0:
            continue
        details = resolve_product_details(
            snapshot, record.product_type, record.product_details_id)
        if term and not matches_search(record.product_type, details, term):
            continue
        results.append(join_inventory_record(record, details))
    return results


def list_inventory(snapshot: InventorySnapshot, params: InventoryRequest) -> InventoryListResponse:
    validate_pagination(params)
    items = filter_inventory(snapshot, params)

    total_items = len(items)
    start = (params.page - 1) * params.limit

    return InventoryListResponse(
        items=items[start:start + params.limit],
        totalItems=total_items,
        totalPages=math.ceil(total_items / params.limit),
        currentPage=params.page,
    )


def find_inventory_record(snapshot: InventorySnapshot, item_id: str) -> Optional[InventoryRecord]:
    for record in snapshot.items:
        if record.id == item_id:
            return record
    return None


def get_inventory_item(snapshot: InventorySnapshot, item_id: str) -> InventoryOut:
    record = find_inventory_record(snapshot, item_id)
    if not record:
        raise NotFoundError(message="Item not found", details={"id": item_id})
    return to_inventory_out(snapshot, record)


# ----------------------------------------------------------------------
# STATS
# ----------------------------------------------------------------------

def get_inventory_stats(snapshot: InventorySnapshot) -> InventoryStats:
    by_type: Dict[str, ProductTypeStats] = {}
    total_in_stock = 0

    for record in snapshot.items:
        stats = by_type.setdefault(record.product_type.value, ProductTypeStats())
        stats.count += 1
        stats.totalQuantity += record.quantity
        if record.quantity > 0:
            stats.inStock += 1
            total_in_stock += 1

    return InventoryStats(
        totalItems=len(snapshot.items),
        totalInStock=total_in_stock,
        byProductType=by_type,
    )


# ----------------------------------------------------------------------
# EXPORT
# ----------------------------------------------------------------------

EXPORT_COLUMN_MAP = {
    "id": "Item ID",
    "product_type": "Product Type",
    "name": "Name",
    "product_line": "Product Line",
    "brand": "Brand",
    "model": "Model",
    "color": "Color",
    "dimensions": "Dimensions",
    "finish": "Finish",
    "quantity": "Quantity",
    "location": "Location",
    "notes": "Notes",
    "created_at": "Created At",
    "updated_at": "Updated At",
}


def export_row(item: InventoryOut) -> Dict[str, Any]:
    details = item.product_details or {}
    row = item.model_dump(mode="json", exclude={"product_details"})
    if item.product_type == ProductType.wall:
        row["product_line"] = details.get("product_line")
        row["color"] = details.get("color_name")
    else:
        for key in ("name", "brand", "model", "color"):
            row[key] = details.get(key)
    row["dimensions"] = details.get("dimensions")
    row["finish"] = details.get("finish")
    return row


def get_inventory_export(snapshot: InventorySnapshot, params: InventoryRequest) -> ExportResponse:
    rows = [export_row(item) for item in filter_inventory(snapshot, params)]
    filename = f"inventory_export_{utc_now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    return export_to_excel(rows, filename, EXPORT_COLUMN_MAP)


# ----------------------------------------------------------------------
# MUTATIONS: (snapshot, command) -> (new snapshot, result)
# ----------------------------------------------------------------------

def create_inventory_item(
    snapshot: InventorySnapshot,
    product_type: Any,
    product_details: Optional[Dict[str, Any]],
    quantity: Any,
    location: Optional[str] = None,
    notes: Optional[str] = None,
    *,
    new_id: Callable[[], str],
    now: Optional[datetime] = None,
) -> Tuple[InventorySnapshot, InventoryOut]:
    # Everything is validated before the snapshot is copied
    product_type = parse_product_type(product_type)
    quantity = validate_quantity(quantity)
    attributes = validate_attributes(product_type, product_details)
    now = now or utc_now()
    details = build_product_details(product_type, attributes, new_id(), now)

    record = InventoryRecord(
        id=new_id(),
        product_type=product_type,
        product_details_id=details.id,
        quantity=quantity,
        location=location or "",
        notes=notes or "",
        created_at=now,
        updated_at=now,
    )

    new_snapshot = snapshot.model_copy(deep=True)
    get_collection(new_snapshot, product_type).append(details)
    new_snapshot.items.append(record)

    return new_snapshot, to_inventory_out(new_snapshot, record)


def update_inventory_item(
    snapshot: InventorySnapshot,
    item_id: str,
    changes: Dict[str, Any],
    *,
    now: Optional[datetime] = None,
) -> Tuple[InventorySnapshot, InventoryOut]:
    """Apply a partial update. Fields that are absent or null are left untouched."""
    record = find_inventory_record(snapshot, item_id)
    if not record:
        raise NotFoundError(message="Item not found", details={"id": item_id})

    updates = {k: changes[k] for k in UPDATABLE_FIELDS if changes.get(k) is not None}
    if "quantity" in updates:
        validate_quantity(updates["quantity"])
    patch = changes.get("product_details")
    if patch is not None:
        patch = validate_attributes(record.product_type, patch)
    now = now or utc_now()

    new_snapshot = snapshot.model_copy(deep=True)
    updated = record.model_copy(update={**updates, "updated_at": now})
    new_snapshot.items = [
        updated if r.id == item_id else r for r in new_snapshot.items]

    if patch is not None:
        collection = get_collection(new_snapshot, record.product_type)
        details = resolve_product_details(
            new_snapshot, record.product_type, record.product_details_id)
        if details is None:
            logger.warning(
                "Skipping product_details update for item %s: %s record %s is missing",
                item_id, record.product_type.value, record.product_details_id)
        else:
            merged = merge_product_details(details, patch, now)
            collection[:] = [merged if d is details else d for d in collection]

    return new_snapshot, to_inventory_out(new_snapshot, updated)


def delete_inventory_item(
    snapshot: InventorySnapshot,
    item_id: str,
) -> Tuple[InventorySnapshot, InventoryDeleteOut]:
    record = find_inventory_record(snapshot, item_id)
    if not record:
        raise NotFoundError(message="Item not found", details={"id": item_id})

    new_snapshot = snapshot.model_copy(deep=True)
    new_snapshot.items = [r for r in new_snapshot.items if r.id != item_id]

    collection = get_collection(new_snapshot, record.product_type)
    details = resolve_product_details(
        new_snapshot, record.product_type, record.product_details_id)
    if details is None:
        logger.warning(
            "Deleting item %s without product details: %s record %s is missing",
            item_id, record.product_type.value, record.product_details_id)
    else:
        collection[:] = [d for d in collection if d is not details]

    return new_snapshot, InventoryDeleteOut(
        id=record.id, product_details_id=record.product_details_id)
