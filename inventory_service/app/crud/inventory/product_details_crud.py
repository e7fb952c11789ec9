# app/crud/inventory/product_details_crud.py
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from pydantic import ValidationError as SchemaValidationError

from shared.core.exceptions import ValidationError
from ...enum.inventory_enum import ProductType
from ...schemas.inventory.inventory_schemas import InventorySnapshot
from ...schemas.inventory.product_details_schemas import (
    FixtureAttributes, FixtureDetails, WallAttributes, WallDetails)

ProductDetails = Union[WallDetails, FixtureDetails]

# product type -> snapshot collection holding its detail records
COLLECTION_BY_TYPE = {
    ProductType.wall: "walls",
    ProductType.toilet: "toilets",
    ProductType.base: "bases",
    ProductType.tub: "tubs",
    ProductType.vanity: "vanities",
    ProductType.shower_door: "shower_doors",
}

WALL_SEARCH_FIELDS = ("product_line", "color_name", "dimensions", "finish")
FIXTURE_SEARCH_FIELDS = ("name", "brand", "model", "color",
                         "dimensions", "finish", "description")

# Fields a patch may never touch
PROTECTED_FIELDS = {"id", "created_at", "updated_at"}


def parse_product_type(value: Any) -> ProductType:
    try:
        return ProductType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in ProductType)
        raise ValidationError(
            message=f"Invalid product_type '{value}'. Expected one of: {allowed}",
            details={"field": "product_type", "value": value},
        )


def attributes_model(product_type: ProductType):
    return WallAttributes if product_type == ProductType.wall else FixtureAttributes


def details_model(product_type: ProductType):
    return WallDetails if product_type == ProductType.wall else FixtureDetails


def search_fields(product_type: ProductType):
    return WALL_SEARCH_FIELDS if product_type == ProductType.wall else FIXTURE_SEARCH_FIELDS


def get_collection(snapshot: InventorySnapshot, product_type: ProductType) -> List[ProductDetails]:
    return getattr(snapshot, COLLECTION_BY_TYPE[ProductType(product_type)])


def resolve_product_details(
    snapshot: InventorySnapshot,
    product_type: ProductType,
    product_details_id: str,
) -> Optional[ProductDetails]:
    """Type-scoped lookup of a detail record. Returns None when it does not resolve."""
    for details in get_collection(snapshot, product_type):
        if details.id == product_details_id:
            return details
    return None


def validate_attributes(product_type: ProductType, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Validate a detail payload against the attribute set of its product type."""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError(
            message="product_details must be an object",
            details={"field": "product_details"},
        )
    cleaned = {k: v for k, v in payload.items() if k not in PROTECTED_FIELDS}
    try:
        attributes = attributes_model(product_type).model_validate(cleaned)
    except SchemaValidationError as e:
        raise ValidationError(
            message=f"Invalid product_details for {product_type.value}",
            details={
                "field": "product_details",
                "errors": [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()],
            },
        )
    return attributes.model_dump(exclude_unset=True)


def build_product_details(
    product_type: ProductType,
    attributes: Dict[str, Any],
    details_id: str,
    now: datetime,
) -> ProductDetails:
    """attributes must come from validate_attributes()."""
    return details_model(product_type)(
        id=details_id, created_at=now, updated_at=now, **attributes)


def merge_product_details(
    details: ProductDetails,
    changes: Dict[str, Any],
    now: datetime,
) -> ProductDetails:
    """Return a copy of details with validated changes merged in. Absent fields are left untouched."""
    return details.model_copy(update={**changes, "updated_at": now})


def matches_search(product_type: ProductType, details: Optional[ProductDetails], term: str) -> bool:
    """Case-insensitive substring match over the searchable fields of the type."""
    if details is None:
        return False
    for field in search_fields(product_type):
        value = getattr(details, field, None)
        if value and term in value.lower():
            return True
    return False
