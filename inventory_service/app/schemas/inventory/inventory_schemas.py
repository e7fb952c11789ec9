from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import AliasChoices, BaseModel, Field

from shared.core.schemas import CommonQueryParams
from ...enum.inventory_enum import ProductType
from .product_details_schemas import FixtureDetails, WallDetails


class InventoryRecord(BaseModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    product_type: ProductType
    product_details_id: str
    quantity: int = Field(ge=0)
    location: str = ""
    notes: str = ""
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"))
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"))


class InventorySnapshot(BaseModel):
    """Entire persisted state, read and written as one unit."""
    items: List[InventoryRecord] = Field(default_factory=list)
    walls: List[WallDetails] = Field(default_factory=list)
    toilets: List[FixtureDetails] = Field(default_factory=list)
    bases: List[FixtureDetails] = Field(default_factory=list)
    tubs: List[FixtureDetails] = Field(default_factory=list)
    vanities: List[FixtureDetails] = Field(default_factory=list)
    shower_doors: List[FixtureDetails] = Field(
        default_factory=list,
        validation_alias=AliasChoices("shower_doors", "showerDoors"),
        serialization_alias="showerDoors",
    )


class InventoryRequest(CommonQueryParams):
    product_type: Optional[str] = None
    in_stock_only: bool = False


class InventoryCreate(BaseModel):
    product_type: ProductType
    product_details: Dict[str, Any] = Field(default_factory=dict)
    # strict: JSON true or "3" is not a quantity
    quantity: int = Field(ge=0, strict=True)
    location: Optional[str] = None
    notes: Optional[str] = None


class InventoryUpdate(BaseModel):
    quantity: Optional[int] = Field(default=None, ge=0, strict=True)
    location: Optional[str] = None
    notes: Optional[str] = None
    product_details: Optional[Dict[str, Any]] = None


class InventoryOut(BaseModel):
    id: str
    product_type: ProductType
    product_details_id: str
    quantity: int
    location: str
    notes: str
    created_at: datetime
    updated_at: datetime
    product_details: Optional[Dict[str, Any]] = None

    model_config = {"from_attributes": True}


class InventoryListResponse(BaseModel):
    items: List[InventoryOut]
    totalItems: int
    totalPages: int
    currentPage: int


class ProductTypeStats(BaseModel):
    count: int = 0
    totalQuantity: int = 0
    inStock: int = 0


class InventoryStats(BaseModel):
    totalItems: int
    totalInStock: int
    byProductType: Dict[str, ProductTypeStats]


class InventoryDeleteOut(BaseModel):
    id: str
    product_details_id: str
