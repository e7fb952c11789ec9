from datetime import datetime
from typing import Dict, Optional
from pydantic import AliasChoices, BaseModel, Field


class WallAttributes(BaseModel):
    product_line: Optional[str] = None
    color_name: Optional[str] = None
    dimensions: Optional[str] = None
    finish: Optional[str] = None

    model_config = {"extra": "ignore"}


class FixtureAttributes(BaseModel):
    """Attributes shared by toilets, bases, tubs, vanities and shower doors."""
    name: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    dimensions: Optional[str] = None
    finish: Optional[str] = None
    description: Optional[str] = None
    specifications: Dict[str, str] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}


class DetailRecordMixin(BaseModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"))
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"))


class WallDetails(WallAttributes, DetailRecordMixin):
    pass


class FixtureDetails(FixtureAttributes, DetailRecordMixin):
    pass
