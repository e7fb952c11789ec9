# app/models/inventory/inventory_items.py
from sqlalchemy import Column, DateTime, Integer, String, Text
from shared.core.database import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(String(64), primary_key=True)
    # insertion order within the snapshot
    position = Column(Integer, nullable=False, index=True)
    product_type = Column(String(32), nullable=False)
    product_details_id = Column(String(64), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    location = Column(Text, nullable=False, default="")
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
