# app/models/inventory/product_details.py
from sqlalchemy import JSON, Column, DateTime, Integer, String
from shared.core.database import Base


class ProductDetail(Base):
    """Detail records of every product type, discriminated by product_type."""
    __tablename__ = "product_details"

    product_type = Column(String(32), primary_key=True)
    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    attributes = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
