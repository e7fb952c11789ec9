# app/core/snapshot_store.py
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import lru_cache

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from shared.core.config import settings
from shared.core.database import Base, InventorySessionLocal, inventory_engine
from shared.core.exceptions import StorageError
from ..crud.inventory.product_details_crud import (
    COLLECTION_BY_TYPE, details_model, get_collection)
from ..enum.inventory_enum import ProductType
from ..models.inventory.inventory_items import InventoryItem
from ..models.inventory.product_details import ProductDetail
from ..schemas.inventory.inventory_schemas import InventoryRecord, InventorySnapshot

logger = logging.getLogger(__name__)


class SnapshotStore(ABC):
    """Reads and writes the full inventory state as one unit."""

    @abstractmethod
    def load(self) -> InventorySnapshot:
        ...

    @abstractmethod
    def save(self, snapshot: InventorySnapshot) -> None:
        ...


class InMemorySnapshotStore(SnapshotStore):
    """Process-local store. Hands out copies so callers never share state."""

    def __init__(self, snapshot: InventorySnapshot | None = None):
        self._snapshot = (snapshot or InventorySnapshot()).model_copy(deep=True)
        self._lock = threading.Lock()

    def load(self) -> InventorySnapshot:
        with self._lock:
            return self._snapshot.model_copy(deep=True)

    def save(self, snapshot: InventorySnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot.model_copy(deep=True)


class JsonFileSnapshotStore(SnapshotStore):
    """The whole snapshot kept as a single JSON document on disk."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> InventorySnapshot:
        if not os.path.exists(self.path):
            logger.info("Data file %s not found, starting with an empty inventory", self.path)
            return InventorySnapshot()
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
            return InventorySnapshot.model_validate(data)
        except (OSError, ValueError, SchemaValidationError) as e:
            logger.exception("Failed to read data file %s", self.path)
            raise StorageError(
                message=f"Unable to read inventory data: {e}",
                details={"path": self.path},
            ) from e

    def save(self, snapshot: InventorySnapshot) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        payload = snapshot.model_dump(mode="json", by_alias=True)
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            # atomic swap: readers see the old or the new document, never half of one
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.exception("Failed to write data file %s", self.path)
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(
                message=f"Unable to write inventory data: {e}",
                details={"path": self.path},
            ) from e


def as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlSnapshotStore(SnapshotStore):
    """Snapshot persisted across the inventory_items and product_details tables."""

    def __init__(self, session_factory: sessionmaker, engine=None, create_tables: bool = True):
        self.session_factory = session_factory
        if create_tables and engine is not None:
            Base.metadata.create_all(bind=engine)

    def load(self) -> InventorySnapshot:
        try:
            with self.session_factory() as db:
                item_rows = db.query(InventoryItem).order_by(InventoryItem.position).all()
                detail_rows = db.query(ProductDetail).order_by(ProductDetail.position).all()

                snapshot = InventorySnapshot(items=[
                    InventoryRecord(
                        id=row.id,
                        product_type=row.product_type,
                        product_details_id=row.product_details_id,
                        quantity=row.quantity,
                        location=row.location or "",
                        notes=row.notes or "",
                        created_at=as_utc(row.created_at),
                        updated_at=as_utc(row.updated_at),
                    )
                    for row in item_rows
                ])
                for row in detail_rows:
                    product_type = ProductType(row.product_type)
                    get_collection(snapshot, product_type).append(
                        details_model(product_type)(
                            id=row.id,
                            created_at=as_utc(row.created_at),
                            updated_at=as_utc(row.updated_at),
                            **(row.attributes or {}),
                        )
                    )
                return snapshot
        except (SQLAlchemyError, SchemaValidationError, ValueError) as e:
            logger.exception("Failed to load inventory snapshot from database")
            raise StorageError(message=f"Unable to read inventory data: {e}") from e

    def save(self, snapshot: InventorySnapshot) -> None:
        rows = [
            InventoryItem(
                id=record.id,
                position=position,
                product_type=record.product_type.value,
                product_details_id=record.product_details_id,
                quantity=record.quantity,
                location=record.location,
                notes=record.notes,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for position, record in enumerate(snapshot.items)
        ]
        for product_type in COLLECTION_BY_TYPE:
            for position, details in enumerate(get_collection(snapshot, product_type)):
                rows.append(ProductDetail(
                    product_type=product_type.value,
                    id=details.id,
                    position=position,
                    attributes=details.model_dump(
                        mode="json", exclude={"id", "created_at", "updated_at"}),
                    created_at=details.created_at,
                    updated_at=details.updated_at,
                ))

        with self.session_factory() as db:
            try:
                db.query(ProductDetail).delete()
                db.query(InventoryItem).delete()
                db.add_all(rows)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.exception("Failed to save inventory snapshot to database")
                raise StorageError(message=f"Unable to write inventory data: {e}") from e


# Dependency
@lru_cache
def get_snapshot_store() -> SnapshotStore:
    backend = settings.SNAPSHOT_BACKEND.lower()
    if backend == "json":
        return JsonFileSnapshotStore(settings.DATA_FILE)
    if backend == "sql":
        return SqlSnapshotStore(InventorySessionLocal, inventory_engine)
    if backend == "memory":
        return InMemorySnapshotStore()
    raise ValueError(f"Unknown SNAPSHOT_BACKEND: {settings.SNAPSHOT_BACKEND}")
