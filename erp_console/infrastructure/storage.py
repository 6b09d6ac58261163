"""
Key/value "local storage" backing every repository.

Each entity collection is one record holding the whole serialized array,
wrapped in a version envelope: ``{"version": 1, "items": [...]}``.
"""

import json
from pathlib import Path
from typing import Any, Optional, Protocol

import structlog
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from erp_console.infrastructure.database import (
    StorageRecord,
    create_session_factory,
    create_storage_engine,
)

logger = structlog.get_logger(__name__)

MEMORY_URL = "memory://"


class LocalStorage(Protocol):
    """Interface mirroring the browser's localStorage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def keys(self) -> list[str]:
        ...

    def clear(self) -> None:
        ...


class MemoryStorage:
    """Process-local storage, used by tests and ``memory://``."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def clear(self) -> None:
        self._data.clear()


class SQLAlchemyStorage:
    """Durable storage: one ``local_storage`` row per key."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        with self.session_factory() as db:
            record = db.get(StorageRecord, key)
            return record.value if record else None

    def set_item(self, key: str, value: str) -> None:
        with self.session_factory() as db:
            record = db.get(StorageRecord, key)
            if record is None:
                db.add(StorageRecord(key=key, value=value))
            else:
                record.value = value
            db.commit()

    def remove_item(self, key: str) -> None:
        with self.session_factory() as db:
            record = db.get(StorageRecord, key)
            if record is not None:
                db.delete(record)
                db.commit()

    def keys(self) -> list[str]:
        with self.session_factory() as db:
            return [row[0] for row in db.query(StorageRecord.key).order_by(StorageRecord.key).all()]

    def clear(self) -> None:
        with self.session_factory() as db:
            db.query(StorageRecord).delete()
            db.commit()


def build_storage(url: str) -> LocalStorage:
    """Pick the backend for a ``STORAGE_URL``."""
    if url == MEMORY_URL:
        return MemoryStorage()

    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_storage_engine(url)
    logger.info("Storage engine ready", backend=parsed.get_backend_name())
    return SQLAlchemyStorage(create_session_factory(engine))


def dump_collection(items: list[dict[str, Any]], version: int) -> str:
    return json.dumps({"version": version, "items": items}, ensure_ascii=False)


def load_collection(raw: str) -> tuple[int, list[dict[str, Any]]]:
    """Parse a collection record; a bare array is the unversioned (version 0) layout."""
    payload = json.loads(raw)
    if isinstance(payload, list):
        return 0, payload
    if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
        raise ValueError("Malformed collection record")
    return int(payload.get("version", 0)), payload["items"]
