"""
Collection-backed implementation of the Base Repository.

Every repository owns one collection record in local storage. Mutations are
copy-on-write: read the current snapshot, build a new tuple, persist it, then
swap it in. Each repository serializes its mutations with its own RLock.
"""

import threading
from typing import Any, Callable, ClassVar, Generic, Iterable, List, Optional, Type, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from erp_console.config import get_settings
from erp_console.core.clock import now
from erp_console.core.exceptions import EntityNotFoundException, ValidationException, validation_details
from erp_console.core.search import SortableFields, paginate
from erp_console.domain.models.base import Entity, new_id
from erp_console.domain.schemas.search import PaginatedResponse, SearchParams, SortOrder
from erp_console.infrastructure.storage import LocalStorage, dump_collection, load_collection

ModelType = TypeVar("ModelType", bound=Entity)
FilterType = TypeVar("FilterType", bound=BaseModel)

logger = structlog.get_logger(__name__)


class CollectionRepository(Generic[ModelType]):
    """Generic repository over one persisted collection."""

    storage_key: ClassVar[str]
    id_prefix: ClassVar[str]
    entity_name: ClassVar[str]
    sortable: ClassVar[SortableFields] = {}
    default_sort: ClassVar[Optional[str]] = None
    default_order: ClassVar[SortOrder] = "asc"

    def __init__(
        self,
        storage: LocalStorage,
        model: Type[ModelType],
        initial: Iterable[dict[str, Any]] = (),
    ):
        self.storage = storage
        self.model = model
        self.lock = threading.RLock()
        self._schema_version = get_settings().STORAGE_SCHEMA_VERSION
        self._items: tuple[ModelType, ...] = ()
        self._load(list(initial))

    # -- persistence -------------------------------------------------------

    def _load(self, initial: list[dict[str, Any]]) -> None:
        raw = self.storage.get_item(self.storage_key)
        if raw is None:
            self._commit([self.model.model_validate(row) for row in initial])
            if initial:
                logger.info("Collection seeded", key=self.storage_key, count=len(initial))
            return

        try:
            version, rows = load_collection(raw)
            self._items = tuple(self.model.model_validate(row) for row in rows)
        except (ValueError, ValidationError) as exc:
            logger.error("Stored collection unreadable, using initial data", key=self.storage_key, error=str(exc))
            self._items = tuple(self.model.model_validate(row) for row in initial)
            return

        if version != self._schema_version:
            logger.warning(
                "Collection schema version differs",
                key=self.storage_key,
                stored=version,
                current=self._schema_version,
            )

    def _commit(self, items: Iterable[ModelType]) -> None:
        """Persist a new snapshot and swap it in; the old snapshot survives a failed write."""
        new_items = tuple(items)
        rows = [item.model_dump(mode="json", by_alias=True) for item in new_items]
        self.storage.set_item(self.storage_key, dump_collection(rows, self._schema_version))
        self._items = new_items

    def _build(self, payload: dict[str, Any]) -> ModelType:
        try:
            return self.model.model_validate(payload)
        except ValidationError as exc:
            raise ValidationException(f"Invalid {self.entity_name} data", validation_details(exc)) from exc

    @staticmethod
    def _payload(obj_in: Any) -> dict[str, Any]:
        if isinstance(obj_in, BaseModel):
            return obj_in.model_dump(exclude_unset=False)
        return dict(obj_in)

    # -- invariants --------------------------------------------------------

    def _check(self, entity: ModelType) -> None:
        """Entity-level invariants beyond field validation; raise to refuse."""

    # -- reads -------------------------------------------------------------

    def list_all(self) -> List[ModelType]:
        return list(self._items)

    def get_by_id(self, id: str) -> Optional[ModelType]:
        return next((item for item in self._items if item.id == id), None)

    def count(self, predicate: Callable[[ModelType], bool]) -> int:
        return sum(1 for item in self._items if predicate(item))

    def search(self, params: SearchParams) -> PaginatedResponse[ModelType]:
        return paginate(
            self._items,
            params,
            self._predicate(params),
            self.sortable,
            default_sort=self.default_sort,
            default_order=self.default_order,
        )

    def _predicate(self, params: SearchParams) -> Callable[[ModelType], bool]:
        return lambda item: True

    def _filters(self, filter_model: Type[FilterType], params: SearchParams) -> FilterType:
        try:
            return filter_model.model_validate(params.filters)
        except ValidationError as exc:
            raise ValidationException(f"Invalid {self.entity_name} filters", validation_details(exc)) from exc

    # -- writes ------------------------------------------------------------

    def create(self, obj_in: Any) -> ModelType:
        payload = self._payload(obj_in)
        timestamp = now()
        payload.update(id=new_id(self.id_prefix), created_at=timestamp, updated_at=timestamp)

        with self.lock:
            entity = self._build(payload)
            self._check(entity)
            self._commit(self._items + (entity,))

        logger.info(f"{self.entity_name}_created", id=entity.id)
        return entity

    def update(self, entity: ModelType) -> ModelType:
        with self.lock:
            existing = self.get_by_id(entity.id)
            if existing is None:
                raise EntityNotFoundException(
                    f"{self.entity_name.capitalize()} not found", {"id": entity.id}
                )
            payload = entity.model_dump()
            payload.update(created_at=existing.created_at, updated_at=now())
            updated = self._build(payload)
            self._check(updated)
            self._replace({updated.id: updated})

        logger.info(f"{self.entity_name}_updated", id=updated.id)
        return updated

    def _replace(self, changed: dict[str, ModelType]) -> None:
        """Swap several entities in one commit; caller holds the lock."""
        self._commit(changed.get(item.id, item) for item in self._items)


class SoftDeleteMixin:
    """``soft_delete`` plus the default active-only filter for searches."""

    def soft_delete(self, id: str) -> bool:
        with self.lock:
            existing = self.get_by_id(id)
            if existing is None:
                logger.warning(f"{self.entity_name}_delete_skipped", id=id, reason="not_found")
                return False
            self._replace({id: existing.model_copy(update={"is_active": False, "updated_at": now()})})

        logger.info(f"{self.entity_name}_deactivated", id=id)
        return True

    @staticmethod
    def visible(item: Any, params: SearchParams) -> bool:
        return params.include_inactive or item.is_active


class HardDeleteMixin:
    """``delete`` removes the entity from the collection."""

    def delete(self, id: str) -> bool:
        with self.lock:
            if self.get_by_id(id) is None:
                logger.warning(f"{self.entity_name}_delete_skipped", id=id, reason="not_found")
                return False
            self._commit(item for item in self._items if item.id != id)

        logger.info(f"{self.entity_name}_deleted", id=id)
        return True
