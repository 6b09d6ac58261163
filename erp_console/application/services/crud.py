"""Generic lookup and partial-update helpers shared by the entity routers."""

from typing import TypeVar

from pydantic import BaseModel

from erp_console.core.exceptions import EntityNotFoundException
from erp_console.domain.repositories.base import BaseRepository

T = TypeVar("T", bound=BaseModel)


def get_or_404(repo: BaseRepository[T], entity_id: str, label: str) -> T:
    entity = repo.get_by_id(entity_id)
    if entity is None:
        raise EntityNotFoundException(f"{label} not found", {"id": entity_id})
    return entity


def apply_changes(repo: BaseRepository[T], entity_id: str, data: BaseModel, label: str) -> T:
    """Copy the fields explicitly set on ``data`` onto the stored entity and save it."""
    existing = get_or_404(repo, entity_id, label)
    changes = {name: getattr(data, name) for name in data.model_fields_set}
    return repo.update(existing.model_copy(update=changes))
