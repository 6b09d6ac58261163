"""Search parameters and paginated responses shared by every entity list."""

from typing import Any, Generic, Literal, Optional, TypeVar

from pydantic import Field

from erp_console.domain.models.base import CamelModel

T = TypeVar("T")

SortOrder = Literal["asc", "desc"]


class SearchParams(CamelModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    sort: Optional[str] = None
    order: Optional[SortOrder] = None
    search: str = ""
    filters: dict[str, Any] = Field(default_factory=dict)
    include_inactive: bool = False


class PaginatedResponse(CamelModel, Generic[T]):
    data: list[T]
    total: int
    page: int
    limit: int
    total_pages: int
