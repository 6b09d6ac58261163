"""
In-memory filter -> sort -> paginate pipeline shared by every entity list.

Repositories hand over a snapshot of their collection, a predicate holding the
entity-specific search/filter rules and the fields that may be sorted on.
"""

import math
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, TypeVar

from pydantic.alias_generators import to_camel

from erp_console.core.clock import ensure_aware
from erp_console.domain.schemas.search import PaginatedResponse, SearchParams, SortOrder

T = TypeVar("T")

SortableFields = Mapping[str, tuple[str, ...]]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def sortable_fields(*paths: str) -> dict[str, tuple[str, ...]]:
    """Declare sortable attribute paths.

    Each path is registered under its snake_case name and its camelCase alias,
    so ``"stock_quantity"`` answers to both ``stock_quantity`` and
    ``stockQuantity`` and ``"address.zip_code"`` to ``address.zipCode``.
    The first path is the default sort field.
    """
    fields: dict[str, tuple[str, ...]] = {}
    for path in paths:
        parts = tuple(path.split("."))
        fields[path] = parts
        fields[".".join(to_camel(p) for p in parts)] = parts
    return fields


def resolve_path(obj: Any, path: Sequence[str]) -> Any:
    """Walk a declared attribute path, returning None past a missing link."""
    value = obj
    for attr in path:
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(attr)
        else:
            value = getattr(value, attr, None)
    return value


def parse_timestamp(value: str) -> Optional[float]:
    """Epoch seconds for ISO-8601 strings, None for anything else."""
    if not _ISO_DATE.match(value):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return ensure_aware(parsed).timestamp()


def sort_key(value: Any) -> tuple[int, Any]:
    """Rank values so that numbers/timestamps, strings and None never get compared with each other."""
    if value is None:
        return (2, 0)
    if isinstance(value, (datetime, date)):
        return (0, ensure_aware(value).timestamp())
    if isinstance(value, (bool, int, float, Decimal)):
        return (0, value)
    if isinstance(value, str):
        timestamp = parse_timestamp(value)
        if timestamp is not None:
            return (0, timestamp)
        return (1, value.lower())
    return (1, str(value).lower())


def contains(haystack: Optional[str], needle: str) -> bool:
    """Case-insensitive substring match."""
    return needle.lower() in (haystack or "").lower()


def paginate(
    items: Iterable[T],
    params: SearchParams,
    predicate: Callable[[T], bool],
    fields: SortableFields,
    default_sort: Optional[str] = None,
    default_order: SortOrder = "asc",
) -> PaginatedResponse[T]:
    """Filter, sort and slice a collection snapshot.

    An unknown ``sort`` leaves the filtered order untouched. Pages past the end
    yield an empty ``data`` list.
    """
    results = [item for item in items if predicate(item)]

    sort = params.sort or default_sort or next(iter(fields), None)
    order = params.order or default_order
    path = fields.get(sort) if sort else None
    if path is not None:
        results.sort(key=lambda item: sort_key(resolve_path(item, path)), reverse=order == "desc")

    total = len(results)
    start = (params.page - 1) * params.limit

    return PaginatedResponse(
        data=results[start:start + params.limit],
        total=total,
        page=params.page,
        limit=params.limit,
        total_pages=math.ceil(total / params.limit),
    )
