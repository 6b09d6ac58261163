"""Base models shared by every entity."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from erp_console.core.clock import ensure_aware, now


def new_id(prefix: str) -> str:
    """Opaque identifier, e.g. ``prod_3f2c9a1b7d4e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class CamelModel(BaseModel):
    """snake_case in Python, camelCase in storage and on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Entity(CamelModel):
    id: str
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _localize_timestamps(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class Address(CamelModel):
    """Embedded postal address (value object)."""

    street: str
    number: str
    complement: Optional[str] = None
    neighborhood: str
    city: str
    state: str
    zip_code: str
    country: str = "BR"
