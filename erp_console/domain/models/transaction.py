"""Financial transaction entity."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from erp_console.core.clock import ensure_aware
from erp_console.domain.models.base import CamelModel, Entity

TransactionType = Literal["income", "expense"]


class TransactionBase(CamelModel):
    type: TransactionType
    amount: float = Field(gt=0)
    description: str = ""
    date: datetime
    category: str = ""
    order_id: Optional[str] = None
    supplier_id: Optional[str] = None
    user_id: str

    @field_validator("date")
    @classmethod
    def _localize_date(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class Transaction(Entity, TransactionBase):
    pass
