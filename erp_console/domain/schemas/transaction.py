"""Pydantic schemas for Transactions and the financial report."""

from datetime import datetime
from typing import Optional

from erp_console.domain.models.base import CamelModel
from erp_console.domain.models.transaction import TransactionBase, TransactionType


class TransactionCreate(TransactionBase):
    pass


class TransactionUpdate(CamelModel):
    type: Optional[TransactionType] = None
    amount: Optional[float] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    category: Optional[str] = None
    order_id: Optional[str] = None
    supplier_id: Optional[str] = None


class TransactionFilter(CamelModel):
    type: Optional[TransactionType] = None
    category: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    order_id: Optional[str] = None
    supplier_id: Optional[str] = None


class FinancialReportRow(CamelModel):
    transaction_id: str
    date: datetime
    type: TransactionType
    category: str
    description: str
    amount: float
    balance: float


class BalanceSummary(CamelModel):
    income: float
    expense: float
    balance: float
