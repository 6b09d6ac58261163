"""Pydantic schemas for Orders and the sales report."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from erp_console.domain.models.base import CamelModel
from erp_console.domain.models.order import OrderStatus, PaymentMethod, PaymentStatus


class OrderItemCreate(CamelModel):
    id: Optional[str] = None
    product_id: str
    quantity: int = Field(ge=1)
    unit_price: float = Field(ge=0)
    discount: float = 0
    total: float


class OrderCreate(CamelModel):
    client_id: str
    user_id: str
    order_number: Optional[str] = None
    status: OrderStatus = "pending"
    payment_status: PaymentStatus = "pending"
    payment_method: PaymentMethod = "cash"
    items: list[OrderItemCreate] = Field(default_factory=list)
    discount: float = 0
    tax: float = 0
    shipping: float = 0
    # computed from the items when omitted
    total: Optional[float] = None
    notes: Optional[str] = None


class OrderUpdate(CamelModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[PaymentMethod] = None
    discount: Optional[float] = None
    tax: Optional[float] = None
    shipping: Optional[float] = None
    total: Optional[float] = None
    notes: Optional[str] = None


class OrderFilter(CamelModel):
    client_id: Optional[str] = None
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[PaymentMethod] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class SalesReportRow(CamelModel):
    order_id: str
    order_number: str
    client_name: str
    date: datetime
    total: float
    status: str
    payment_status: str
