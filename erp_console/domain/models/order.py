"""Order aggregate: an order owns its line items."""

from typing import Literal, Optional

from pydantic import Field

from erp_console.domain.models.base import CamelModel, Entity

OrderStatus = Literal["pending", "completed", "cancelled"]
PaymentStatus = Literal["pending", "paid", "cancelled"]
PaymentMethod = Literal["cash", "credit", "debit", "transfer", "other"]


class OrderItem(CamelModel):
    id: str
    product_id: str
    quantity: int = Field(ge=1)
    unit_price: float = Field(ge=0)
    discount: float = 0
    # unit_price * quantity - discount, computed by the caller
    total: float


class Order(Entity):
    client_id: str
    user_id: str
    order_number: str
    status: OrderStatus = "pending"
    payment_status: PaymentStatus = "pending"
    payment_method: PaymentMethod = "cash"
    items: list[OrderItem]
    discount: float = 0
    tax: float = 0
    shipping: float = 0
    total: float
    notes: Optional[str] = None

    def __repr__(self):
        return f"<Order {self.order_number} ({self.status})>"
