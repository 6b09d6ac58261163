"""Product and Category entities."""

from typing import Optional

from pydantic import Field

from erp_console.domain.models.base import CamelModel, Entity


class CategoryBase(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""


class Category(Entity, CategoryBase):
    pass


class ProductBase(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""
    sku: str = ""
    price: float = Field(ge=0.01)
    cost: float = Field(default=0, ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    category_id: str
    supplier_id: Optional[str] = None
    image_url: str = ""
    is_active: bool = True


class Product(Entity, ProductBase):
    def __repr__(self):
        return f"<Product {self.sku} - {self.name}>"
