"""Pydantic schemas for Product and Category."""

from typing import Optional

from erp_console.domain.models.base import CamelModel
from erp_console.domain.models.product import CategoryBase, ProductBase


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[float] = None
    cost: Optional[float] = None
    stock_quantity: Optional[int] = None
    category_id: Optional[str] = None
    supplier_id: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None


class ProductFilter(CamelModel):
    category_id: Optional[str] = None
    supplier_id: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    in_stock: bool = False


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None


class StockReportRow(CamelModel):
    product_id: str
    name: str
    sku: str
    current_stock: int
    average_cost: float
    total_value: float
