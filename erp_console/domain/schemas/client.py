"""Pydantic schemas for Client and Supplier."""

from typing import Optional

from erp_console.domain.models.base import Address, CamelModel
from erp_console.domain.models.client import ClientBase, DocumentType
from erp_console.domain.models.supplier import SupplierBase


class ClientCreate(ClientBase):
    pass


class ClientUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    document: Optional[str] = None
    document_type: Optional[DocumentType] = None
    address: Optional[Address] = None
    is_active: Optional[bool] = None


class ClientFilter(CamelModel):
    document_type: Optional[DocumentType] = None
    city: Optional[str] = None
    state: Optional[str] = None


class SupplierCreate(SupplierBase):
    pass


class SupplierUpdate(CamelModel):
    name: Optional[str] = None
    product: Optional[str] = None
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    document: Optional[str] = None
    address: Optional[Address] = None
    is_active: Optional[bool] = None


class SupplierFilter(CamelModel):
    city: Optional[str] = None
    state: Optional[str] = None
