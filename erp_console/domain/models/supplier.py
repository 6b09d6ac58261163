"""Supplier entity."""

from pydantic import Field

from erp_console.domain.models.base import Address, CamelModel, Entity


class SupplierBase(CamelModel):
    name: str = Field(min_length=1)
    product: str = ""  # what the supplier provides, free text
    contact_name: str = ""
    email: str = ""
    phone: str = ""
    document: str  # CNPJ
    address: Address
    is_active: bool = True


class Supplier(Entity, SupplierBase):
    def __repr__(self):
        return f"<Supplier {self.document} - {self.name}>"
