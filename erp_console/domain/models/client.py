"""Client entity: individuals (CPF) and companies (CNPJ)."""

from typing import Literal

from pydantic import Field

from erp_console.domain.models.base import Address, CamelModel, Entity

DocumentType = Literal["cpf", "cnpj"]


class ClientBase(CamelModel):
    name: str = Field(min_length=1)
    email: str = ""
    phone: str = ""
    document: str
    document_type: DocumentType
    address: Address
    is_active: bool = True


class Client(Entity, ClientBase):
    def __repr__(self):
        return f"<Client {self.document} - {self.name}>"
