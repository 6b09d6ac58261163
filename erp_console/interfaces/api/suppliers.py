"""Supplier API routes."""

from fastapi import APIRouter, Depends, status

from erp_console.application.services.crud import apply_changes, get_or_404
from erp_console.core.exceptions import EntityNotFoundException
from erp_console.domain.models.supplier import Supplier
from erp_console.domain.models.user import User
from erp_console.domain.repositories.client_repository import SupplierRepository
from erp_console.domain.schemas.client import SupplierCreate, SupplierUpdate
from erp_console.domain.schemas.search import PaginatedResponse, SearchParams
from erp_console.interfaces.api.deps import get_current_user
from erp_console.interfaces.deps import get_search_params, get_supplier_repository

router = APIRouter(prefix="/api/suppliers", tags=["Suppliers"])


@router.get("", response_model=PaginatedResponse[Supplier])
def list_suppliers(
    params: SearchParams = Depends(get_search_params),
    repo: SupplierRepository = Depends(get_supplier_repository),
    user: User = Depends(get_current_user),
):
    return repo.search(params)


@router.get("/{supplier_id}", response_model=Supplier)
def get_supplier(
    supplier_id: str,
    repo: SupplierRepository = Depends(get_supplier_repository),
    user: User = Depends(get_current_user),
):
    return get_or_404(repo, supplier_id, "Supplier")


@router.post("", response_model=Supplier, status_code=status.HTTP_201_CREATED)
def create_supplier(
    body: SupplierCreate,
    repo: SupplierRepository = Depends(get_supplier_repository),
    user: User = Depends(get_current_user),
):
    return repo.create(body)


@router.put("/{supplier_id}", response_model=Supplier)
def update_supplier(
    supplier_id: str,
    body: SupplierUpdate,
    repo: SupplierRepository = Depends(get_supplier_repository),
    user: User = Depends(get_current_user),
):
    return apply_changes(repo, supplier_id, body, "Supplier")


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_supplier(
    supplier_id: str,
    repo: SupplierRepository = Depends(get_supplier_repository),
    user: User = Depends(get_current_user),
):
    """Deactivate the supplier and detach it from its products."""
    if not repo.soft_delete(supplier_id):
        raise EntityNotFoundException("Supplier not found", {"id": supplier_id})
