"""Transactions API routes."""

from fastapi import APIRouter, Depends, status

from erp_console.application.services.crud import apply_changes, get_or_404
from erp_console.core.exceptions import EntityNotFoundException
from erp_console.domain.models.transaction import Transaction
from erp_console.domain.models.user import User
from erp_console.domain.repositories.order_repository import TransactionRepository
from erp_console.domain.schemas.search import PaginatedResponse, SearchParams
from erp_console.domain.schemas.transaction import TransactionCreate, TransactionUpdate
from erp_console.interfaces.api.deps import get_current_user
from erp_console.interfaces.deps import get_search_params, get_transaction_repository

router = APIRouter(prefix="/api/transactions", tags=["Transactions"])


@router.get("", response_model=PaginatedResponse[Transaction])
def list_transactions(
    params: SearchParams = Depends(get_search_params),
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: User = Depends(get_current_user),
):
    """Newest first unless ``sort``/``order`` say otherwise."""
    return repo.search(params)


@router.get("/{transaction_id}", response_model=Transaction)
def get_transaction(
    transaction_id: str,
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: User = Depends(get_current_user),
):
    return get_or_404(repo, transaction_id, "Transaction")


@router.post("", response_model=Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(
    body: TransactionCreate,
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: User = Depends(get_current_user),
):
    return repo.create(body)


@router.put("/{transaction_id}", response_model=Transaction)
def update_transaction(
    transaction_id: str,
    body: TransactionUpdate,
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: User = Depends(get_current_user),
):
    return apply_changes(repo, transaction_id, body, "Transaction")


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: str,
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: User = Depends(get_current_user),
):
    if not repo.delete(transaction_id):
        raise EntityNotFoundException("Transaction not found", {"id": transaction_id})
