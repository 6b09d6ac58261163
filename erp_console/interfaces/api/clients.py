"""Client API routes: CRUD and search for clients."""

from fastapi import APIRouter, Depends, status

from erp_console.application.services.crud import apply_changes, get_or_404
from erp_console.core.exceptions import EntityNotFoundException
from erp_console.domain.models.client import Client
from erp_console.domain.models.user import User
from erp_console.domain.repositories.client_repository import ClientRepository
from erp_console.domain.schemas.client import ClientCreate, ClientUpdate
from erp_console.domain.schemas.search import PaginatedResponse, SearchParams
from erp_console.interfaces.api.deps import get_current_user
from erp_console.interfaces.deps import get_client_repository, get_search_params

router = APIRouter(prefix="/api/clients", tags=["Clients"])


@router.get("", response_model=PaginatedResponse[Client])
def list_clients(
    params: SearchParams = Depends(get_search_params),
    repo: ClientRepository = Depends(get_client_repository),
    user: User = Depends(get_current_user),
):
    """List clients. Filters: documentType, city, state."""
    return repo.search(params)


@router.get("/{client_id}", response_model=Client)
def get_client(
    client_id: str,
    repo: ClientRepository = Depends(get_client_repository),
    user: User = Depends(get_current_user),
):
    return get_or_404(repo, client_id, "Client")


@router.post("", response_model=Client, status_code=status.HTTP_201_CREATED)
def create_client(
    body: ClientCreate,
    repo: ClientRepository = Depends(get_client_repository),
    user: User = Depends(get_current_user),
):
    return repo.create(body)


@router.put("/{client_id}", response_model=Client)
def update_client(
    client_id: str,
    body: ClientUpdate,
    repo: ClientRepository = Depends(get_client_repository),
    user: User = Depends(get_current_user),
):
    return apply_changes(repo, client_id, body, "Client")


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(
    client_id: str,
    repo: ClientRepository = Depends(get_client_repository),
    user: User = Depends(get_current_user),
):
    if not repo.soft_delete(client_id):
        raise EntityNotFoundException("Client not found", {"id": client_id})
