"""Categories API routes."""

from fastapi import APIRouter, Depends, status

from erp_console.application.services.crud import apply_changes, get_or_404
from erp_console.core.exceptions import EntityNotFoundException
from erp_console.domain.models.product import Category
from erp_console.domain.models.user import User
from erp_console.domain.repositories.product_repository import CategoryRepository
from erp_console.domain.schemas.product import CategoryCreate, CategoryUpdate
from erp_console.domain.schemas.search import PaginatedResponse, SearchParams
from erp_console.interfaces.api.deps import get_current_user
from erp_console.interfaces.deps import get_category_repository, get_search_params

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=PaginatedResponse[Category])
def list_categories(
    params: SearchParams = Depends(get_search_params),
    repo: CategoryRepository = Depends(get_category_repository),
    user: User = Depends(get_current_user),
):
    return repo.search(params)


@router.get("/{category_id}", response_model=Category)
def get_category(
    category_id: str,
    repo: CategoryRepository = Depends(get_category_repository),
    user: User = Depends(get_current_user),
):
    return get_or_404(repo, category_id, "Category")


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    repo: CategoryRepository = Depends(get_category_repository),
    user: User = Depends(get_current_user),
):
    return repo.create(body)


@router.put("/{category_id}", response_model=Category)
def update_category(
    category_id: str,
    body: CategoryUpdate,
    repo: CategoryRepository = Depends(get_category_repository),
    user: User = Depends(get_current_user),
):
    return apply_changes(repo, category_id, body, "Category")


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: str,
    repo: CategoryRepository = Depends(get_category_repository),
    user: User = Depends(get_current_user),
):
    """Refused with 422 while active products still use the category."""
    if not repo.delete(category_id):
        raise EntityNotFoundException("Category not found", {"id": category_id})
