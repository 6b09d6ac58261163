"""Products API routes: catalogue CRUD, search and image upload."""

from fastapi import APIRouter, Depends, File, UploadFile, status

from erp_console.application.services.crud import apply_changes, get_or_404
from erp_console.application.services.product_service import encode_image
from erp_console.core.exceptions import EntityNotFoundException
from erp_console.domain.models.product import Product
from erp_console.domain.models.user import User
from erp_console.domain.repositories.product_repository import ProductRepository
from erp_console.domain.schemas.product import ProductCreate, ProductUpdate
from erp_console.domain.schemas.search import PaginatedResponse, SearchParams
from erp_console.interfaces.api.deps import get_current_user
from erp_console.interfaces.deps import get_product_repository, get_search_params

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=PaginatedResponse[Product])
def list_products(
    params: SearchParams = Depends(get_search_params),
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    """Search products. Filters: categoryId, supplierId, priceMin, priceMax, inStock."""
    return repo.search(params)


@router.get("/{product_id}", response_model=Product)
def get_product(
    product_id: str,
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    return get_or_404(repo, product_id, "Product")


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    return repo.create(body)


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    body: ProductUpdate,
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    return apply_changes(repo, product_id, body, "Product")


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str,
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    if not repo.soft_delete(product_id):
        raise EntityNotFoundException("Product not found", {"id": product_id})


@router.post("/{product_id}/image", response_model=Product)
async def upload_product_image(
    product_id: str,
    file: UploadFile = File(...),
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    """Store the uploaded picture inline as the product's ``imageUrl``."""
    product = get_or_404(repo, product_id, "Product")
    image_url = await encode_image(await file.read(), file.content_type)
    return repo.update(product.model_copy(update={"image_url": image_url}))
