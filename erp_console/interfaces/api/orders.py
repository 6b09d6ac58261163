"""Orders API routes: placement, status changes and deletion go through the order workflow."""

from fastapi import APIRouter, Depends, status

from erp_console.application.services.order_service import OrderWorkflow
from erp_console.core.exceptions import EntityNotFoundException
from erp_console.domain.models.order import Order
from erp_console.domain.models.user import User
from erp_console.domain.schemas.order import OrderCreate, OrderUpdate
from erp_console.domain.schemas.search import PaginatedResponse, SearchParams
from erp_console.interfaces.api.deps import get_current_user
from erp_console.interfaces.deps import get_order_workflow, get_search_params

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("", response_model=PaginatedResponse[Order])
def list_orders(
    params: SearchParams = Depends(get_search_params),
    workflow: OrderWorkflow = Depends(get_order_workflow),
    user: User = Depends(get_current_user),
):
    """Search orders. Filters: clientId, status, paymentStatus, paymentMethod, startDate, endDate."""
    return workflow.search(params)


@router.get("/next-number")
def next_order_number(
    workflow: OrderWorkflow = Depends(get_order_workflow),
    user: User = Depends(get_current_user),
):
    return {"orderNumber": workflow.next_order_number()}


@router.get("/{order_id}", response_model=Order)
def get_order(
    order_id: str,
    workflow: OrderWorkflow = Depends(get_order_workflow),
    user: User = Depends(get_current_user),
):
    order = workflow.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundException("Order not found", {"id": order_id})
    return order


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    workflow: OrderWorkflow = Depends(get_order_workflow),
    user: User = Depends(get_current_user),
):
    return workflow.create(body)


@router.put("/{order_id}", response_model=Order)
def update_order(
    order_id: str,
    body: OrderUpdate,
    workflow: OrderWorkflow = Depends(get_order_workflow),
    user: User = Depends(get_current_user),
):
    return workflow.modify(order_id, body)


@router.post("/{order_id}/cancel", response_model=Order)
def cancel_order(
    order_id: str,
    workflow: OrderWorkflow = Depends(get_order_workflow),
    user: User = Depends(get_current_user),
):
    return workflow.cancel(order_id)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: str,
    workflow: OrderWorkflow = Depends(get_order_workflow),
    user: User = Depends(get_current_user),
):
    if not workflow.delete(order_id):
        raise EntityNotFoundException("Order not found", {"id": order_id})
