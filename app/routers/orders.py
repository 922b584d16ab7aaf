# =============================================================================
# app/routers/orders.py - Order Endpoints
# =============================================================================
# Placing orders and reading order history.
# All endpoints require authentication.
# =============================================================================

import logging

from fastapi import APIRouter, status

from app.auth import CurrentUserDep
from app.dependencies import ContextDep
from app.exceptions import InternalError
from core.models.order import Order, OrderCreateRequest, OrderWithFlower
from lib.datastore import DatastoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreateRequest,
    user: CurrentUserDep,
    context: ContextDep,
) -> Order:
    """
    Place an order.

    total_price is the flower's current price times quantity.

    Raises:
        400: If flower_id or quantity is missing
        401: If not logged in
        404: If the flower doesn't exist
    """
    try:
        return await context.orders.create_order(user, payload.flower_id, payload.quantity)
    except DatastoreError as e:
        logger.error(f"Error creating order: {e}")
        raise InternalError("Failed to create order") from e


@router.get("", response_model=list[OrderWithFlower])
async def list_orders(user: CurrentUserDep, context: ContextDep) -> list[OrderWithFlower]:
    """
    List the caller's orders, most recent first.

    Each order includes the flower's name and image.
    """
    try:
        return await context.orders.list_orders(user)
    except DatastoreError as e:
        logger.error(f"Error fetching orders: {e}")
        raise InternalError("Failed to fetch orders") from e
