# =============================================================================
# core/services/order_service.py - Order Business Logic
# =============================================================================
# Placing and listing orders for the logged-in user.
#
# Placing an order is two statements: read the flower, then insert the order
# with total_price = price x quantity. They are not wrapped in a transaction,
# so a concurrent price change can land between them; the order then carries
# the price that was read.
# =============================================================================

import logging

from app.exceptions import ValidationError
from core.models.order import Order, OrderWithFlower
from core.models.user import CurrentUser
from core.services.catalog_service import CatalogService
from lib.datastore import Datastore

logger = logging.getLogger(__name__)


class OrderService:
    """Service for order placement and history."""

    def __init__(self, datastore: Datastore, catalog: CatalogService):
        self.datastore = datastore
        self.catalog = catalog

    async def create_order(
        self,
        user: CurrentUser,
        flower_id: int | None,
        quantity: int | None,
    ) -> Order:
        """
        Place an order for the given user.

        No stock is checked or decremented.

        Args:
            user: Authenticated caller (enforced by the router)
            flower_id: Flower to order
            quantity: Number of stems, at least 1

        Returns:
            The stored order row

        Raises:
            ValidationError: If flower_id or quantity is missing or quantity < 1
            FlowerNotFoundError: If the flower doesn't exist (nothing is written)
        """
        if not flower_id or not quantity:
            raise ValidationError("Flower and quantity are required")
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        flower = await self.catalog.get_flower(flower_id)
        total_price = flower.price * quantity

        row = await self.datastore.insert_order(
            user_id=user.id,
            flower_id=flower.id,
            quantity=quantity,
            total_price=total_price,
        )
        order = Order.model_validate(row)
        logger.info(f"Order {order.id} placed by user {user.id}: {quantity} x flower {flower.id}")
        return order

    async def list_orders(self, user: CurrentUser) -> list[OrderWithFlower]:
        """Orders owned by the user, most recent first."""
        rows = await self.datastore.list_orders_for_user(user.id)
        return [OrderWithFlower.model_validate(row) for row in rows]
