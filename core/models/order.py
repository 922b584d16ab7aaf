# =============================================================================
# core/models/order.py - Order Schemas
# =============================================================================
# These models define the API contract for order operations:
# - OrderCreateRequest: Input for POST /api/orders
# - Order: A stored order row
# - OrderWithFlower: An order joined with its flower's name and image
#
# total_price is fixed when the order is written. Later price changes to the
# flower do not touch existing orders.
# =============================================================================

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class OrderCreateRequest(BaseModel):
    """
    Body of POST /api/orders.

    Example:
        {
            "flower_id": 3,
            "quantity": 12
        }
    """
    flower_id: int | None = Field(default=None, description="Flower to order")
    quantity: int | None = Field(default=None, description="Number of stems")


class Order(BaseModel):
    """A placed order. Immutable after creation."""

    id: int = Field(..., description="Order ID")
    user_id: int = Field(..., description="Owner of the order")
    flower_id: int = Field(..., description="Ordered flower")
    quantity: int = Field(..., ge=1, description="Number of stems")
    total_price: Decimal = Field(..., description="Unit price x quantity at order time")
    created_at: datetime = Field(..., description="When the order was placed")


class OrderWithFlower(Order):
    """
    An order as listed by GET /api/orders.

    Carries the referenced flower's name and image so the client can render
    order history without a second request.
    """
    flower_name: str | None = Field(default=None, description="Flower display name")
    image_url: str | None = Field(default=None, description="Flower image reference")
