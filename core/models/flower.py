# =============================================================================
# core/models/flower.py - Catalog Schemas
# =============================================================================
# Flowers are seeded outside this service and only ever read here.
# =============================================================================

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Flower(BaseModel):
    """
    A product in the catalog.

    Columns beyond the ones declared here are passed through untouched.

    Example:
        {
            "id": 1,
            "name": "Red Rose",
            "price": "12.50",
            "image_url": "/images/red-rose.jpg",
            "description": "A classic."
        }
    """
    id: int = Field(..., description="Flower ID")
    name: str = Field(..., description="Display name")
    price: Decimal = Field(..., ge=0, description="Unit price")
    image_url: str | None = Field(default=None, description="Image reference")
    description: str | None = Field(default=None, description="Marketing text")

    model_config = ConfigDict(extra="allow")
