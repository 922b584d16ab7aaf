# =============================================================================
# core/services/catalog_service.py - Catalog Business Logic
# =============================================================================
# Read-only access to the flowers table.
# =============================================================================

import logging
from typing import Any

from app.exceptions import FlowerNotFoundError
from core.models.flower import Flower
from lib.datastore import Datastore

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for reading the flower catalog."""

    def __init__(self, datastore: Datastore):
        self.datastore = datastore

    async def list_flowers(self) -> list[Flower]:
        """
        All flowers, ordered by id ascending.

        An empty catalog is an empty list, not an error.
        """
        rows = await self.datastore.list_flowers()
        flowers = [Flower.model_validate(row) for row in rows]
        # The store already orders by id; keep the guarantee local too
        flowers.sort(key=lambda f: f.id)
        return flowers

    async def get_flower(self, flower_id: Any) -> Flower:
        """
        Get a flower by ID.

        IDs are opaque to clients, so anything that isn't a valid flower ID
        is simply not found.

        Raises:
            FlowerNotFoundError: If no flower matches
        """
        try:
            key = int(flower_id)
        except (TypeError, ValueError):
            raise FlowerNotFoundError(flower_id)

        row = await self.datastore.fetch_flower(key)
        if row is None:
            raise FlowerNotFoundError(flower_id)

        return Flower.model_validate(row)
