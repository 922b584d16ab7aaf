# =============================================================================
# app/routers/flowers.py - Catalog Endpoints
# =============================================================================
# Read-only flower catalog. No authentication required.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import ContextDep
from app.exceptions import InternalError
from core.models.flower import Flower
from lib.datastore import DatastoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[Flower])
async def list_flowers(context: ContextDep) -> list[Flower]:
    """
    List all flowers, ordered by id.
    """
    try:
        return await context.catalog.list_flowers()
    except DatastoreError as e:
        logger.error(f"Error fetching flowers: {e}")
        raise InternalError("Failed to fetch flowers") from e


@router.get("/{flower_id}", response_model=Flower)
async def get_flower(flower_id: str, context: ContextDep) -> Flower:
    """
    Get a single flower.

    Raises:
        404: If no flower has this id
    """
    try:
        return await context.catalog.get_flower(flower_id)
    except DatastoreError as e:
        logger.error(f"Error fetching flower {flower_id}: {e}")
        raise InternalError("Failed to fetch flower") from e
