# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Signup/login inputs and the public user projection
# - flower.py: Catalog entries
# - order.py: Order inputs and rows
# - session.py: Server-side session records
#
# These models define the "contract" between API and clients.
# =============================================================================

from .flower import Flower
from .order import Order, OrderCreateRequest, OrderWithFlower
from .session import SessionRecord
from .user import CurrentUser, LoginRequest, SignupRequest, UserPublic

__all__ = [
    # User
    "CurrentUser",
    "LoginRequest",
    "SignupRequest",
    "UserPublic",
    # Catalog
    "Flower",
    # Orders
    "Order",
    "OrderCreateRequest",
    "OrderWithFlower",
    # Sessions
    "SessionRecord",
]
