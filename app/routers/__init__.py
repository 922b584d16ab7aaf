# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - flowers.py: Read-only flower catalog
# - orders.py: Order placement and history (login required)
#
# Auth routes live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import flowers
from . import health
from . import orders

__all__ = [
    "flowers",
    "health",
    "orders",
]
