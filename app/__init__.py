# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, lifespan, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - dependencies.py: AppContext and its FastAPI dependency
# - auth/: Session cookies, the require_auth gate and auth routes
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
