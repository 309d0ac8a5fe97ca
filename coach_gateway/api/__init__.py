"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from coach_gateway.api import api_router
    app.include_router(api_router, prefix="/api")
"""

from coach_gateway.api.routes import api_router

__all__ = ["api_router"]
