"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from coach_gateway.api.routes.chat_routes import router as chat_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(chat_router)
