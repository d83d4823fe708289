"""
SoYummy API Routes
Main router configuration for all API endpoints
"""

from fastapi import APIRouter
import structlog

from api.endpoints import auth, recipes, ingredients, health

logger = structlog.get_logger()

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

api_router.include_router(
    auth.router,
    prefix="/users",
    tags=["users"]
)

api_router.include_router(
    recipes.router,
    prefix="/recipes",
    tags=["recipes"]
)

api_router.include_router(
    ingredients.router,
    prefix="/ingredients",
    tags=["ingredients"]
)

logger.debug("API routes configured successfully")
