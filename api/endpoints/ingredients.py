"""
SoYummy Ingredient Endpoints
Ingredient catalogue used by the recipe form
"""

from typing import Any, Dict, List

from fastapi import APIRouter

from core.dependencies import Database
from services.recipe_service import recipe_service

router = APIRouter()


@router.get("/list")
async def get_ingredient_list(db: Database) -> List[Dict[str, Any]]:
    """All ingredients sorted by name"""
    return await recipe_service.get_ingredient_list(db)
