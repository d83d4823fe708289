"""
SoYummy Recipe Endpoints
Recipe browsing, search, user recipes and favorites
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status

from core.dependencies import CurrentUser, Database, LargePage, SmallPage
from schemas.auth_schemas import MessageResponse
from schemas.recipe_schemas import FavoriteRequest, PaginatedRecipes, RecipeCreate, RecipeDeleted
from services.recipe_service import recipe_service

router = APIRouter()


@router.get("/main-page")
async def get_main_page_recipes(db: Database) -> List[List[Dict[str, Any]]]:
    """Landing page recipes grouped by category"""
    return await recipe_service.get_main_page_recipes(db)


@router.get("/category-list")
async def get_category_list() -> List[str]:
    return recipe_service.get_category_list()


@router.get("/category/{name}", response_model=PaginatedRecipes)
async def get_recipes_by_category(name: str, page: LargePage, db: Database):
    return await recipe_service.get_recipes_by_category(db, name, page)


@router.get("/title", response_model=PaginatedRecipes)
async def get_recipes_by_title(
    page: LargePage,
    db: Database,
    query: str = Query(..., min_length=1, description="Part of the recipe title"),
):
    """Search recipes by title substring"""
    return await recipe_service.get_recipes_by_title(db, query, page)


@router.get("/ingredient", response_model=PaginatedRecipes)
async def get_recipes_by_ingredient(
    page: LargePage,
    db: Database,
    query: str = Query(..., min_length=1, description="Part of an ingredient name"),
):
    """Search recipes containing an ingredient whose name matches"""
    return await recipe_service.get_recipes_by_ingredient(db, query, page)


@router.get("/own", response_model=PaginatedRecipes)
async def get_own_recipes(current_user: CurrentUser, page: SmallPage, db: Database):
    return await recipe_service.get_own_recipes(db, current_user, page)


@router.post("/own", status_code=status.HTTP_201_CREATED)
async def add_recipe(recipe_data: RecipeCreate, current_user: CurrentUser, db: Database) -> Dict[str, Any]:
    """Add a recipe owned by the current user"""
    return await recipe_service.add_recipe(db, current_user, recipe_data)


@router.delete("/own/{recipe_id}", response_model=RecipeDeleted)
async def delete_recipe(recipe_id: str, current_user: CurrentUser, db: Database):
    await recipe_service.delete_recipe(db, current_user, recipe_id)
    return RecipeDeleted(id=recipe_id, message="Recipe deleted")


@router.get("/favorite", response_model=PaginatedRecipes)
async def get_favorite_recipes(current_user: CurrentUser, page: SmallPage, db: Database):
    return await recipe_service.get_favorite_recipes(db, current_user, page)


@router.post("/favorite", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_to_favorite(favorite: FavoriteRequest, current_user: CurrentUser, db: Database):
    await recipe_service.add_to_favorite(db, current_user, favorite.recipe_id)
    return MessageResponse(message="Added to favorite recipes")


@router.delete("/favorite/{recipe_id}", response_model=MessageResponse)
async def remove_from_favorite(recipe_id: str, current_user: CurrentUser, db: Database):
    await recipe_service.remove_from_favorite(db, current_user, recipe_id)
    return MessageResponse(message="Recipe removed from favorite recipes")


@router.get("/popular", response_model=PaginatedRecipes)
async def get_popular_recipes(page: SmallPage, db: Database):
    """Recipes ordered by number of likes"""
    return await recipe_service.get_popular_recipes(db, page)


@router.get("/{recipe_id}")
async def get_recipe_by_id(recipe_id: str, db: Database) -> Optional[Dict[str, Any]]:
    """Single recipe with its ingredients, or null when it does not exist"""
    return await recipe_service.get_recipe_by_id(db, recipe_id)
