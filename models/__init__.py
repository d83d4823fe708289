"""
SoYummy Database Models
Central import module for all document models
"""

from .users import User, gravatar_url
from .recipe_models import (
    RecipeCategory,
    MAIN_PAGE_CATEGORIES,
    MAIN_PAGE_RECIPES_PER_CATEGORY,
    POPULAR_PROJECTION,
    new_recipe_document,
    resolve_ingredients,
)

__all__ = [
    # User models
    "User",
    "gravatar_url",

    # Recipe models
    "RecipeCategory",
    "MAIN_PAGE_CATEGORIES",
    "MAIN_PAGE_RECIPES_PER_CATEGORY",
    "POPULAR_PROJECTION",
    "new_recipe_document",
    "resolve_ingredients",
]
