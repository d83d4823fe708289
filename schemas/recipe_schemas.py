"""
SoYummy Recipe Schemas
Pydantic models for recipe requests and responses
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.recipe_models import RecipeCategory


class RecipeIngredientIn(BaseModel):
    """Ingredient reference of a new recipe"""
    id: str = Field(..., min_length=24, max_length=24)
    measure: str = Field(default="", max_length=100)


class RecipeCreate(BaseModel):
    """Schema for adding a recipe"""
    title: str = Field(..., min_length=1, max_length=200)
    category: RecipeCategory
    description: str = Field(default="", max_length=2000)
    instructions: str = Field(..., min_length=1)
    time: Optional[str] = Field(default=None, max_length=20)
    area: Optional[str] = None
    thumb: Optional[str] = None
    preview: Optional[str] = None
    youtube: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    ingredients: List[RecipeIngredientIn] = Field(..., min_length=1)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError("Title must not be blank")
        return v.strip()


class FavoriteRequest(BaseModel):
    """Schema for adding a recipe to favorites"""
    recipe_id: str = Field(..., alias="recipeId")

    model_config = ConfigDict(populate_by_name=True)


class PageParams(BaseModel):
    """1-based page number and page size"""
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=8, ge=1)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class PaginatedRecipes(BaseModel):
    """Page of recipes plus the count of all matches"""
    total: int
    recipes: List[Dict[str, Any]]


class RecipeDeleted(BaseModel):
    id: str
    message: str
