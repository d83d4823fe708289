"""
SoYummy Recipe Service
Paginated recipe queries, favorites and user recipes over MongoDB

Paged listings return the requested slice together with the count of all
matches. The slice and the count are two independent reads of the same
filter; they are not taken from one snapshot and may briefly disagree while
recipes are being written.
"""

import asyncio
import re
from typing import Any, Dict, List, Optional

import structlog
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from core.database import INGREDIENTS, RECIPES
from core.exceptions import BadRequestError, ConflictError, NotFoundError
from models.recipe_models import (
    MAIN_PAGE_CATEGORIES,
    MAIN_PAGE_RECIPES_PER_CATEGORY,
    POPULAR_PROJECTION,
    RecipeCategory,
    new_recipe_document,
    resolve_ingredients,
)
from models.users import User
from schemas.recipe_schemas import PageParams, RecipeCreate
from utils.mongo_utils import parse_object_id, serialize_document

logger = structlog.get_logger()

NO_RECIPES_FOUND = "no recipes found"


def substring_filter(query: str) -> Dict[str, str]:
    """Case-insensitive match of the query text anywhere in a field"""
    return {"$regex": re.escape(query), "$options": "i"}


class RecipeService:
    """Recipe queries; every method takes the database handle of the request"""

    async def _paginate(
        self,
        db: AsyncIOMotorDatabase,
        query: Dict[str, Any],
        page: PageParams,
    ) -> Dict[str, Any]:
        cursor = db[RECIPES].find(query, skip=page.skip, limit=page.limit)
        recipes, total = await asyncio.gather(
            cursor.to_list(length=None),
            db[RECIPES].count_documents(query),
        )
        return {"total": total, "recipes": serialize_document(recipes)}

    async def get_main_page_recipes(self, db: AsyncIOMotorDatabase) -> List[List[Dict[str, Any]]]:
        """First recipes of each landing page category, one list per category"""
        recipes = await db[RECIPES].find(
            {"category": {"$in": MAIN_PAGE_CATEGORIES}}
        ).to_list(length=None)

        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for recipe in recipes:
            group = grouped.setdefault(recipe["category"], [])
            if len(group) < MAIN_PAGE_RECIPES_PER_CATEGORY:
                group.append(recipe)

        return serialize_document(list(grouped.values()))

    def get_category_list(self) -> List[str]:
        return sorted(category.value for category in RecipeCategory)

    async def get_recipes_by_category(
        self,
        db: AsyncIOMotorDatabase,
        name: str,
        page: PageParams,
    ) -> Dict[str, Any]:
        result = await self._paginate(db, {"category": name}, page)
        if not result["recipes"]:
            raise NotFoundError(NO_RECIPES_FOUND)
        return result

    async def get_recipe_by_id(self, db: AsyncIOMotorDatabase, recipe_id: str) -> Optional[Dict[str, Any]]:
        """Single recipe with its ingredients resolved; None when absent"""
        object_id = parse_object_id(recipe_id)
        if object_id is None:
            return None

        recipe = await db[RECIPES].find_one({"_id": object_id})
        if recipe is None:
            return None

        entries = recipe.get("ingredients") or []
        ingredient_ids = [entry.get("id") for entry in entries]
        ingredients = await db[INGREDIENTS].find(
            {"_id": {"$in": ingredient_ids}}
        ).to_list(length=None)

        recipe["ingredients"] = resolve_ingredients(
            entries, {ingredient["_id"]: ingredient for ingredient in ingredients}
        )
        return serialize_document(recipe)

    async def get_recipes_by_title(
        self,
        db: AsyncIOMotorDatabase,
        query: str,
        page: PageParams,
    ) -> Dict[str, Any]:
        result = await self._paginate(db, {"title": substring_filter(query)}, page)
        if result["total"] == 0:
            raise NotFoundError(NO_RECIPES_FOUND)
        return result

    async def get_recipes_by_ingredient(
        self,
        db: AsyncIOMotorDatabase,
        query: str,
        page: PageParams,
    ) -> Dict[str, Any]:
        ingredients = await db[INGREDIENTS].find(
            {"name": substring_filter(query)}, {"_id": 1}
        ).to_list(length=None)
        if not ingredients:
            raise NotFoundError(NO_RECIPES_FOUND)

        ingredient_ids = [ingredient["_id"] for ingredient in ingredients]
        result = await self._paginate(db, {"ingredients.id": {"$in": ingredient_ids}}, page)
        if result["total"] == 0:
            raise NotFoundError(NO_RECIPES_FOUND)
        return result

    async def get_own_recipes(
        self,
        db: AsyncIOMotorDatabase,
        user: User,
        page: PageParams,
    ) -> Dict[str, Any]:
        result = await self._paginate(db, {"owner": user.id}, page)
        if result["total"] == 0:
            raise NotFoundError(NO_RECIPES_FOUND)
        return result

    async def add_recipe(
        self,
        db: AsyncIOMotorDatabase,
        user: User,
        recipe_data: RecipeCreate,
    ) -> Dict[str, Any]:
        """Store a recipe owned by the user"""
        entries = []
        for ingredient in recipe_data.ingredients:
            ingredient_id = parse_object_id(ingredient.id)
            if ingredient_id is None:
                raise BadRequestError(f"Invalid ingredient id: {ingredient.id}")
            entries.append({"id": ingredient_id, "measure": ingredient.measure})

        unique_ids = list({entry["id"] for entry in entries})
        known = await db[INGREDIENTS].count_documents({"_id": {"$in": unique_ids}})
        if known != len(unique_ids):
            raise BadRequestError("Unknown ingredient")

        document = new_recipe_document(
            recipe_data.model_dump(mode="json", exclude={"ingredients"}),
            owner=user.id,
            ingredients=entries,
        )
        result = await db[RECIPES].insert_one(document)
        document["_id"] = result.inserted_id

        logger.info("Recipe added", recipe_id=str(result.inserted_id), user_id=str(user.id))
        return serialize_document(document)

    async def delete_recipe(self, db: AsyncIOMotorDatabase, user: User, recipe_id: str) -> None:
        """Delete a recipe; only its owner may do so"""
        object_id = parse_object_id(recipe_id)
        if object_id is None:
            raise NotFoundError("Not found")

        result = await db[RECIPES].delete_one({"_id": object_id, "owner": user.id})
        if result.deleted_count == 0:
            raise NotFoundError("Not found")

        logger.info("Recipe deleted", recipe_id=recipe_id, user_id=str(user.id))

    async def get_favorite_recipes(
        self,
        db: AsyncIOMotorDatabase,
        user: User,
        page: PageParams,
    ) -> Dict[str, Any]:
        result = await self._paginate(db, {"usersWhoLiked": user.id}, page)
        if result["total"] == 0:
            raise NotFoundError(NO_RECIPES_FOUND)
        return result

    async def _require_recipe(self, db: AsyncIOMotorDatabase, recipe_id: Optional[ObjectId]) -> None:
        if recipe_id is None or not await db[RECIPES].find_one({"_id": recipe_id}, {"_id": 1}):
            raise NotFoundError("Recipe not found")

    async def add_to_favorite(self, db: AsyncIOMotorDatabase, user: User, recipe_id: str) -> None:
        """
        Record that the user likes a recipe

        The membership check and the push are one conditional update, so a
        user is never recorded twice.
        """
        object_id = parse_object_id(recipe_id)
        await self._require_recipe(db, object_id)

        result = await db[RECIPES].update_one(
            {"_id": object_id, "usersWhoLiked": {"$ne": user.id}},
            {"$push": {"usersWhoLiked": user.id}},
        )
        if result.matched_count == 0:
            raise ConflictError("Recipe already liked")

        logger.info("Recipe liked", recipe_id=recipe_id, user_id=str(user.id))

    async def remove_from_favorite(self, db: AsyncIOMotorDatabase, user: User, recipe_id: str) -> None:
        object_id = parse_object_id(recipe_id)
        await self._require_recipe(db, object_id)

        result = await db[RECIPES].update_one(
            {"_id": object_id, "usersWhoLiked": user.id},
            {"$pull": {"usersWhoLiked": user.id}},
        )
        if result.matched_count == 0:
            raise ConflictError("Recipe is not in your favorite list")

        logger.info("Recipe unliked", recipe_id=recipe_id, user_id=str(user.id))

    async def get_popular_recipes(self, db: AsyncIOMotorDatabase, page: PageParams) -> Dict[str, Any]:
        """Recipes ordered by how many users liked them"""
        pipeline = [
            {"$addFields": {"totalAdded": {"$size": {"$ifNull": ["$usersWhoLiked", []]}}}},
            {"$sort": {"totalAdded": -1, "_id": 1}},
            {"$skip": page.skip},
            {"$limit": page.limit},
            {"$project": POPULAR_PROJECTION},
        ]
        recipes, total = await asyncio.gather(
            db[RECIPES].aggregate(pipeline).to_list(length=None),
            db[RECIPES].count_documents({}),
        )
        if total == 0:
            raise NotFoundError(NO_RECIPES_FOUND)
        return {"total": total, "recipes": serialize_document(recipes)}

    async def get_ingredient_list(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        ingredients = await db[INGREDIENTS].find({}, sort=[("name", 1)]).to_list(length=None)
        return serialize_document(ingredients)


# Create singleton instance
recipe_service = RecipeService()
