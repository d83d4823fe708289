"""
SoYummy Recipe Models
Document shapes for recipes and ingredients stored in MongoDB
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from bson import ObjectId


class RecipeCategory(str, Enum):
    """Recipe categories of the catalogue"""
    BEEF = "Beef"
    BREAKFAST = "Breakfast"
    CHICKEN = "Chicken"
    DESSERT = "Dessert"
    GOAT = "Goat"
    LAMB = "Lamb"
    MISCELLANEOUS = "Miscellaneous"
    PASTA = "Pasta"
    PORK = "Pork"
    SEAFOOD = "Seafood"
    SIDE = "Side"
    STARTER = "Starter"
    VEGAN = "Vegan"
    VEGETARIAN = "Vegetarian"


# Categories shown on the landing page, in display order
MAIN_PAGE_CATEGORIES = [
    RecipeCategory.BREAKFAST.value,
    RecipeCategory.MISCELLANEOUS.value,
    RecipeCategory.CHICKEN.value,
    RecipeCategory.DESSERT.value,
]
MAIN_PAGE_RECIPES_PER_CATEGORY = 4

# Fields returned by the popular listing
POPULAR_PROJECTION = {"title": 1, "preview": 1, "thumb": 1, "totalAdded": 1}


def new_recipe_document(
    data: Dict[str, Any],
    owner: ObjectId,
    ingredients: List[Dict[str, Any]],
) -> Dict[str, Any]:
    """Build the document inserted when a user adds a recipe"""
    return {
        "title": data["title"],
        "category": data["category"],
        "area": data.get("area"),
        "instructions": data.get("instructions", ""),
        "description": data.get("description", ""),
        "thumb": data.get("thumb"),
        "preview": data.get("preview"),
        "time": data.get("time"),
        "youtube": data.get("youtube"),
        "tags": data.get("tags") or [],
        "ingredients": ingredients,
        "owner": owner,
        "usersWhoLiked": [],
        "createdAt": datetime.utcnow(),
    }


def resolve_ingredients(
    entries: List[Dict[str, Any]],
    ingredients_by_id: Dict[ObjectId, Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """Attach name, desc and img of each referenced ingredient, keeping order"""
    resolved = []
    for entry in entries:
        ingredient: Optional[Dict[str, Any]] = ingredients_by_id.get(entry.get("id"))
        item = {"id": entry.get("id"), "measure": entry.get("measure", "")}
        if ingredient:
            item.update(
                name=ingredient.get("name"),
                desc=ingredient.get("desc"),
                img=ingredient.get("img"),
            )
        resolved.append(item)
    return resolved
