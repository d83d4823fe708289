"""Recipe queries, favorites and user recipes against an in-memory MongoDB"""

import pytest
from bson import ObjectId

from core.database import RECIPES
from core.exceptions import BadRequestError, ConflictError, NotFoundError
from schemas.recipe_schemas import PageParams, RecipeCreate
from services.recipe_service import recipe_service


class TestPagination:
    async def test_title_search_pages_and_total(self, db, make_recipe):
        for i in range(10):
            await make_recipe(title=f"Chocolate Cake {i}")
        for i in range(3):
            await make_recipe(title=f"Beef Stew {i}")

        first = await recipe_service.get_recipes_by_title(db, "cake", PageParams(page=1, limit=8))
        second = await recipe_service.get_recipes_by_title(db, "cake", PageParams(page=2, limit=8))

        assert first["total"] == 10
        assert len(first["recipes"]) == 8
        assert second["total"] == 10
        assert len(second["recipes"]) == 2

        titles = {r["title"] for r in first["recipes"]} | {r["title"] for r in second["recipes"]}
        assert titles == {f"Chocolate Cake {i}" for i in range(10)}

    async def test_page_past_the_end_keeps_total(self, db, make_recipe):
        for i in range(3):
            await make_recipe(title=f"Pie {i}")

        result = await recipe_service.get_recipes_by_title(db, "pie", PageParams(page=5, limit=8))

        assert result == {"total": 3, "recipes": []}

    async def test_category_page_past_the_end(self, db, make_recipe):
        for i in range(3):
            await make_recipe(title=f"Tart {i}", category="Dessert")

        with pytest.raises(NotFoundError):
            await recipe_service.get_recipes_by_category(db, "Dessert", PageParams(page=2, limit=8))

    async def test_title_search_is_literal(self, db, make_recipe):
        await make_recipe(title="Fish (baked)")
        await make_recipe(title="Fish baked")

        result = await recipe_service.get_recipes_by_title(db, "(baked)", PageParams())

        assert result["total"] == 1
        assert result["recipes"][0]["title"] == "Fish (baked)"

    async def test_title_search_without_matches(self, db, make_recipe):
        await make_recipe(title="Pancakes")

        with pytest.raises(NotFoundError):
            await recipe_service.get_recipes_by_title(db, "sushi", PageParams())


class TestCategories:
    def test_category_list_is_sorted(self):
        categories = recipe_service.get_category_list()

        assert categories == sorted(categories)
        assert "Dessert" in categories
        assert len(categories) == 14

    async def test_recipes_by_category(self, db, make_recipe):
        for i in range(5):
            await make_recipe(title=f"Tart {i}", category="Dessert")
        await make_recipe(title="Omelette", category="Breakfast")

        result = await recipe_service.get_recipes_by_category(db, "Dessert", PageParams(page=1, limit=4))

        assert result["total"] == 5
        assert len(result["recipes"]) == 4
        assert all(r["category"] == "Dessert" for r in result["recipes"])

    async def test_empty_category_page(self, db):
        with pytest.raises(NotFoundError):
            await recipe_service.get_recipes_by_category(db, "Goat", PageParams())

    async def test_main_page_groups_first_recipes(self, db, make_recipe):
        for i in range(6):
            await make_recipe(title=f"Brownie {i}", category="Dessert")
        await make_recipe(title="Porridge", category="Breakfast")
        await make_recipe(title="Lamb Chops", category="Lamb")

        result = await recipe_service.get_main_page_recipes(db)

        assert isinstance(result, list)
        assert [[r["title"] for r in group] for group in result] == [
            [f"Brownie {i}" for i in range(4)],
            ["Porridge"],
        ]


class TestRecipeById:
    async def test_ingredients_are_resolved_in_order(self, db, make_recipe, make_ingredient):
        flour = await make_ingredient("Flour", desc="Wheat flour", img="flour.png")
        sugar = await make_ingredient("Sugar")
        recipe_id = await make_recipe(title="Sponge", ingredients=[sugar, flour])

        recipe = await recipe_service.get_recipe_by_id(db, str(recipe_id))

        assert recipe["_id"] == str(recipe_id)
        assert [i["name"] for i in recipe["ingredients"]] == ["Sugar", "Flour"]
        assert recipe["ingredients"][1] == {
            "id": str(flour),
            "measure": "1 cup",
            "name": "Flour",
            "desc": "Wheat flour",
            "img": "flour.png",
        }

    async def test_missing_recipe_is_none(self, db):
        assert await recipe_service.get_recipe_by_id(db, str(ObjectId())) is None

    async def test_malformed_id_is_none(self, db):
        assert await recipe_service.get_recipe_by_id(db, "not-an-id") is None


class TestIngredientSearch:
    async def test_recipes_with_matching_ingredient(self, db, make_recipe, make_ingredient):
        garlic = await make_ingredient("Garlic")
        wild_garlic = await make_ingredient("Wild garlic")
        onion = await make_ingredient("Onion")
        await make_recipe(title="Aioli", ingredients=[garlic])
        await make_recipe(title="Pesto", ingredients=[wild_garlic, onion])
        await make_recipe(title="Onion Soup", ingredients=[onion])

        result = await recipe_service.get_recipes_by_ingredient(db, "GARLIC", PageParams())

        assert result["total"] == 2
        assert {r["title"] for r in result["recipes"]} == {"Aioli", "Pesto"}

    async def test_unknown_ingredient(self, db, make_recipe):
        await make_recipe(title="Toast")

        with pytest.raises(NotFoundError):
            await recipe_service.get_recipes_by_ingredient(db, "saffron", PageParams())

    async def test_ingredient_not_used_by_any_recipe(self, db, make_ingredient):
        await make_ingredient("Saffron")

        with pytest.raises(NotFoundError):
            await recipe_service.get_recipes_by_ingredient(db, "saffron", PageParams())

    async def test_ingredient_list_sorted_by_name(self, db, make_ingredient):
        for name in ("Salt", "Apple", "Milk"):
            await make_ingredient(name)

        ingredients = await recipe_service.get_ingredient_list(db)

        assert [i["name"] for i in ingredients] == ["Apple", "Milk", "Salt"]


class TestFavorites:
    async def test_like_twice_conflicts(self, db, user, make_recipe):
        recipe_id = str(await make_recipe())

        await recipe_service.add_to_favorite(db, user, recipe_id)
        with pytest.raises(ConflictError):
            await recipe_service.add_to_favorite(db, user, recipe_id)

        recipe = await db[RECIPES].find_one({"_id": ObjectId(recipe_id)})
        assert recipe["usersWhoLiked"] == [user.id]

    async def test_unlike_without_like_conflicts(self, db, user, make_recipe):
        recipe_id = str(await make_recipe())

        with pytest.raises(ConflictError):
            await recipe_service.remove_from_favorite(db, user, recipe_id)

    async def test_unknown_recipe(self, db, user):
        with pytest.raises(NotFoundError):
            await recipe_service.add_to_favorite(db, user, str(ObjectId()))
        with pytest.raises(NotFoundError):
            await recipe_service.remove_from_favorite(db, user, "bogus")

    async def test_like_sequence_never_duplicates(self, db, user, make_user, make_recipe):
        other = await make_user(email="other@gmail.com")
        recipe_id = str(await make_recipe())

        await recipe_service.add_to_favorite(db, user, recipe_id)
        await recipe_service.add_to_favorite(db, other, recipe_id)
        await recipe_service.remove_from_favorite(db, user, recipe_id)
        await recipe_service.add_to_favorite(db, user, recipe_id)

        recipe = await db[RECIPES].find_one({"_id": ObjectId(recipe_id)})
        assert sorted(recipe["usersWhoLiked"]) == sorted([user.id, other.id])

    async def test_favorite_listing(self, db, user, make_recipe):
        liked = await make_recipe(title="Liked", liked_by=[user.id])
        await make_recipe(title="Ignored")

        result = await recipe_service.get_favorite_recipes(db, user, PageParams(limit=4))

        assert result["total"] == 1
        assert result["recipes"][0]["_id"] == str(liked)

    async def test_no_favorites(self, db, user, make_recipe):
        await make_recipe()

        with pytest.raises(NotFoundError):
            await recipe_service.get_favorite_recipes(db, user, PageParams(limit=4))


class TestPopular:
    async def test_ordered_by_likes(self, db, make_recipe):
        likers = [ObjectId() for _ in range(5)]
        await make_recipe(title="Two", liked_by=likers[:2])
        await make_recipe(title="None")
        await make_recipe(title="Five", liked_by=likers)
        await make_recipe(title="One", liked_by=likers[:1])

        result = await recipe_service.get_popular_recipes(db, PageParams(limit=4))

        assert result["total"] == 4
        assert [r["title"] for r in result["recipes"]] == ["Five", "Two", "One", "None"]
        counts = [r["totalAdded"] for r in result["recipes"]]
        assert counts == sorted(counts, reverse=True)
        assert set(result["recipes"][0]) == {"_id", "title", "preview", "thumb", "totalAdded"}

    async def test_ties_keep_insertion_order(self, db, make_recipe):
        first = await make_recipe(title="First")
        second = await make_recipe(title="Second")

        result = await recipe_service.get_popular_recipes(db, PageParams(limit=4))

        assert [r["_id"] for r in result["recipes"]] == [str(first), str(second)]

    async def test_no_recipes(self, db):
        with pytest.raises(NotFoundError):
            await recipe_service.get_popular_recipes(db, PageParams(limit=4))


class TestOwnRecipes:
    @pytest.fixture
    def recipe_payload(self):
        def _payload(ingredient_ids):
            return RecipeCreate(
                title="  Grandma's Soup ",
                category="Vegetarian",
                instructions="Simmer everything.",
                ingredients=[{"id": str(i), "measure": "2 pcs"} for i in ingredient_ids],
            )
        return _payload

    async def test_add_and_list(self, db, user, make_ingredient, recipe_payload):
        carrot = await make_ingredient("Carrot")

        created = await recipe_service.add_recipe(db, user, recipe_payload([carrot]))
        own = await recipe_service.get_own_recipes(db, user, PageParams(limit=4))

        assert created["title"] == "Grandma's Soup"
        assert created["owner"] == str(user.id)
        assert created["usersWhoLiked"] == []
        assert created["ingredients"] == [{"id": str(carrot), "measure": "2 pcs"}]
        assert own["total"] == 1
        assert own["recipes"][0]["_id"] == created["_id"]

    async def test_unknown_ingredient_rejected(self, db, user, recipe_payload):
        with pytest.raises(BadRequestError):
            await recipe_service.add_recipe(db, user, recipe_payload([ObjectId()]))

        assert await db[RECIPES].count_documents({}) == 0

    async def test_only_owner_deletes(self, db, user, make_user, make_recipe):
        other = await make_user(email="other@gmail.com")
        recipe_id = str(await make_recipe(owner=user.id))

        with pytest.raises(NotFoundError):
            await recipe_service.delete_recipe(db, other, recipe_id)

        await recipe_service.delete_recipe(db, user, recipe_id)
        assert await db[RECIPES].count_documents({}) == 0

        with pytest.raises(NotFoundError):
            await recipe_service.delete_recipe(db, user, recipe_id)

    async def test_no_own_recipes(self, db, user, make_recipe):
        await make_recipe(owner=ObjectId())

        with pytest.raises(NotFoundError):
            await recipe_service.get_own_recipes(db, user, PageParams(limit=4))
