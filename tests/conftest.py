"""Shared fixtures: in-memory MongoDB, HTTP client and seeded documents"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from unittest.mock import AsyncMock
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from core.database import INGREDIENTS, RECIPES, USERS, ensure_indexes, get_db
from main import app
from models.users import User
from services.auth_service import auth_service
from services.email_service import email_service

PASSWORD = "secret123"


@pytest.fixture
async def db():
    """Fresh in-memory database per test"""
    database = AsyncMongoMockClient()[f"soyummy_{ObjectId()}"]
    await ensure_indexes(database)
    return database


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """SMTP is never contacted; the mock records what would be sent"""
    send = AsyncMock(return_value=True)
    monkeypatch.setattr(email_service, "send_email", send)
    return send


@pytest.fixture
async def client(db):
    app.dependency_overrides[get_db] = lambda: db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    async def _make(
        email: str = "chef@gmail.com",
        name: str = "Chef",
        verified: bool = True,
        verification_token: str = "verify-token",
    ) -> User:
        document = User.new_document(
            name=name,
            email=email,
            password_hash=auth_service.get_password_hash(PASSWORD),
            verification_token=verification_token,
        )
        if verified:
            document.update(verify=True, verificationToken=None)
        result = await db[USERS].insert_one(document)
        document["_id"] = result.inserted_id
        return User.from_mongo(document)

    return _make


@pytest.fixture
async def user(make_user):
    return await make_user()


@pytest.fixture
async def auth_headers(client, user):
    response = await client.post(
        "/api/users/login", json={"email": user.email, "password": PASSWORD}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def make_ingredient(db):
    async def _make(name: str, desc: str = "", img: str = "") -> ObjectId:
        result = await db[INGREDIENTS].insert_one({"name": name, "desc": desc, "img": img})
        return result.inserted_id

    return _make


@pytest.fixture
def make_recipe(db):
    async def _make(
        title: str = "Recipe",
        category: str = "Dessert",
        ingredients=(),
        liked_by=(),
        owner=None,
    ) -> ObjectId:
        result = await db[RECIPES].insert_one({
            "title": title,
            "category": category,
            "instructions": "Mix and cook.",
            "description": "",
            "thumb": f"https://img.example/{title}.jpg",
            "preview": f"https://img.example/{title}-preview.jpg",
            "ingredients": [{"id": ingredient_id, "measure": "1 cup"} for ingredient_id in ingredients],
            "owner": owner,
            "usersWhoLiked": list(liked_by),
        })
        return result.inserted_id

    return _make
