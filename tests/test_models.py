"""Document builders for users and recipes"""

import hashlib

from bson import ObjectId

from models.recipe_models import resolve_ingredients
from models.users import User, gravatar_url


def test_gravatar_url_uses_normalized_email_hash():
    url = gravatar_url("  Chef@Gmail.com ", size=120)

    assert url.startswith("https://")
    assert hashlib.md5(b"chef@gmail.com").hexdigest() in url
    assert "s=120" in url
    assert "d=identicon" in url


def test_new_user_document_defaults():
    document = User.new_document("Chef", "chef@gmail.com", "hash", "tok")

    assert document["avatarURL"] == gravatar_url("chef@gmail.com")
    assert document["verify"] is False
    assert document["subscription"] is False
    assert document["token"] is None


def test_resolve_ingredients_keeps_unknown_entries():
    known, unknown = ObjectId(), ObjectId()
    entries = [{"id": unknown, "measure": "1"}, {"id": known, "measure": "2"}]

    resolved = resolve_ingredients(entries, {known: {"name": "Salt", "desc": "", "img": "salt.png"}})

    assert resolved == [
        {"id": unknown, "measure": "1"},
        {"id": known, "measure": "2", "name": "Salt", "desc": "", "img": "salt.png"},
    ]
