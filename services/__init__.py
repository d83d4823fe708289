"""
SoYummy Services Module
Accounts, recipes, email and avatar storage
"""

from .auth_service import AuthService, AuthenticationError, auth_service
from .recipe_service import RecipeService, recipe_service
from .email_service import EmailService, email_service
from .avatar_service import AvatarService, avatar_service

__all__ = [
    # Accounts
    "AuthService",
    "AuthenticationError",
    "auth_service",

    # Recipes
    "RecipeService",
    "recipe_service",

    # Delivery
    "EmailService",
    "email_service",
    "AvatarService",
    "avatar_service",
]
