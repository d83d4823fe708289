"""
SoYummy API Endpoints
All API endpoint modules
"""

from . import health, auth, recipes, ingredients

__all__ = [
    "health",
    "auth",
    "recipes",
    "ingredients",
]
