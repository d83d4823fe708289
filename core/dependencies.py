"""
SoYummy Core Dependencies
FastAPI dependencies for authentication, pagination and database access
"""

from fastapi import Depends, Query
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional, Annotated
import structlog

from core.config import settings
from core.database import get_db
from core.exceptions import BadRequestError
from models.users import User
from schemas.recipe_schemas import PageParams
from services.auth_service import auth_service, AuthenticationError

logger = structlog.get_logger()

# Security scheme
security = HTTPBearer(auto_error=False)

# Largest skip MongoDB accepts (signed 64-bit)
MAX_SKIP = 2**63 - 1


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: AsyncIOMotorDatabase = Depends(get_db)
) -> User:
    """
    Get current authenticated user from the bearer token

    Raises:
        AuthenticationError: If the token is missing, invalid or logged out
    """
    if not credentials:
        raise AuthenticationError()

    try:
        user = await auth_service.get_current_user(credentials.credentials, db)
    except AuthenticationError:
        logger.warning("Authentication failed")
        raise

    structlog.contextvars.bind_contextvars(user_id=str(user.id))
    return user


def pagination(default_limit: int = settings.DEFAULT_PAGE_LIMIT):
    """
    Dependency factory for page/limit query parameters

    Args:
        default_limit: Page size used when the client sends no limit
    """
    async def get_pagination_params(
        page: int = Query(default=1, description="Page number (1-based)"),
        limit: int = Query(default=default_limit, description="Items per page"),
    ) -> PageParams:
        if page < 1:
            raise BadRequestError("Page must be greater than 0")

        if limit < 1:
            raise BadRequestError("Limit must be greater than 0")

        if limit > settings.MAX_PAGE_LIMIT:
            raise BadRequestError(f"Limit cannot exceed {settings.MAX_PAGE_LIMIT}")

        if (page - 1) * limit > MAX_SKIP:
            raise BadRequestError("Page is out of range")

        return PageParams(page=page, limit=limit)

    return get_pagination_params


# Type aliases for common dependencies
Database = Annotated[AsyncIOMotorDatabase, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
SmallPage = Annotated[PageParams, Depends(pagination(4))]
LargePage = Annotated[PageParams, Depends(pagination(8))]
