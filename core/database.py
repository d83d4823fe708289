"""
SoYummy Database Configuration
Async MongoDB setup with Motor
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
import structlog
from typing import AsyncGenerator, Optional

from core.config import settings

logger = structlog.get_logger()

USERS = "users"
RECIPES = "recipes"
INGREDIENTS = "ingredients"

# Database client
client: Optional[AsyncIOMotorClient] = None
database: Optional[AsyncIOMotorDatabase] = None


async def init_db() -> None:
    """Initialize database connection and ensure indexes"""
    global client, database

    try:
        client = AsyncIOMotorClient(
            settings.MONGODB_URL,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            tz_aware=True,
        )
        database = client[settings.MONGODB_DB]

        # Test connection
        await database.command("ping")
        await ensure_indexes(database)

        logger.info("Database connection initialized successfully", database=settings.MONGODB_DB)

    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise


async def close_db() -> None:
    """Close database connections"""
    global client, database

    if client:
        client.close()
        client = None
        database = None
        logger.info("Database connections closed")


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes the queries rely on"""
    await db[USERS].create_index([("email", ASCENDING)], unique=True)
    await db[USERS].create_index([("verificationToken", ASCENDING)])
    await db[RECIPES].create_index([("category", ASCENDING)])
    await db[RECIPES].create_index([("owner", ASCENDING)])
    await db[RECIPES].create_index([("usersWhoLiked", ASCENDING)])
    await db[RECIPES].create_index([("ingredients.id", ASCENDING)])
    await db[INGREDIENTS].create_index([("name", ASCENDING)])


def get_database() -> AsyncIOMotorDatabase:
    if database is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return database


async def get_db() -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    Dependency for FastAPI to get the database handle
    """
    yield get_database()


class DatabaseHealthCheck:
    """Database health check utilities"""

    @staticmethod
    async def check_connection(db: AsyncIOMotorDatabase) -> bool:
        """Check if database connection is healthy"""
        try:
            result = await db.command("ping")
            return bool(result.get("ok"))
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False


# Export commonly used items
__all__ = [
    "USERS",
    "RECIPES",
    "INGREDIENTS",
    "init_db",
    "close_db",
    "ensure_indexes",
    "get_database",
    "get_db",
    "DatabaseHealthCheck",
]
