"""
SoYummy Health Check Endpoints
System health monitoring
"""

from fastapi import APIRouter, HTTPException, status
import asyncio
import time

from core.config import settings
from core.database import DatabaseHealthCheck
from core.dependencies import Database

router = APIRouter()


@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "timestamp": time.time()
    }


@router.get("/ready")
async def readiness_check(db: Database):
    """
    Readiness probe endpoint
    Checks the database connection
    """
    try:
        db_healthy = await asyncio.wait_for(
            DatabaseHealthCheck.check_connection(db),
            timeout=5.0
        )
    except asyncio.TimeoutError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "error": "Health check timeout"}
        )

    if not db_healthy:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "database": "disconnected"}
        )

    return {
        "status": "ready",
        "database": "connected",
        "timestamp": time.time()
    }
