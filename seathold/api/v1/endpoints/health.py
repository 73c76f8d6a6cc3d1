"""
Health check endpoints
"""

from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from seathold.api.deps import get_inventory_service
from seathold.core.database import get_session
from seathold.services.inventory_service import InventoryService
from seathold.config import settings

router = APIRouter()


@router.get("/live")
async def liveness() -> Any:
    """
    Kubernetes liveness probe
    """
    return {"status": "alive", "service": "seathold"}


@router.get("/ready")
async def readiness(
    db: AsyncSession = Depends(get_session),
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> Any:
    """
    Kubernetes readiness probe - checks database and Redis
    """
    checks = {
        "database": False,
        "redis": False,
    }

    try:
        result = await db.execute(text("SELECT 1"))
        checks["database"] = result.scalar() == 1
    except (SQLAlchemyError, OSError):
        checks["database"] = False

    checks["redis"] = await inventory_service.health_check()

    return {
        "status": "ready" if all(checks.values()) else "not ready",
        "checks": checks,
        "version": settings.APP_VERSION
    }
