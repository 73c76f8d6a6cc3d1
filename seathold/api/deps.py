"""
Shared FastAPI dependencies wiring services to their stores
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from seathold.core.database import get_session
from seathold.core.redis import RedisManager
from seathold.repositories.seat_repository import SeatRepository
from seathold.services.availability_service import AvailabilityService
from seathold.services.inventory_service import InventoryService
from seathold.services.seat_lock_service import SeatLockService
from seathold.services.seat_selector import SeatSelector


def get_redis_manager(request: Request) -> RedisManager:
    """Redis handle created by the application lifespan"""
    return request.app.state.redis_manager


def get_seat_repository(db: AsyncSession = Depends(get_session)) -> SeatRepository:
    return SeatRepository(db)


def get_seat_lock_service(
    redis_manager: RedisManager = Depends(get_redis_manager),
    seat_repository: SeatRepository = Depends(get_seat_repository),
) -> SeatLockService:
    return SeatLockService(redis_manager, seat_repository)


def get_seat_selector(
    seat_lock_service: SeatLockService = Depends(get_seat_lock_service),
) -> SeatSelector:
    return SeatSelector(seat_lock_service)


def get_availability_service(
    seat_repository: SeatRepository = Depends(get_seat_repository),
) -> AvailabilityService:
    return AvailabilityService(seat_repository)


def get_inventory_service(
    redis_manager: RedisManager = Depends(get_redis_manager),
) -> InventoryService:
    return InventoryService(redis_manager)
