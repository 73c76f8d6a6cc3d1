"""
Atomic inventory counters per ticket type
"""

import logging

from redis.exceptions import RedisError

from seathold.core.exceptions import InternalError, InvalidQuantityError
from seathold.core.redis import RedisManager

logger = logging.getLogger(__name__)

# Returned by decrement_stock when the counter is too low
INSUFFICIENT = -1


def inventory_key(ticket_type_id: int) -> str:
    return f"inventory:{ticket_type_id}"


def check_quantity(quantity: int) -> None:
    """Counters only move by non-negative amounts and never go below zero"""
    if quantity < 0:
        raise InvalidQuantityError(quantity)


class InventoryService:
    """Integer stock counters kept in Redis"""

    def __init__(self, redis_manager: RedisManager):
        self.redis_manager = redis_manager

    async def get_stock(self, ticket_type_id: int) -> int:
        try:
            value = await self.redis_manager.get(inventory_key(ticket_type_id))
        except RedisError as e:
            logger.exception(f"Failed to read stock for ticket type {ticket_type_id}")
            raise InternalError("Failed to read stock") from e
        return int(value) if value is not None else 0

    async def set_stock(self, ticket_type_id: int, quantity: int) -> None:
        check_quantity(quantity)
        try:
            await self.redis_manager.set(inventory_key(ticket_type_id), str(quantity))
        except RedisError as e:
            logger.exception(f"Failed to set stock for ticket type {ticket_type_id}")
            raise InternalError("Failed to set stock") from e
        logger.info(f"Stock for ticket type {ticket_type_id} set to {quantity}")

    async def increment_stock(self, ticket_type_id: int, quantity: int) -> int:
        """Return inventory, e.g. after a cancellation"""
        check_quantity(quantity)
        try:
            return await self.redis_manager.incrby(inventory_key(ticket_type_id), quantity)
        except RedisError as e:
            logger.exception(f"Failed to increment stock for ticket type {ticket_type_id}")
            raise InternalError("Failed to increment stock") from e

    async def decrement_stock(self, ticket_type_id: int, quantity: int) -> int:
        """
        Check-and-decrement in one indivisible step

        Returns the new counter value, or -1 when fewer than ``quantity``
        units are left (the counter is then left untouched).
        """
        check_quantity(quantity)
        try:
            remaining = await self.redis_manager.decrement_if_sufficient(
                inventory_key(ticket_type_id), quantity
            )
        except RedisError as e:
            logger.exception(f"Failed to decrement stock for ticket type {ticket_type_id}")
            raise InternalError("Failed to decrement stock") from e

        if remaining == INSUFFICIENT:
            logger.warning(f"Insufficient stock for ticket type {ticket_type_id}: requested {quantity}")
        return remaining

    async def health_check(self) -> bool:
        try:
            return await self.redis_manager.ping()
        except RedisError:
            return False
