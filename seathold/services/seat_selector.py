"""
Automatic seat selection
"""

import logging
from typing import Dict, List, Optional, Sequence, TypeVar

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from seathold.core.exceptions import (
    ExceedLimitError,
    InsufficientStockError,
    InternalError,
    InvalidQuantityError,
    TicketTypeNotFoundError,
)
from seathold.schemas.seat import LockResult
from seathold.services.seat_lock_service import SeatLockService, seat_lock_key

logger = logging.getLogger(__name__)

SeatT = TypeVar("SeatT")


def seat_number_value(seat) -> Optional[int]:
    """
    Numeric seat number, or None when the label is not a plain integer

    Labels such as "12B" are deliberately kept out of runs rather than read as
    12, so a lettered seat is never mistaken for the neighbour of seat 11 or 13.
    """
    try:
        return int(seat.seat_number)
    except (TypeError, ValueError):
        return None


def find_consecutive_seats(seats: Sequence[SeatT], quantity: int) -> List[SeatT]:
    """
    Pick ``quantity`` seats, preferring a run of consecutive numbers in one row

    Rows are visited in the order they first appear in ``seats``; within a row
    seats are sorted by their numeric seat number. The first window whose
    numbers increase by exactly one wins. Without such a window the first
    ``quantity`` seats are returned as supplied.
    """
    rows: Dict[str, List[SeatT]] = {}
    for seat in seats:
        rows.setdefault(seat.row_name, []).append(seat)

    for row_seats in rows.values():
        numbered = sorted(
            (seat for seat in row_seats if seat_number_value(seat) is not None),
            key=seat_number_value
        )
        for start in range(len(numbered) - quantity + 1):
            window = numbered[start:start + quantity]
            numbers = [seat_number_value(s) for s in window]
            if all(nxt == cur + 1 for cur, nxt in zip(numbers, numbers[1:])):
                return window

    return list(seats[:quantity])


class SeatSelector:
    """Choose seats of a ticket type and hold them"""

    def __init__(self, seat_lock_service: SeatLockService):
        self.seat_lock_service = seat_lock_service
        self.redis_manager = seat_lock_service.redis_manager
        self.seat_repository = seat_lock_service.seat_repository

    async def auto_select(
        self,
        owner_id: str,
        session_id: int,
        ticket_type_id: int,
        quantity: int
    ) -> LockResult:
        if quantity < 1:
            raise InvalidQuantityError(quantity, minimum=1)

        try:
            ticket_type = await self.seat_repository.get_ticket_type(ticket_type_id)
            if ticket_type is None or ticket_type.session_id != session_id:
                raise TicketTypeNotFoundError(ticket_type_id)

            if quantity > ticket_type.max_per_order:
                raise ExceedLimitError(quantity, ticket_type.max_per_order)

            candidates = await self.free_seats(ticket_type_id)
        except (RedisError, SQLAlchemyError) as e:
            logger.exception(f"Store failure while selecting seats of ticket type {ticket_type_id}")
            raise InternalError("Failed to select seats") from e

        if quantity > len(candidates):
            raise InsufficientStockError(quantity, len(candidates))

        chosen = find_consecutive_seats(candidates, quantity)
        logger.debug(
            f"Auto-selected seats {[(s.row_name, s.seat_number) for s in chosen]} "
            f"for user {owner_id}"
        )
        return await self.seat_lock_service.acquire_locks(
            owner_id, session_id, [seat.id for seat in chosen]
        )

    async def free_seats(self, ticket_type_id: int):
        """
        Seats recorded as available that carry no live hold

        The persisted status can lag an in-flight hold, so Redis is consulted too.
        """
        seats = await self.seat_repository.list_available_seats(ticket_type_id)
        free = []
        for seat in seats:
            if not await self.redis_manager.exists(seat_lock_key(seat.id)):
                free.append(seat)
        return free
