"""
Ticket type availability
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from seathold.core.exceptions import InternalError, SessionNotFoundError
from seathold.repositories.seat_repository import SeatRepository
from seathold.schemas.ticket_type import TicketTypeAvailability

logger = logging.getLogger(__name__)


class AvailabilityService:
    """
    Counts per ticket type from the persisted counters

    Active seat holds are not consulted: a held seat still counts as
    available until order finalization advances reserved_quantity.
    """

    def __init__(self, seat_repository: SeatRepository):
        self.seat_repository = seat_repository

    async def get_availability(self, session_id: int) -> List[TicketTypeAvailability]:
        try:
            session = await self.seat_repository.get_session_with_ticket_types(session_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load ticket types of session {session_id}")
            raise InternalError("Failed to load availability") from e

        if session is None:
            raise SessionNotFoundError(session_id)

        return [
            TicketTypeAvailability(
                ticket_type_id=ticket_type.id,
                name=ticket_type.name,
                price=ticket_type.price,
                total=ticket_type.total_quantity,
                reserved=ticket_type.reserved_quantity,
                available=ticket_type.total_quantity - ticket_type.reserved_quantity,
                max_per_order=ticket_type.max_per_order,
            )
            for ticket_type in session.ticket_types
        ]
