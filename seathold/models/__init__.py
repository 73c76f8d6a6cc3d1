"""
Database models
"""

from seathold.models.event import Event, Session
from seathold.models.ticket_type import TicketType
from seathold.models.seat import Seat, SeatStatus

__all__ = [
    "Event",
    "Session",
    "TicketType",
    "Seat",
    "SeatStatus"
]
