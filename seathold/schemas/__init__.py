"""
Pydantic schemas
"""

from seathold.schemas.response import SuccessResponse, ErrorResponse, ErrorDetail, MessageResponse
from seathold.schemas.seat import (
    TicketTypeInfo,
    SeatInfo,
    LockedSeat,
    LockResult,
    UserLock,
    LockSeatsRequest,
    AutoSelectRequest,
)
from seathold.schemas.ticket_type import TicketTypeAvailability, StockQuantity, StockLevel

__all__ = [
    "SuccessResponse",
    "ErrorResponse",
    "ErrorDetail",
    "MessageResponse",
    "TicketTypeInfo",
    "SeatInfo",
    "LockedSeat",
    "LockResult",
    "UserLock",
    "LockSeatsRequest",
    "AutoSelectRequest",
    "TicketTypeAvailability",
    "StockQuantity",
    "StockLevel",
]
