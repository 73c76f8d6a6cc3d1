"""
Seat lock schemas for request/response models
"""

from typing import List
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from seathold.schemas.base import BaseSchema


class TicketTypeInfo(BaseSchema):
    id: int
    name: str
    price: Decimal


class SeatInfo(BaseSchema):
    """Seat display data"""
    id: int
    row_name: str
    seat_number: str


class LockedSeat(SeatInfo):
    ticket_type: TicketTypeInfo


class LockResult(BaseSchema):
    """Receipt for a successful seat hold"""
    lock_id: str
    seats: List[LockedSeat]
    expires_at: datetime


class UserLock(BaseSchema):
    """A live hold group of the current user"""
    lock_id: str
    session_id: int
    seats: List[SeatInfo]
    expires_at: datetime


class LockSeatsRequest(BaseModel):
    session_id: int
    seat_ids: List[int] = Field(..., min_length=1)


class AutoSelectRequest(BaseModel):
    session_id: int
    ticket_type_id: int
    quantity: int = Field(..., ge=1, le=10)
