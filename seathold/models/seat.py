"""
Seat model
"""

from sqlalchemy import Column, Integer, String, ForeignKey, Enum, DateTime
from sqlalchemy.orm import relationship
import enum

from seathold.models.base import BaseModel


class SeatStatus(str, enum.Enum):
    AVAILABLE = "available"
    LOCKED = "locked"
    SOLD = "sold"


class Seat(BaseModel):
    """
    Physical seat; status and lock columns are written by the seat lock service only
    """
    __tablename__ = "seats"

    ticket_type_id = Column(Integer, ForeignKey("ticket_types.id", ondelete="CASCADE"), nullable=False, index=True)
    row_name = Column(String(10), nullable=False)
    seat_number = Column(String(10), nullable=False)
    status = Column(
        Enum(SeatStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        default=SeatStatus.AVAILABLE,
        nullable=False,
        index=True
    )
    locked_by = Column(String(64), nullable=True)
    locked_until = Column(DateTime(timezone=True), nullable=True)

    ticket_type = relationship("TicketType", back_populates="seats")

    def __repr__(self):
        return f"<Seat(id={self.id}, row={self.row_name}, seat={self.seat_number}, status={self.status})>"
