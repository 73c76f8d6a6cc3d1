"""
Ticket type model
"""

from sqlalchemy import Column, String, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from seathold.config import settings
from seathold.models.base import BaseModel


class TicketType(BaseModel):
    """
    Priced seat category of a session with its quantity counters
    """
    __tablename__ = "ticket_types"

    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    total_quantity = Column(Integer, nullable=False)
    # Advanced by order finalization, never by seat holds
    reserved_quantity = Column(Integer, default=0, nullable=False)
    max_per_order = Column(Integer, default=settings.MAX_TICKETS_PER_ORDER, nullable=False)

    session = relationship("Session", back_populates="ticket_types")
    seats = relationship("Seat", back_populates="ticket_type", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<TicketType(id={self.id}, session_id={self.session_id}, name={self.name})>"
