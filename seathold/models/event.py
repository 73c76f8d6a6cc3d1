"""
Event and session models
"""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from seathold.models.base import BaseModel


class Event(BaseModel):
    """
    A ticketed event and its sale window
    """
    __tablename__ = "events"

    title = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    venue = Column(String(255))
    sale_start_at = Column(DateTime(timezone=True), nullable=False)
    # NULL means the sale never closes
    sale_end_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), default="draft", nullable=False)

    sessions = relationship("Session", back_populates="event", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Event(id={self.id}, title={self.title}, status={self.status})>"


class Session(BaseModel):
    """
    One performance of an event
    """
    __tablename__ = "sessions"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    session_date = Column(Date, nullable=False)
    session_time = Column(String(10), nullable=False)
    status = Column(String(20), default="active", nullable=False)

    event = relationship("Event", back_populates="sessions")
    ticket_types = relationship("TicketType", back_populates="session", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Session(id={self.id}, event_id={self.event_id}, date={self.session_date})>"
