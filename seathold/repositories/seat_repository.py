"""
Persistent store access for sessions, ticket types and seats
"""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from seathold.models.event import Session
from seathold.models.seat import Seat, SeatStatus
from seathold.models.ticket_type import TicketType


class SeatRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_session_with_event(self, session_id: int) -> Optional[Session]:
        stmt = (
            select(Session)
            .options(selectinload(Session.event))
            .where(Session.id == session_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_session_with_ticket_types(self, session_id: int) -> Optional[Session]:
        stmt = (
            select(Session)
            .options(selectinload(Session.ticket_types))
            .where(Session.id == session_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_session_seats(self, session_id: int, seat_ids: Sequence[int]) -> List[Seat]:
        """
        Seats from ``seat_ids`` that belong to the session, with their ticket type
        """
        stmt = (
            select(Seat)
            .join(Seat.ticket_type)
            .options(selectinload(Seat.ticket_type))
            .where(Seat.id.in_(seat_ids), TicketType.session_id == session_id)
            .order_by(Seat.id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_ticket_type(self, ticket_type_id: int) -> Optional[TicketType]:
        stmt = (
            select(TicketType)
            .options(selectinload(TicketType.session).selectinload(Session.event))
            .where(TicketType.id == ticket_type_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_available_seats(self, ticket_type_id: int) -> List[Seat]:
        stmt = (
            select(Seat)
            .where(Seat.ticket_type_id == ticket_type_id, Seat.status == SeatStatus.AVAILABLE)
            .order_by(Seat.row_name, Seat.seat_number)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_seats(self, seat_ids: Sequence[int]) -> List[Seat]:
        stmt = select(Seat).where(Seat.id.in_(seat_ids)).order_by(Seat.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def mark_locked(self, seat_ids: Sequence[int], owner_id: str, locked_until: datetime) -> int:
        if not seat_ids:
            return 0
        stmt = (
            update(Seat)
            .where(Seat.id.in_(seat_ids))
            .values(status=SeatStatus.LOCKED, locked_by=owner_id, locked_until=locked_until)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount

    async def mark_available(self, seat_ids: Sequence[int], owner_id: str) -> int:
        """
        Revert seats to available, only those still recorded as locked by ``owner_id``
        """
        if not seat_ids:
            return 0
        stmt = (
            update(Seat)
            .where(Seat.id.in_(seat_ids), Seat.locked_by == owner_id)
            .values(status=SeatStatus.AVAILABLE, locked_by=None, locked_until=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount
