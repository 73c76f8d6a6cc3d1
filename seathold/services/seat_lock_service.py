"""
Seat lock service

Time-bounded, owner-scoped holds on individual seats. Exclusivity comes from
one Redis key per seat created with SET NX EX; the persisted seat row mirrors
the hold for display and is written only after the Redis step succeeded.

Redis layout:
    seat:lock:{seat_id}     JSON {lockId, userId, sessionId}, TTL = hold duration
    user:locks:{owner_id}   hash lockId -> JSON {sessionId, seatIds, expiresAt},
                            TTL = hold duration + grace
"""

import logging
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, List, Optional, Sequence

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from seathold.config import settings
from seathold.core.exceptions import (
    InternalError,
    InvalidSeatsError,
    ExceedLimitError,
    LockNotFoundError,
    SaleEndedError,
    SaleNotStartedError,
    SeatLockedError,
    SessionNotFoundError,
)
from seathold.core.redis import RedisManager
from seathold.repositories.seat_repository import SeatRepository
from seathold.schemas.seat import LockedSeat, LockResult, SeatInfo, UserLock

logger = logging.getLogger(__name__)

STORE_ERRORS = (RedisError, SQLAlchemyError)


def seat_lock_key(seat_id: int) -> str:
    return f"seat:lock:{seat_id}"


def user_locks_key(owner_id: str) -> str:
    return f"user:locks:{owner_id}"


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps from the database as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class LockState(str, Enum):
    """Progress of a single acquisition"""
    VALIDATING = "validating"
    ACQUIRING = "acquiring"
    PERSISTING = "persisting"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


_TRANSITIONS = {
    LockState.VALIDATING: {LockState.ACQUIRING},
    LockState.ACQUIRING: {LockState.PERSISTING, LockState.ROLLED_BACK},
    LockState.PERSISTING: {LockState.COMMITTED, LockState.ROLLED_BACK},
    LockState.COMMITTED: set(),
    LockState.ROLLED_BACK: set(),
}


@dataclass
class LockAttempt:
    """
    One acquire_locks call

    ``acquired`` is the forward list of seats whose Redis key this attempt
    created; only those are undone on rollback. Seats the owner already held
    from an earlier call go to ``already_held`` and are never touched.
    """
    owner_id: str
    session_id: int
    lock_id: Optional[str] = None
    expires_at: Optional[datetime] = None
    state: LockState = LockState.VALIDATING
    acquired: List[int] = field(default_factory=list)
    already_held: List[int] = field(default_factory=list)

    def advance(self, state: LockState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal lock state transition {self.state.value} -> {state.value}")
        self.state = state


class SeatLockService:
    """Acquire, release and list seat holds"""

    def __init__(
        self,
        redis_manager: RedisManager,
        seat_repository: SeatRepository,
        lock_duration: Optional[int] = None,
        grace_period: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.redis_manager = redis_manager
        self.seat_repository = seat_repository
        self.lock_duration = settings.SEAT_LOCK_DURATION_SECONDS if lock_duration is None else lock_duration
        if self.lock_duration < 1:
            raise ValueError(f"Lock duration must be at least 1 second, got {self.lock_duration}")
        self.grace_period = settings.USER_LOCK_GRACE_SECONDS if grace_period is None else grace_period
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def now(self) -> datetime:
        return self._clock()

    async def acquire_locks(self, owner_id: str, session_id: int, seat_ids: Sequence[int]) -> LockResult:
        """
        Hold every seat in ``seat_ids`` for ``owner_id`` or none of them

        Seats the owner already holds are accepted as-is. Any seat held by
        someone else aborts the call with SEAT_LOCKED after the seats taken so
        far in this call are released again.
        """
        attempt = LockAttempt(owner_id=owner_id, session_id=session_id)
        try:
            seats = await self._validate(attempt, seat_ids)
        except STORE_ERRORS as e:
            logger.exception(f"Store failure while validating lock request of user {owner_id}")
            raise InternalError("Failed to validate seat lock request") from e

        attempt.lock_id = str(uuid.uuid4())
        attempt.expires_at = self.now() + timedelta(seconds=self.lock_duration)

        try:
            async with self._rollback_on_failure(attempt):
                attempt.advance(LockState.ACQUIRING)
                for seat in seats:
                    await self._acquire_seat(attempt, seat.id)

                attempt.advance(LockState.PERSISTING)
                await self.seat_repository.mark_locked(attempt.acquired, owner_id, attempt.expires_at)
                await self._write_user_index(attempt, seat_ids)
                attempt.advance(LockState.COMMITTED)
        except STORE_ERRORS as e:
            logger.exception(
                f"Store failure while locking seats {list(seat_ids)} for user {owner_id} "
                f"(state={attempt.state.value})"
            )
            raise InternalError("Failed to lock seats") from e

        logger.info(
            f"User {owner_id} locked seats {[s.id for s in seats]} in session {session_id} "
            f"(lock {attempt.lock_id}, new={len(attempt.acquired)}, held={len(attempt.already_held)})"
        )
        return LockResult(
            lock_id=attempt.lock_id,
            seats=[LockedSeat.model_validate(seat) for seat in seats],
            expires_at=attempt.expires_at,
        )

    async def _validate(self, attempt: LockAttempt, seat_ids: Sequence[int]):
        session = await self.seat_repository.get_session_with_event(attempt.session_id)
        if session is None:
            raise SessionNotFoundError(attempt.session_id)

        event = session.event
        now = self.now()
        if now < as_utc(event.sale_start_at):
            raise SaleNotStartedError(event.id)
        if event.sale_end_at is not None and now >= as_utc(event.sale_end_at):
            raise SaleEndedError(event.id)

        if not seat_ids:
            raise InvalidSeatsError()
        seats = await self.seat_repository.get_session_seats(attempt.session_id, seat_ids)
        if len(seats) != len(seat_ids):
            found = {seat.id for seat in seats}
            raise InvalidSeatsError([seat_id for seat_id in seat_ids if seat_id not in found])

        limit = min(seat.ticket_type.max_per_order for seat in seats)
        if len(seat_ids) > limit:
            raise ExceedLimitError(len(seat_ids), limit)
        return seats

    async def _acquire_seat(self, attempt: LockAttempt, seat_id: int) -> None:
        key = seat_lock_key(seat_id)
        payload = {
            "lockId": attempt.lock_id,
            "userId": attempt.owner_id,
            "sessionId": attempt.session_id,
        }

        if await self.redis_manager.set_if_absent(key, payload, self.lock_duration):
            attempt.acquired.append(seat_id)
            return

        existing = await self.redis_manager.get(key)
        if existing is None:
            # Expired between SET NX and GET
            if await self.redis_manager.set_if_absent(key, payload, self.lock_duration):
                attempt.acquired.append(seat_id)
                return
            existing = await self.redis_manager.get(key)

        if isinstance(existing, dict) and existing.get("userId") == attempt.owner_id:
            attempt.already_held.append(seat_id)
            return

        logger.warning(f"Seat {seat_id} is locked by another user; user {attempt.owner_id} rejected")
        raise SeatLockedError(seat_id)

    async def _write_user_index(self, attempt: LockAttempt, seat_ids: Sequence[int]) -> None:
        key = user_locks_key(attempt.owner_id)
        await self.redis_manager.hset_json(key, attempt.lock_id, {
            "sessionId": attempt.session_id,
            "seatIds": list(seat_ids),
            "expiresAt": attempt.expires_at.isoformat(),
        })
        await self.redis_manager.expire(key, self.lock_duration + self.grace_period)

    @asynccontextmanager
    async def _rollback_on_failure(self, attempt: LockAttempt):
        try:
            yield attempt
        except BaseException:
            # Cancellation included
            await self._rollback(attempt)
            raise

    async def _rollback(self, attempt: LockAttempt) -> None:
        """
        Undo the seats this attempt acquired

        Best effort: each key is deleted on its own, a failing delete is logged
        and the key is left to its TTL.
        """
        persisted = attempt.state == LockState.PERSISTING
        attempt.advance(LockState.ROLLED_BACK)

        for seat_id in attempt.acquired:
            try:
                await self.redis_manager.delete(seat_lock_key(seat_id))
            except RedisError:
                logger.exception(f"Rollback could not delete lock for seat {seat_id}; left to expire")

        if persisted and attempt.acquired:
            try:
                await self.seat_repository.mark_available(attempt.acquired, attempt.owner_id)
            except SQLAlchemyError:
                logger.exception(f"Rollback could not revert seat rows {attempt.acquired}")

        if attempt.acquired:
            logger.info(f"Rolled back seats {attempt.acquired} of user {attempt.owner_id}")

    async def release_locks(self, owner_id: str, lock_id: str) -> None:
        """
        Release a hold group by lock id

        Seat keys are deleted only when they still carry this owner and lock
        id, so a hold that expired and was taken by someone else survives.
        """
        index_key = user_locks_key(owner_id)
        try:
            entry = await self.redis_manager.hget_json(index_key, lock_id)
            if entry is None:
                raise LockNotFoundError(lock_id)

            seat_ids = entry["seatIds"]
            released = []
            for seat_id in seat_ids:
                key = seat_lock_key(seat_id)
                existing = await self.redis_manager.get(key)
                if (
                    isinstance(existing, dict)
                    and existing.get("userId") == owner_id
                    and existing.get("lockId") == lock_id
                ):
                    await self.redis_manager.delete(key)
                    released.append(seat_id)

            await self.seat_repository.mark_available(seat_ids, owner_id)
            await self.redis_manager.hdel(index_key, lock_id)
        except STORE_ERRORS as e:
            logger.exception(f"Store failure while releasing lock {lock_id} of user {owner_id}")
            raise InternalError("Failed to release seats") from e

        logger.info(f"User {owner_id} released lock {lock_id} (seats {released} of {seat_ids})")

    async def list_locks(self, owner_id: str) -> List[UserLock]:
        """Live hold groups of ``owner_id``; expired index entries are pruned"""
        index_key = user_locks_key(owner_id)
        result = []
        try:
            entries = await self.redis_manager.hgetall_json(index_key)
            now = self.now()
            for lock_id, entry in entries.items():
                expires_at = as_utc(datetime.fromisoformat(entry["expiresAt"]))
                if expires_at < now:
                    await self.redis_manager.hdel(index_key, lock_id)
                    logger.debug(f"Pruned expired lock {lock_id} of user {owner_id}")
                    continue

                seats = await self.seat_repository.get_seats(entry["seatIds"])
                result.append(UserLock(
                    lock_id=lock_id,
                    session_id=entry["sessionId"],
                    seats=[SeatInfo.model_validate(seat) for seat in seats],
                    expires_at=expires_at,
                ))
        except STORE_ERRORS as e:
            logger.exception(f"Store failure while listing locks of user {owner_id}")
            raise InternalError("Failed to list seat locks") from e

        return result
