"""
Seat hold endpoints
"""

from typing import List
from fastapi import APIRouter, Depends

from seathold.api.deps import get_seat_lock_service, get_seat_selector
from seathold.core.security import get_current_user_id
from seathold.schemas.response import SuccessResponse, MessageResponse
from seathold.schemas.seat import AutoSelectRequest, LockResult, LockSeatsRequest, UserLock
from seathold.services.seat_lock_service import SeatLockService
from seathold.services.seat_selector import SeatSelector

router = APIRouter()


@router.post("/lock", response_model=SuccessResponse[LockResult])
async def lock_seats(
    body: LockSeatsRequest,
    user_id: str = Depends(get_current_user_id),
    seat_lock_service: SeatLockService = Depends(get_seat_lock_service),
):
    """
    Hold the chosen seats (manual selection)
    """
    result = await seat_lock_service.acquire_locks(user_id, body.session_id, body.seat_ids)
    return SuccessResponse(data=result, message="Seats locked")


@router.post("/auto-select", response_model=SuccessResponse[LockResult])
async def auto_select(
    body: AutoSelectRequest,
    user_id: str = Depends(get_current_user_id),
    seat_selector: SeatSelector = Depends(get_seat_selector),
):
    """
    Let the system pick and hold a block of seats
    """
    result = await seat_selector.auto_select(
        user_id, body.session_id, body.ticket_type_id, body.quantity
    )
    return SuccessResponse(data=result, message="Seats selected")


@router.delete("/lock/{lock_id}", response_model=MessageResponse)
async def unlock_seats(
    lock_id: str,
    user_id: str = Depends(get_current_user_id),
    seat_lock_service: SeatLockService = Depends(get_seat_lock_service),
):
    await seat_lock_service.release_locks(user_id, lock_id)
    return MessageResponse(message="Seats released")


@router.get("/my-locks", response_model=SuccessResponse[List[UserLock]])
async def my_locks(
    user_id: str = Depends(get_current_user_id),
    seat_lock_service: SeatLockService = Depends(get_seat_lock_service),
):
    locks = await seat_lock_service.list_locks(user_id)
    return SuccessResponse(data=locks)
