"""
Session availability endpoints
"""

from typing import List
from fastapi import APIRouter, Depends

from seathold.api.deps import get_availability_service
from seathold.schemas.response import SuccessResponse
from seathold.schemas.ticket_type import TicketTypeAvailability
from seathold.services.availability_service import AvailabilityService

router = APIRouter()


@router.get("/{session_id}/availability", response_model=SuccessResponse[List[TicketTypeAvailability]])
async def get_availability(
    session_id: int,
    availability_service: AvailabilityService = Depends(get_availability_service),
):
    """
    Remaining quantity per ticket type
    """
    availability = await availability_service.get_availability(session_id)
    return SuccessResponse(data=availability)
