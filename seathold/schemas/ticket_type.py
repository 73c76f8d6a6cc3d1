"""
Ticket type availability and inventory schemas
"""

from decimal import Decimal
from pydantic import BaseModel, Field

from seathold.schemas.base import BaseSchema


class TicketTypeAvailability(BaseSchema):
    ticket_type_id: int
    name: str
    price: Decimal
    total: int
    reserved: int
    available: int
    max_per_order: int


class StockQuantity(BaseModel):
    quantity: int = Field(..., ge=0)


class StockLevel(BaseModel):
    ticket_type_id: int
    stock: int
