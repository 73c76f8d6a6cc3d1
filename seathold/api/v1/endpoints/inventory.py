"""
Inventory counter endpoints
"""

from fastapi import APIRouter, Depends

from seathold.api.deps import get_inventory_service
from seathold.core.exceptions import InsufficientStockError
from seathold.schemas.response import SuccessResponse
from seathold.schemas.ticket_type import StockLevel, StockQuantity
from seathold.services.inventory_service import INSUFFICIENT, InventoryService

router = APIRouter()


@router.get("/{ticket_type_id}", response_model=SuccessResponse[StockLevel])
async def get_stock(
    ticket_type_id: int,
    inventory_service: InventoryService = Depends(get_inventory_service),
):
    stock = await inventory_service.get_stock(ticket_type_id)
    return SuccessResponse(data=StockLevel(ticket_type_id=ticket_type_id, stock=stock))


@router.put("/{ticket_type_id}", response_model=SuccessResponse[StockLevel])
async def set_stock(
    ticket_type_id: int,
    body: StockQuantity,
    inventory_service: InventoryService = Depends(get_inventory_service),
):
    await inventory_service.set_stock(ticket_type_id, body.quantity)
    return SuccessResponse(data=StockLevel(ticket_type_id=ticket_type_id, stock=body.quantity))


@router.post("/{ticket_type_id}/increment", response_model=SuccessResponse[StockLevel])
async def increment_stock(
    ticket_type_id: int,
    body: StockQuantity,
    inventory_service: InventoryService = Depends(get_inventory_service),
):
    stock = await inventory_service.increment_stock(ticket_type_id, body.quantity)
    return SuccessResponse(data=StockLevel(ticket_type_id=ticket_type_id, stock=stock))


@router.post("/{ticket_type_id}/decrement", response_model=SuccessResponse[StockLevel])
async def decrement_stock(
    ticket_type_id: int,
    body: StockQuantity,
    inventory_service: InventoryService = Depends(get_inventory_service),
):
    stock = await inventory_service.decrement_stock(ticket_type_id, body.quantity)
    if stock == INSUFFICIENT:
        raise InsufficientStockError(body.quantity)
    return SuccessResponse(data=StockLevel(ticket_type_id=ticket_type_id, stock=stock))
