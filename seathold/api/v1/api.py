"""
Main API Router
Aggregates all API endpoints for v1
"""

from fastapi import APIRouter
from seathold.api.v1.endpoints import tickets, sessions, inventory, health

api_router = APIRouter()

api_router.include_router(tickets.router, prefix="/tickets", tags=["tickets"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
