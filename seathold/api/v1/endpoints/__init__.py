"""
API endpoints module
"""

from . import tickets, sessions, inventory, health

__all__ = [
    "tickets",
    "sessions",
    "inventory",
    "health"
]
