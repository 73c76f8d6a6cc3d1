"""
Custom application exceptions

Every business outcome of the seat-hold core carries a stable machine-readable
``code``. The HTTP layer maps ``status_code`` onto the response.
"""

from typing import Optional, Dict, Any, List


class SeatholdException(Exception):
    """Base exception for Seathold application"""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(SeatholdException):
    """Caller identity missing"""

    def __init__(self, message: str = "Authentication required", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            details=details
        )


class SaleNotStartedError(SeatholdException):
    """Sale window has not opened yet"""

    def __init__(self, event_id: Any = None):
        super().__init__(
            message="Ticket sale has not started",
            code="SALE_NOT_STARTED",
            status_code=400,
            details={"event_id": event_id} if event_id is not None else None
        )


class SaleEndedError(SeatholdException):
    """Sale window has closed"""

    def __init__(self, event_id: Any = None):
        super().__init__(
            message="Ticket sale has ended",
            code="SALE_ENDED",
            status_code=400,
            details={"event_id": event_id} if event_id is not None else None
        )


class InvalidSeatsError(SeatholdException):
    """Some seats do not exist or belong to another session"""

    def __init__(self, seat_ids: Optional[List[int]] = None):
        super().__init__(
            message="Some seats do not exist or do not belong to this session",
            code="INVALID_SEATS",
            status_code=400,
            details={"seat_ids": seat_ids} if seat_ids else None
        )


class ExceedLimitError(SeatholdException):
    """Requested more seats than a single order allows"""

    def __init__(self, requested: int, limit: int):
        super().__init__(
            message=f"Cannot hold more than {limit} seats per order",
            code="EXCEED_LIMIT",
            status_code=400,
            details={"requested": requested, "limit": limit}
        )


class SeatLockedError(SeatholdException):
    """Seat is held by another user"""

    def __init__(self, seat_id: Optional[int] = None):
        super().__init__(
            message="Seat is locked by another user",
            code="SEAT_LOCKED",
            status_code=409,
            details={"seat_id": seat_id} if seat_id is not None else None
        )


class InvalidQuantityError(SeatholdException):
    """Quantity outside the accepted range"""

    def __init__(self, quantity: Any, minimum: int = 0):
        super().__init__(
            message=f"Quantity must be at least {minimum}",
            code="VALIDATION_ERROR",
            status_code=400,
            details={"quantity": quantity, "minimum": minimum}
        )


class InsufficientStockError(SeatholdException):
    """Not enough seats or inventory left"""

    def __init__(self, requested: int, available: Optional[int] = None):
        details = {"requested": requested}
        if available is not None:
            details["available"] = available
        super().__init__(
            message="Insufficient ticket stock",
            code="INSUFFICIENT_STOCK",
            status_code=409,
            details=details
        )


class LockNotFoundError(SeatholdException):
    """Lock record missing for this user"""

    def __init__(self, lock_id: str):
        super().__init__(
            message="Lock record not found",
            code="LOCK_NOT_FOUND",
            status_code=404,
            details={"lock_id": lock_id}
        )


class SessionNotFoundError(SeatholdException):
    """Session does not exist"""

    def __init__(self, session_id: Any):
        super().__init__(
            message=f"Session with id {session_id} not found",
            code="SESSION_NOT_FOUND",
            status_code=404,
            details={"session_id": session_id}
        )


class TicketTypeNotFoundError(SeatholdException):
    """Ticket type does not exist or belongs to another session"""

    def __init__(self, ticket_type_id: Any):
        super().__init__(
            message="Ticket type not found",
            code="TICKET_TYPE_NOT_FOUND",
            status_code=400,
            details={"ticket_type_id": ticket_type_id}
        )


class InternalError(SeatholdException):
    """Unexpected failure of the shared or persistent store"""

    def __init__(self, message: str = "An internal error occurred", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="INTERNAL_ERROR",
            status_code=500,
            details=details
        )
