"""
Generic response schemas
"""

from pydantic import BaseModel, Field
from typing import Any, Optional, Dict, Generic, TypeVar
from datetime import datetime, timezone

T = TypeVar('T')


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SuccessResponse(BaseModel, Generic[T]):
    """Generic success response"""
    success: bool = True
    data: T
    message: str = "Operation successful"
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorDetail(BaseModel):
    """Error detail schema"""
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Generic error response"""
    success: bool = False
    error: ErrorDetail
    timestamp: datetime = Field(default_factory=_utcnow)


class MessageResponse(BaseModel):
    """Simple message response"""
    success: bool = True
    message: str
    timestamp: datetime = Field(default_factory=_utcnow)
