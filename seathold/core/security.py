"""
Caller identity

Authentication itself lives in front of this service; by the time a request
arrives here the gateway has put the verified user id in ``X-User-Id``.
"""

from typing import Optional

from fastapi import Header

from seathold.core.exceptions import AuthenticationError


async def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id")
) -> str:
    """
    Dependency returning the id of the calling user
    """
    if not x_user_id or not x_user_id.strip():
        raise AuthenticationError()
    return x_user_id.strip()
