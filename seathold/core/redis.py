"""
Redis configuration and connection management

The client is created by the application lifespan and handed to services;
nothing in this module keeps a process-wide connection.
"""

import redis.asyncio as redis
from typing import Optional, Any, Dict
import json
import logging

from seathold.config import settings

logger = logging.getLogger(__name__)


async def init_redis(url: Optional[str] = None) -> redis.Redis:
    """
    Create a Redis client and verify the connection
    """
    client = redis.from_url(
        url or settings.REDIS_URL,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        decode_responses=True
    )
    try:
        await client.ping()
        logger.info("Redis connection established")
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        await client.aclose()
        raise
    return client


async def close_redis(client: Optional[redis.Redis]):
    """
    Close Redis connection
    """
    if client is not None:
        await client.aclose()
        logger.info("Redis connection closed")


# Check-and-decrement executed server side so concurrent callers never both
# pass the sufficiency check
DECREMENT_STOCK_SCRIPT = """
local current = tonumber(redis.call('GET', KEYS[1]) or 0)
if current >= tonumber(ARGV[1]) then
    return redis.call('DECRBY', KEYS[1], ARGV[1])
else
    return -1
end
"""


class RedisManager:
    """
    Thin wrapper over a Redis client exposing the primitives the seat-hold
    core relies on
    """

    def __init__(self, client: redis.Redis):
        self.client = client
        self._decrement_script = client.register_script(DECREMENT_STOCK_SCRIPT)

    async def ping(self) -> bool:
        return bool(await self.client.ping())

    async def get(self, key: str) -> Optional[Any]:
        """Get value, decoding JSON when possible"""
        value = await self.client.get(key)
        if value is None:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Set value with optional TTL"""
        if not isinstance(value, str):
            value = json.dumps(value)
        return bool(await self.client.set(key, value, ex=ttl))

    async def set_if_absent(self, key: str, value: Any, ttl: int) -> bool:
        """
        Create the key only if it does not exist yet (SET NX EX)

        Returns True when this call created the key.
        """
        if not isinstance(value, str):
            value = json.dumps(value)
        return bool(await self.client.set(key, value, nx=True, ex=ttl))

    async def delete(self, key: str) -> bool:
        return await self.client.delete(key) > 0

    async def exists(self, key: str) -> bool:
        return await self.client.exists(key) > 0

    async def expire(self, key: str, ttl: int) -> bool:
        return bool(await self.client.expire(key, ttl))

    async def incrby(self, key: str, amount: int) -> int:
        return int(await self.client.incrby(key, amount))

    async def decrement_if_sufficient(self, key: str, amount: int) -> int:
        """Atomically decrement by ``amount``; -1 when the counter is too low"""
        result = await self._decrement_script(keys=[key], args=[amount])
        return int(result)

    # Hash helpers; values are JSON blobs
    async def hset_json(self, key: str, field: str, value: Any) -> None:
        await self.client.hset(key, field, json.dumps(value))

    async def hget_json(self, key: str, field: str) -> Optional[Any]:
        value = await self.client.hget(key, field)
        return json.loads(value) if value is not None else None

    async def hgetall_json(self, key: str) -> Dict[str, Any]:
        raw = await self.client.hgetall(key)
        return {field: json.loads(value) for field, value in raw.items()}

    async def hdel(self, key: str, field: str) -> bool:
        return await self.client.hdel(key, field) > 0
