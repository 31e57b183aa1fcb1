"""Redis key/value substrate for durable layout and interaction storage."""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from adaptive_ux.core.errors import StorageFailure
from adaptive_ux.infrastructure.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class RedisKeyValueStore(KeyValueStore):
    """Redis client wrapper for async operations.

    Connects lazily on first use. Redis errors surface as ``StorageFailure``.
    """

    def __init__(self, url: str, client: aioredis.Redis | None = None) -> None:
        """Initialize Redis store.

        Args:
            url: Redis connection URL
            client: Pre-built client (skips ``from_url``)
        """
        self._url = url
        self._client: aioredis.Redis | None = client

    async def connect(self) -> None:
        """Connect to Redis."""
        if self._client is not None:
            return
        try:
            self._client = aioredis.from_url(
                self._url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self._client.ping()
            logger.info("Redis connected successfully")
        except (RedisError, OSError) as e:
            self._client = None
            raise StorageFailure(f"Redis connection failed: {e}") from e

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _require_client(self) -> aioredis.Redis:
        if self._client is None:
            await self.connect()
        return self._client

    async def get(self, key: str) -> str | None:
        """Get value from Redis.

        Args:
            key: Redis key

        Returns:
            Value or None if not found
        """
        client = await self._require_client()
        try:
            return await client.get(key)
        except RedisError as e:
            raise StorageFailure(f"Redis GET {key} failed: {e}") from e

    async def set(self, key: str, value: str) -> bool:
        """Set value in Redis.

        Args:
            key: Redis key
            value: Value to set

        Returns:
            True if successful
        """
        client = await self._require_client()
        try:
            return bool(await client.set(key, value))
        except RedisError as e:
            raise StorageFailure(f"Redis SET {key} failed: {e}") from e

    async def delete(self, key: str) -> int:
        """Delete key from Redis.

        Args:
            key: Redis key

        Returns:
            Number of keys deleted
        """
        client = await self._require_client()
        try:
            return await client.delete(key)
        except RedisError as e:
            raise StorageFailure(f"Redis DEL {key} failed: {e}") from e
