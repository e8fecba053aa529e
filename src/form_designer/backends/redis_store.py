"""Redis-backed key-value store for form documents"""

import logging
from typing import Optional

import redis

logger = logging.getLogger(__name__)


class RedisStore:
    """
    Stores serialized documents as plain Redis strings.

    Documents do not expire: unlike conversation state, a designed form has
    no natural end of life.
    """

    def __init__(self, redis_client: redis.Redis, namespace: str = "form_designer"):
        """
        Args:
            redis_client: Redis client instance, created with decode_responses=True
            namespace: Prefix for every key written by this store
        """
        self.redis_client = redis_client
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        value = self.redis_client.get(self._key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self.redis_client.set(self._key(key), value)
        except redis.RedisError as e:
            logger.error(f"Redis error saving document {key}: {e}")
            raise


def create_redis_client(redis_url: str) -> redis.Redis:
    """Create a pooled Redis client for the given URL"""
    return redis.from_url(
        redis_url,
        decode_responses=True,
        max_connections=10,
        socket_connect_timeout=5,
        retry_on_timeout=True,
    )
