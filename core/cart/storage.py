"""Client storage backends for the cart.

A storage is a flat string key/value store with whole-value writes, the
same contract as browser localStorage.
"""
from typing import Dict, Optional

from core.config import CART_KEY_PREFIX, CART_TTL_SECONDS
from core.db import get_redis_sync, StorageKeys
from core.logging import get_logger

logger = get_logger(__name__)

__all__ = ["StorageError", "ClientStorage", "MemoryStorage", "RedisStorage", "StorageKeys"]


class StorageError(Exception):
    """Storage backend could not complete a read or write."""


class ClientStorage:
    """Key/value storage interface."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(ClientStorage):
    """Dict-backed storage for tests and single-process use."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class RedisStorage(ClientStorage):
    """
    Upstash Redis storage.

    Each browser session gets its own namespace so the fixed keys
    ("cart", "preferredCurrency") do not collide between sessions.
    """

    def __init__(self, namespace: str = CART_KEY_PREFIX, ttl: int = CART_TTL_SECONDS, redis_client=None):
        self.namespace = namespace
        self.ttl = ttl
        self._redis = redis_client  # Lazy initialization

    @classmethod
    def for_session(cls, session_id: str, **kwargs) -> "RedisStorage":
        return cls(namespace=StorageKeys.session_namespace(CART_KEY_PREFIX, session_id), **kwargs)

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            try:
                self._redis = get_redis_sync()
            except ValueError as e:
                raise StorageError(f"Redis not available: {e}") from e
        return self._redis

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(self._key(key))
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to read {key} from Redis: {e}")
            raise StorageError(f"Cart storage unavailable: {e}") from e
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            if self.ttl:
                self.redis.set(self._key(key), value, ex=self.ttl)
            else:
                self.redis.set(self._key(key), value)
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to write {key} to Redis: {e}")
            raise StorageError(f"Cart storage unavailable: {e}") from e

    def remove(self, key: str) -> None:
        try:
            self.redis.delete(self._key(key))
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to delete {key} from Redis: {e}")
            raise StorageError(f"Cart storage unavailable: {e}") from e


def create_storage(backend: str, session_id: Optional[str] = None) -> ClientStorage:
    """Build the configured storage backend ("memory" or "redis")."""
    if backend == "memory":
        return MemoryStorage()
    if backend == "redis":
        if session_id:
            return RedisStorage.for_session(session_id)
        return RedisStorage()
    raise ValueError(f"Unknown cart storage backend: {backend}")
