"""
Database Module - Upstash Redis client

Provides a singleton sync Upstash Redis client used as durable client
storage for carts and currency preferences, plus the key layout.
"""

from typing import Optional

from upstash_redis import Redis

from core.config import UPSTASH_REDIS_REST_URL, UPSTASH_REDIS_REST_TOKEN


# Singleton instance
_sync_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _sync_redis_client


class StorageKeys:
    """Client-storage keys. Names match what the storefront frontend writes."""

    CART = "cart"  # JSON array of line items
    PREFERRED_CURRENCY = "preferredCurrency"  # "INR" | "USD"

    @staticmethod
    def session_namespace(prefix: str, session_id: str) -> str:
        """Namespace for one browser session: {prefix}{session_id}:"""
        return f"{prefix}{session_id}:"
