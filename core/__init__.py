"""
Storefront Core Module

This package contains the storefront's client-side state components:
- cart: session cart store, storage backends and provider scope
- checkout: order summary and order placement
- services: money, currency and notification helpers
- db: Upstash Redis client

Note: Imports are lazy so `import core` does not pull in Redis or pydantic.
"""

__all__ = [
    "get_redis_sync",
    "CartStore",
    "cart_provider",
    "use_cart",
]


def __getattr__(name):
    """Lazy attribute access for clean module loading."""
    if name == "get_redis_sync":
        from core.db import get_redis_sync
        return get_redis_sync
    elif name == "CartStore":
        from core.cart import CartStore
        return CartStore
    elif name == "cart_provider":
        from core.cart import cart_provider
        return cart_provider
    elif name == "use_cart":
        from core.cart import use_cart
        return use_cart
    raise AttributeError(f"module 'core' has no attribute '{name}'")
