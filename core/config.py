"""
Configuration - environment driven settings.

Values are read once at import time. Tests and embedding applications can
pass explicit values to the constructors instead of relying on these.
"""

import os
from decimal import Decimal

# Storage backend for carts: "memory" or "redis"
CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", "memory").strip().lower()

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Prefix for every client-storage key kept in Redis
CART_KEY_PREFIX = os.environ.get("CART_KEY_PREFIX", "storefront:")

# 0 disables expiry
CART_TTL_SECONDS = int(os.environ.get("CART_TTL_SECONDS", "0") or 0)

DEFAULT_CURRENCY = os.environ.get("DEFAULT_CURRENCY", "INR").strip().upper()

# Checkout
CHECKOUT_TAX_RATE = Decimal(os.environ.get("CHECKOUT_TAX_RATE", "0.10") or "0.10")
EXPRESS_SHIPPING_FEE = Decimal(os.environ.get("EXPRESS_SHIPPING_FEE", "100") or "100")
