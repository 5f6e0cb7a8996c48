"""Cart package: models, storage, store and provider."""
from .models import CartLineItem, CartVariant, VariantAttribute, CartState, CartTotals
from .storage import ClientStorage, MemoryStorage, RedisStorage, StorageError
from .service import CartStore, create_cart_store
from .context import CartContextError, cart_provider, use_cart
from .builder import CartItemError, ProductPayload, VariantPayload, cart_item_from_product

__all__ = [
    "CartLineItem",
    "CartVariant",
    "VariantAttribute",
    "CartState",
    "CartTotals",
    "ClientStorage",
    "MemoryStorage",
    "RedisStorage",
    "StorageError",
    "CartStore",
    "create_cart_store",
    "CartContextError",
    "cart_provider",
    "use_cart",
    "CartItemError",
    "ProductPayload",
    "VariantPayload",
    "cart_item_from_product",
]
