"""Scoped access to the session's CartStore.

Request/session handlers open a cart_provider(); anything running inside
that scope reaches the store through use_cart(). Calling use_cart() with no
provider open is a wiring bug and fails immediately.
"""
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from core.errors import ERROR_CART_CONTEXT
from core.services.notifications import Notifier
from .service import CartStore
from .storage import ClientStorage

# Store bound to the current provider scope
_current_store: ContextVar[Optional[CartStore]] = ContextVar("_current_store", default=None)


class CartContextError(RuntimeError):
    """use_cart() called outside of a cart_provider() scope."""


@contextmanager
def cart_provider(
    store: Optional[CartStore] = None,
    storage: Optional[ClientStorage] = None,
    notifier: Optional[Notifier] = None,
) -> Iterator[CartStore]:
    """
    Bind a CartStore to the current context.

    Args:
        store: Existing store to expose; built from storage/notifier when omitted
        storage: Storage for a new store
        notifier: Notifier for a new store

    Yields:
        The bound store
    """
    if store is None:
        store = CartStore(storage=storage, notifier=notifier)
    token = _current_store.set(store)
    try:
        yield store
    finally:
        _current_store.reset(token)


def use_cart() -> CartStore:
    """Return the store of the enclosing cart_provider()."""
    store = _current_store.get()
    if store is None:
        raise CartContextError(ERROR_CART_CONTEXT)
    return store
