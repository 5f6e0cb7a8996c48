"""Cart store service: in-memory cart synchronised with client storage."""
import copy
import json
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from core.config import CART_STORAGE_BACKEND
from core.errors import (
    ERROR_INVALID_ITEM,
    ERROR_MAX_STOCK,
    ERROR_MIN_QUANTITY,
    MSG_CART_CLEARED,
    MSG_ITEM_ADDED,
    MSG_ITEM_MERGED,
    MSG_ITEM_REMOVED,
)
from core.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from core.services.currency import Currency, CURRENCY_SYMBOLS, parse_currency, toggle, zero_price
from core.services.money import Numeric, format_money, to_decimal
from core.services.notifications import LoggingNotifier, Notifier
from .models import CartLineItem, CartState, CartTotals, compute_totals, count_items
from .storage import ClientStorage, MemoryStorage, StorageError, StorageKeys, create_storage

logger = get_logger(__name__)

CartListener = Callable[[CartState], None]


class CartStore:
    """
    Owns one session's cart.

    Features:
    - Rehydrates from client storage, resets silently on corrupt data
    - Merges repeated additions of the same product/variant
    - Enforces the per-item max_stock ceiling
    - Persists after every mutation, notifies subscribers

    Recoverable problems (bad index, quantity below 1, stock ceiling,
    storage failures) never raise; they are reported through the notifier
    and the log.

    Usage:
        store = CartStore(MemoryStorage())
        store.add_to_cart({"id": 1, "price": 100, "priceDollars": 1.2})
        store.totals.current
    """

    def __init__(self, storage: Optional[ClientStorage] = None, notifier: Optional[Notifier] = None):
        self.storage = storage if storage is not None else MemoryStorage()
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self._listeners: List[CartListener] = []
        self._items: List[CartLineItem] = self._load_items()
        self._currency: Currency = self._load_currency()

    # ==================== LOADING ====================

    def _load_items(self) -> List[CartLineItem]:
        try:
            raw = self.storage.get(StorageKeys.CART)
        except StorageError as e:
            logger.warning(f"Could not read saved cart, starting empty: {e}")
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            items = [CartLineItem.from_dict(entry) for entry in data]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, OverflowError) as e:
            # Corrupted data - drop it and start over
            logger.warning(f"Corrupted cart data, resetting cart: {e}")
            self._remove_key(StorageKeys.CART)
            return []

        logger.debug(f"Restored cart with {len(items)} line items")
        return items

    def _load_currency(self) -> Currency:
        try:
            raw = self.storage.get(StorageKeys.PREFERRED_CURRENCY)
        except StorageError as e:
            logger.warning(f"Could not read currency preference: {e}")
            raw = None
        return parse_currency(raw)

    # ==================== PERSISTENCE ====================

    def _persist(self) -> None:
        try:
            payload = json.dumps([item.to_dict() for item in self._items], ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Cart is not serializable, not persisted: {e}")
            return
        try:
            self.storage.set(StorageKeys.CART, payload)
        except StorageError as e:
            # In-memory cart stays authoritative
            logger.error(f"Failed to persist cart: {e}")

    def _persist_currency(self) -> None:
        try:
            self.storage.set(StorageKeys.PREFERRED_CURRENCY, self._currency.value)
        except StorageError as e:
            logger.error(f"Failed to persist currency preference: {e}")

    def _remove_key(self, key: str) -> None:
        try:
            self.storage.remove(key)
        except StorageError as e:
            logger.error(f"Failed to remove {key} from storage: {e}")

    # ==================== SUBSCRIPTIONS ====================

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Register a listener called with a CartState snapshot after every change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        if not self._listeners:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Cart listener failed")

    def _changed(self) -> None:
        self._persist()
        self._publish()

    # ==================== READ SIDE ====================

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        """Copies of the line items, in cart order."""
        return tuple(copy.deepcopy(item) for item in self._items)

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def item_count(self) -> int:
        return count_items(self._items)

    @property
    def totals(self) -> CartTotals:
        return compute_totals(self._items, self._currency)

    def snapshot(self) -> CartState:
        """Detached copy of the current state."""
        return CartState(items=list(self.items), currency=self._currency)

    def __len__(self) -> int:
        return len(self._items)

    def format_price(self, amount: Numeric, currency: Union[Currency, str, None] = None) -> str:
        """
        Render an amount in the given (or current) currency.

        Zero, empty or unparsable amounts render as the zero string ("₹0.00").
        """
        target = self._currency if currency is None else parse_currency(
            currency.value if isinstance(currency, Currency) else currency,
            default=self._currency,
        )
        if not amount or to_decimal(amount) == 0:
            return zero_price(target)
        return format_money(amount, target.value)

    # ==================== MUTATIONS ====================

    def _valid_index(self, index: Any) -> bool:
        return (
            isinstance(index, int)
            and not isinstance(index, bool)
            and 0 <= index < len(self._items)
        )

    def _find(self, candidate: CartLineItem) -> Optional[CartLineItem]:
        return next((item for item in self._items if item.same_entry(candidate)), None)

    def add_to_cart(self, item: Union[CartLineItem, Mapping[str, Any]]) -> bool:
        """
        Add a product (or variant) to the cart, merging with an existing entry.

        Returns:
            True if the cart changed
        """
        try:
            if isinstance(item, CartLineItem):
                candidate = copy.deepcopy(item)
            else:
                candidate = CartLineItem.from_dict(item)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Rejected cart item: {e}")
            self.notifier.error(ERROR_INVALID_ITEM)
            return False

        existing = self._find(candidate)

        if existing is not None:
            new_quantity = existing.quantity + candidate.quantity
            # Freshly supplied stock data wins over what was stored
            ceiling = candidate.max_stock if candidate.max_stock is not None else existing.max_stock
            if ceiling is not None and new_quantity > ceiling:
                logger.info(
                    f"Stock ceiling hit for product {sanitize_id_for_logging(existing.id)}: "
                    f"{new_quantity} > {ceiling}"
                )
                self.notifier.error(ERROR_MAX_STOCK.format(max_stock=ceiling, title=existing.title))
                return False

            existing.quantity = new_quantity
            existing.max_stock = ceiling
            self._changed()
            self.notifier.success(MSG_ITEM_MERGED.format(title=existing.title))
            return True

        if candidate.exceeds_stock(candidate.quantity):
            self.notifier.error(ERROR_MAX_STOCK.format(max_stock=candidate.max_stock, title=candidate.title))
            return False

        self._items.append(candidate)
        self._changed()
        logger.debug(f"Added {sanitize_string_for_logging(candidate.title)} to cart")
        self.notifier.success(MSG_ITEM_ADDED.format(title=candidate.title))
        return True

    def remove_from_cart(self, index: int) -> bool:
        """Remove the line item at a zero-based position."""
        if not self._valid_index(index):
            logger.warning(f"Invalid cart index for removal: {index!r} (cart has {len(self._items)} items)")
            return False

        removed = self._items.pop(index)
        self._changed()
        self.notifier.info(MSG_ITEM_REMOVED.format(title=removed.title))
        return True

    def update_quantity(self, index: int, new_quantity: int) -> bool:
        """Set the quantity of the line item at a zero-based position."""
        if not self._valid_index(index):
            logger.warning(f"Invalid cart index for update: {index!r} (cart has {len(self._items)} items)")
            return False

        if isinstance(new_quantity, bool) or not isinstance(new_quantity, int) or new_quantity < 1:
            self.notifier.info(ERROR_MIN_QUANTITY)
            return False

        item = self._items[index]
        if item.exceeds_stock(new_quantity):
            self.notifier.error(ERROR_MAX_STOCK.format(max_stock=item.max_stock, title=item.title))
            return False

        item.quantity = new_quantity
        self._changed()
        return True

    def clear_cart(self) -> None:
        """Empty the cart and drop the saved record. Currency is kept."""
        self._items = []
        self._remove_key(StorageKeys.CART)
        self._publish()
        self.notifier.info(MSG_CART_CLEARED)

    def toggle_currency(self) -> Currency:
        """Switch the display currency between INR and USD."""
        self._currency = toggle(self._currency)
        self._persist_currency()
        self._publish()
        logger.debug(f"Display currency switched to {CURRENCY_SYMBOLS[self._currency.value]}")
        return self._currency


def create_cart_store(
    session_id: Optional[str] = None,
    notifier: Optional[Notifier] = None,
    backend: str = CART_STORAGE_BACKEND,
) -> CartStore:
    """Build a CartStore on the configured storage backend."""
    return CartStore(storage=create_storage(backend, session_id), notifier=notifier)
