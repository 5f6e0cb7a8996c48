"""Cart models with Decimal-based dual-currency pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence, Union

from core.services.currency import Currency, DEFAULT_CURRENCY
from core.services.money import to_price, multiply, to_json_number

DEFAULT_TITLE = "Product"

ProductId = Union[int, str]


def _to_quantity(value: Any) -> int:
    """Quantity from loose input: missing/invalid -> 1, never below 1."""
    if value is None or isinstance(value, bool):
        return 1
    try:
        quantity = int(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(quantity, 1)


def _to_max_stock(value: Any) -> Optional[int]:
    """Stock ceiling; anything that is not a positive int means "no ceiling"."""
    if value is None or isinstance(value, bool):
        return None
    try:
        max_stock = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return max_stock if max_stock > 0 else None


def _check_id(value: Any, what: str) -> ProductId:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"{what} id must be an int or str, got {type(value).__name__}")
    return value


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass
class VariantAttribute:
    """One selected attribute of a variant, e.g. Size: XL."""
    name: str
    value: str

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VariantAttribute":
        if not isinstance(data, Mapping):
            raise TypeError("variant attribute must be an object")
        return cls(name=str(data.get("name", "")), value=str(data.get("value", "")))


@dataclass
class CartVariant:
    """Specific attribute-bound configuration of a product."""
    id: ProductId
    sku: Optional[str] = None
    attributes: List[VariantAttribute] = field(default_factory=list)

    def __post_init__(self):
        if self.id is not None:
            _check_id(self.id, "variant")
        if self.sku is not None:
            self.sku = str(self.sku)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sku": self.sku,
            "attributes": [attr.to_dict() for attr in self.attributes],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CartVariant":
        if not isinstance(data, Mapping):
            raise TypeError("variant must be an object")
        return cls(
            id=data.get("id"),
            sku=data.get("sku"),
            attributes=[VariantAttribute.from_dict(a) for a in (data.get("attributes") or [])],
        )


@dataclass
class CartLineItem:
    """Single product (or product variant) selection in the cart."""
    id: ProductId
    title: str = DEFAULT_TITLE
    price: Decimal = Decimal("0")  # INR unit price
    price_dollars: Decimal = Decimal("0")  # USD unit price
    quantity: int = 1
    variant: Optional[CartVariant] = None
    max_stock: Optional[int] = None
    image: Optional[str] = None

    def __post_init__(self):
        # Normalize loose input the same way the storefront does
        _check_id(self.id, "product")
        self.title = str(self.title) if self.title else DEFAULT_TITLE
        self.price = to_price(self.price)
        self.price_dollars = to_price(self.price_dollars)
        self.quantity = _to_quantity(self.quantity)
        self.max_stock = _to_max_stock(self.max_stock)
        if self.variant is not None and not isinstance(self.variant, CartVariant):
            self.variant = CartVariant.from_dict(self.variant)
        if self.image is not None:
            self.image = str(self.image)

    @property
    def variant_id(self) -> Optional[ProductId]:
        return self.variant.id if self.variant is not None else None

    def same_entry(self, other: "CartLineItem") -> bool:
        """
        Identity rule: same product id, and either neither has a variant or
        both variants share the same id.
        """
        if self.id != other.id:
            return False
        if self.variant is None and other.variant is None:
            return True
        if self.variant is None or other.variant is None:
            return False
        return self.variant.id == other.variant.id

    def exceeds_stock(self, quantity: int) -> bool:
        return self.max_stock is not None and quantity > self.max_stock

    def line_total(self, currency: Currency) -> Decimal:
        unit = self.price if currency == Currency.INR else self.price_dollars
        return multiply(unit, self.quantity)

    def to_dict(self) -> dict:
        """Storage record (camelCase keys, prices as JSON numbers)."""
        data = {
            "id": self.id,
            "title": self.title,
            "price": to_json_number(self.price),
            "priceDollars": to_json_number(self.price_dollars),
            "quantity": self.quantity,
            "variant": self.variant.to_dict() if self.variant is not None else None,
            "image": self.image,
        }
        if self.max_stock is not None:
            data["maxStock"] = self.max_stock
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CartLineItem":
        """
        Build from a storage record or a caller payload.

        Accepts camelCase (storage format) and snake_case keys.

        Raises:
            TypeError: data is not a mapping
            KeyError: id missing
        """
        if not isinstance(data, Mapping):
            raise TypeError("line item must be an object")
        if data.get("id") is None:
            raise KeyError("id")

        variant = data.get("variant")
        return cls(
            id=data["id"],
            title=data.get("title") or DEFAULT_TITLE,
            price=data.get("price"),
            price_dollars=_pick(data, "priceDollars", "price_dollars"),
            quantity=data.get("quantity"),
            variant=CartVariant.from_dict(variant) if variant else None,
            max_stock=_pick(data, "maxStock", "max_stock"),
            image=data.get("image"),
        )


@dataclass(frozen=True)
class CartTotals:
    """Cart totals in both currencies plus the one currently displayed."""
    inr: Decimal
    usd: Decimal
    currency: Currency

    @property
    def current(self) -> Decimal:
        return self.inr if self.currency == Currency.INR else self.usd

    def for_currency(self, currency: Currency) -> Decimal:
        return self.inr if currency == Currency.INR else self.usd


def compute_totals(items: Sequence[CartLineItem], currency: Currency) -> CartTotals:
    """Sum price x quantity per currency."""
    inr = sum((item.line_total(Currency.INR) for item in items), Decimal("0"))
    usd = sum((item.line_total(Currency.USD) for item in items), Decimal("0"))
    return CartTotals(inr=inr, usd=usd, currency=currency)


def count_items(items: Sequence[CartLineItem]) -> int:
    return sum(item.quantity for item in items)


@dataclass
class CartState:
    """The whole cart: ordered line items and the display currency."""
    items: List[CartLineItem] = field(default_factory=list)
    currency: Currency = DEFAULT_CURRENCY

    @property
    def item_count(self) -> int:
        return count_items(self.items)

    @property
    def totals(self) -> CartTotals:
        return compute_totals(self.items, self.currency)
