"""Order summary shown on the cart and checkout pages."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from core.cart.service import CartStore
from core.config import CHECKOUT_TAX_RATE, EXPRESS_SHIPPING_FEE
from core.services.currency import Currency
from core.services.money import add, percent, round_money, to_decimal
from .models import ShippingMethod


@dataclass(frozen=True)
class OrderSummary:
    currency: Currency
    item_count: int
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


def shipping_cost(method: Union[ShippingMethod, str], express_fee=EXPRESS_SHIPPING_FEE) -> Decimal:
    """Standard shipping is free, express is a flat fee."""
    if ShippingMethod(method) == ShippingMethod.EXPRESS:
        return round_money(express_fee)
    return Decimal("0.00")


def build_order_summary(
    store: CartStore,
    shipping_method: Union[ShippingMethod, str] = ShippingMethod.STANDARD,
    tax_rate=CHECKOUT_TAX_RATE,
    express_fee=EXPRESS_SHIPPING_FEE,
) -> OrderSummary:
    """
    Subtotal, tax and shipping in the store's current display currency.

    Raises:
        ValueError: unknown shipping method
    """
    subtotal = round_money(store.totals.current)
    tax = round_money(percent(subtotal, to_decimal(tax_rate)))
    shipping = shipping_cost(shipping_method, express_fee)
    total = round_money(add(add(subtotal, tax), shipping))

    return OrderSummary(
        currency=store.currency,
        item_count=store.item_count,
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=total,
    )
