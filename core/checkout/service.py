"""Checkout flow: turn the cart into an order through the server action."""
from typing import Any, Callable, Dict, Optional, Union

from core.cart.service import CartStore
from core.errors import ERROR_EMPTY_CART, ERROR_ORDER_FAILED, ERROR_ORDER_PROCESSING, MSG_ORDER_PLACED
from core.logging import get_logger, sanitize_id_for_logging
from .models import (
    CreateOrderPayload,
    CustomerDetails,
    OrderItemPayload,
    OrderResult,
    PaymentMethod,
    ShippingMethod,
)
from .summary import build_order_summary

logger = get_logger(__name__)

# Server action: receives the JSON-ready payload, returns {"success": bool, "order"?: {...}, "error"?: str}
CreateOrderAction = Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]


def build_order_payload(
    store: CartStore,
    customer: CustomerDetails,
    shipping_method: Union[ShippingMethod, str] = ShippingMethod.STANDARD,
    payment_method: Union[PaymentMethod, str] = PaymentMethod.COD,
) -> CreateOrderPayload:
    """Snapshot the cart and its summary into an order payload."""
    summary = build_order_summary(store, shipping_method)

    items = [
        OrderItemPayload(
            id=item.id,
            title=item.title,
            price=item.price,
            price_dollars=item.price_dollars,
            quantity=item.quantity,
            variant_id=item.variant_id,
            sku=item.variant.sku if item.variant is not None else None,
            attributes=[attr.to_dict() for attr in item.variant.attributes] if item.variant is not None else [],
            image=item.image,
        )
        for item in store.items
    ]

    return CreateOrderPayload(
        first_name=customer.first_name,
        last_name=customer.last_name,
        email=customer.email,
        phone=customer.phone,
        billing_address=customer.billing,
        shipping_address=customer.shipping_address,
        notes=customer.notes,
        items=items,
        currency=summary.currency,
        subtotal=summary.subtotal,
        shipping=summary.shipping,
        tax=summary.tax,
        total=summary.total,
        shipping_method=ShippingMethod(shipping_method),
        payment_method=PaymentMethod(payment_method),
    )


def place_order(
    store: CartStore,
    create_order: CreateOrderAction,
    customer: CustomerDetails,
    shipping_method: Union[ShippingMethod, str] = ShippingMethod.STANDARD,
    payment_method: Union[PaymentMethod, str] = PaymentMethod.COD,
) -> OrderResult:
    """
    Create the order for the current cart.

    Cash-on-delivery orders clear the cart right away. Card/UPI orders keep
    the cart until confirm_payment() is called after the gateway succeeds.

    Failures from the server action are reported through the store's
    notifier and the returned OrderResult; they are not raised.
    """
    if len(store) == 0:
        store.notifier.error(ERROR_EMPTY_CART)
        return OrderResult(success=False, error=ERROR_EMPTY_CART)

    payload = build_order_payload(store, customer, shipping_method, payment_method)

    try:
        response = create_order(payload.model_dump(mode="json"))
    except Exception as e:
        logger.error(f"Order processing error: {e}", exc_info=True)
        store.notifier.error(ERROR_ORDER_PROCESSING)
        return OrderResult(success=False, error=ERROR_ORDER_PROCESSING)

    if not isinstance(response, dict) or not response.get("success"):
        error = response.get("error") if isinstance(response, dict) else None
        error = error or ERROR_ORDER_FAILED
        logger.warning(f"Order creation rejected: {error}")
        store.notifier.error(error)
        return OrderResult(success=False, error=error)

    order = response.get("order")
    if not isinstance(order, dict):
        order = {"id": order} if isinstance(order, (int, str)) else {}
    logger.info(f"Order {sanitize_id_for_logging(order.get('id'))} created ({payload.payment_method.value})")

    if payload.payment_method == PaymentMethod.COD:
        store.clear_cart()
        store.notifier.success(MSG_ORDER_PLACED)
        return OrderResult(success=True, order=order)

    return OrderResult(success=True, order=order, awaiting_payment=True)


def confirm_payment(store: CartStore) -> None:
    """Payment went through: the cart has been turned into an order."""
    store.clear_cart()
    store.notifier.success(MSG_ORDER_PLACED)
