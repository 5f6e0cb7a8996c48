"""Checkout package: order summary, order payload and placement."""
from .models import (
    Address,
    CreateOrderPayload,
    CustomerDetails,
    OrderItemPayload,
    OrderResult,
    PaymentMethod,
    ShippingMethod,
)
from .summary import OrderSummary, build_order_summary, shipping_cost
from .service import build_order_payload, confirm_payment, place_order

__all__ = [
    "Address",
    "CreateOrderPayload",
    "CustomerDetails",
    "OrderItemPayload",
    "OrderResult",
    "PaymentMethod",
    "ShippingMethod",
    "OrderSummary",
    "build_order_summary",
    "shipping_cost",
    "build_order_payload",
    "confirm_payment",
    "place_order",
]
