"""
Checkout Pydantic Models

Payload handed to the order-creation server action and the result the
checkout flow reports back to the page.
"""
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from core.cart.models import ProductId
from core.services.currency import Currency


class ShippingMethod(str, Enum):
    STANDARD = "standard"
    EXPRESS = "express"


class PaymentMethod(str, Enum):
    CARD = "card"
    UPI = "upi"
    COD = "cod"  # Cash on delivery


class Address(BaseModel):
    address1: str
    address2: Optional[str] = None
    city: str
    state: str
    postal_code: str
    country: str = "India"


class CustomerDetails(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    billing: Address
    same_as_billing: bool = True
    shipping: Optional[Address] = None
    notes: Optional[str] = None

    @property
    def shipping_address(self) -> Address:
        """Address the order ships to."""
        if self.same_as_billing or self.shipping is None:
            return self.billing
        return self.shipping


class OrderItemPayload(BaseModel):
    id: ProductId
    title: str
    price: Decimal
    price_dollars: Decimal
    quantity: int
    variant_id: Optional[ProductId] = None
    sku: Optional[str] = None
    attributes: List[Dict[str, str]] = Field(default_factory=list)
    image: Optional[str] = None


class CreateOrderPayload(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    billing_address: Address
    shipping_address: Address
    notes: Optional[str] = None
    items: List[OrderItemPayload]
    currency: Currency
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal
    shipping_method: ShippingMethod
    payment_method: PaymentMethod


class OrderResult(BaseModel):
    success: bool
    order: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    awaiting_payment: bool = False
