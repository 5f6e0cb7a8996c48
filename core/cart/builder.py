"""
Product page -> cart line item.

Turns the catalogue product the product page shows (plus the variant the
customer picked) into a CartLineItem, applying the page's stock checks.
"""
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from core.errors import ERROR_MIN_QUANTITY, ERROR_OUT_OF_STOCK, ERROR_SELECT_OPTIONS
from .models import CartLineItem, CartVariant, VariantAttribute, ProductId

OUT_OF_STOCK_STATUS = "no"


class CartItemError(ValueError):
    """Product cannot be added to the cart; message is user-facing."""


class VariantAttributePayload(BaseModel):
    name: str
    value: str


class VariantPayload(BaseModel):
    id: ProductId
    sku: Optional[str] = None
    price_rupees: Optional[Decimal] = None
    price_dollars: Optional[Decimal] = None
    stock_count: int = 0
    stock_status: str = OUT_OF_STOCK_STATUS
    attributes: List[VariantAttributePayload] = Field(default_factory=list)


class ProductPayload(BaseModel):
    id: ProductId
    title: str = "Product"
    price_rupees: Optional[Decimal] = None
    price_dollars: Optional[Decimal] = None
    stock_count: int = 0
    stock_status: str = OUT_OF_STOCK_STATUS
    has_variants: bool = False
    images: List[str] = Field(default_factory=list)
    variants: List[VariantPayload] = Field(default_factory=list)


def find_variant(product: ProductPayload, selected: Dict[str, str]) -> Optional[VariantPayload]:
    """
    Variant whose attributes match every selected option.

    Args:
        product: Product with variants
        selected: Attribute name -> chosen value

    Returns:
        Matching variant, or None while the selection is incomplete/unknown
    """
    if not selected:
        return None
    for variant in product.variants:
        values = {attr.name: attr.value for attr in variant.attributes}
        if len(values) == len(selected) and all(values.get(k) == v for k, v in selected.items()):
            return variant
    return None


def cart_item_from_product(
    product: ProductPayload,
    variant: Optional[VariantPayload] = None,
    quantity: int = 1,
) -> CartLineItem:
    """
    Build the cart line item for "Add to cart".

    max_stock is taken from the selected variant (or the product) so the cart
    refuses to grow past what the catalogue reported.

    Raises:
        CartItemError: variant required but missing, quantity below 1,
            or not enough stock
    """
    if product.has_variants and variant is None:
        raise CartItemError(ERROR_SELECT_OPTIONS)

    if quantity < 1:
        raise CartItemError(ERROR_MIN_QUANTITY)

    source = variant if variant is not None else product
    if source.stock_status == OUT_OF_STOCK_STATUS or source.stock_count < quantity:
        raise CartItemError(ERROR_OUT_OF_STOCK)

    cart_variant = None
    if variant is not None:
        cart_variant = CartVariant(
            id=variant.id,
            sku=variant.sku,
            attributes=[VariantAttribute(name=a.name, value=a.value) for a in variant.attributes],
        )

    return CartLineItem(
        id=product.id,
        title=product.title,
        price=source.price_rupees,
        price_dollars=source.price_dollars,
        quantity=quantity,
        variant=cart_variant,
        max_stock=source.stock_count,
        image=product.images[0] if product.images else None,
    )
