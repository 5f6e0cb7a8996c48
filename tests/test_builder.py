"""
Tests for building cart items from catalogue products
"""

import pytest
from decimal import Decimal

from core.cart import CartItemError, ProductPayload, cart_item_from_product
from core.cart.builder import find_variant
from core.errors import ERROR_MIN_QUANTITY, ERROR_OUT_OF_STOCK, ERROR_SELECT_OPTIONS


@pytest.fixture
def product(sample_product):
    return ProductPayload(**sample_product)


@pytest.fixture
def simple_product():
    return ProductPayload(
        id=5,
        title="Clay Pot",
        price_rupees="250",
        price_dollars="3",
        stock_count=4,
        stock_status="yes",
    )


class TestFindVariant:
    """Tests for variant selection."""

    def test_matching_selection(self, product):
        assert find_variant(product, {"Size": "Small"}).id == 101

    def test_unknown_selection(self, product):
        assert find_variant(product, {"Size": "Medium"}) is None

    def test_incomplete_selection(self, product):
        assert find_variant(product, {}) is None


class TestCartItemFromProduct:
    """Tests for cart_item_from_product."""

    def test_variant_item(self, product):
        """Test a variant selection uses the variant's price and stock."""
        variant = find_variant(product, {"Size": "Small"})

        item = cart_item_from_product(product, variant, quantity=2)

        assert item.id == 42
        assert item.title == "Handwoven Basket"
        assert item.price == Decimal("900")
        assert item.price_dollars == Decimal("11")
        assert item.quantity == 2
        assert item.max_stock == 3
        assert item.variant.id == 101
        assert item.variant.sku == "BASKET-S"
        assert item.variant.attributes[0].value == "Small"
        assert item.image == "products/basket-1.jpg"

    def test_simple_product(self, simple_product):
        """Test a product without variants."""
        item = cart_item_from_product(simple_product)

        assert item.variant is None
        assert item.price == Decimal("250")
        assert item.max_stock == 4
        assert item.image is None

    def test_variant_required(self, product):
        """Test products with variants need a selection."""
        with pytest.raises(CartItemError, match=ERROR_SELECT_OPTIONS):
            cart_item_from_product(product)

    def test_out_of_stock_variant(self, product):
        """Test a variant marked out of stock is refused."""
        variant = find_variant(product, {"Size": "Large"})

        with pytest.raises(CartItemError, match=ERROR_OUT_OF_STOCK):
            cart_item_from_product(product, variant)

    def test_quantity_above_stock(self, simple_product):
        """Test asking for more than the stock count is refused."""
        with pytest.raises(CartItemError, match=ERROR_OUT_OF_STOCK):
            cart_item_from_product(simple_product, quantity=5)

    def test_missing_stock_status_means_unavailable(self):
        """Test products without a stock status are treated as out of stock."""
        product = ProductPayload(id=1, title="Unknown", stock_count=10)

        with pytest.raises(CartItemError, match=ERROR_OUT_OF_STOCK):
            cart_item_from_product(product)

    def test_zero_quantity(self, simple_product):
        with pytest.raises(CartItemError, match=ERROR_MIN_QUANTITY):
            cart_item_from_product(simple_product, quantity=0)

    def test_error_is_value_error(self):
        assert issubclass(CartItemError, ValueError)

    def test_stock_ceiling_carried_into_cart(self, store, product):
        """Test the cart refuses to grow past the variant's stock."""
        variant = find_variant(product, {"Size": "Small"})

        assert store.add_to_cart(cart_item_from_product(product, variant, quantity=2)) is True
        assert store.add_to_cart(cart_item_from_product(product, variant, quantity=2)) is False

        assert store.items[0].quantity == 2
