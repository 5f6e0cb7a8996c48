"""
Tests for checkout: order summary and order placement
"""

import pytest
from decimal import Decimal
from unittest.mock import Mock

from core.checkout import (
    CustomerDetails,
    PaymentMethod,
    ShippingMethod,
    build_order_payload,
    build_order_summary,
    confirm_payment,
    place_order,
)
from core.errors import ERROR_EMPTY_CART, ERROR_ORDER_FAILED, ERROR_ORDER_PROCESSING, MSG_ORDER_PLACED
from core.services.currency import Currency
from core.services.notifications import NotificationLevel


@pytest.fixture
def customer(sample_customer):
    return CustomerDetails(**sample_customer)


@pytest.fixture
def filled_store(store, sample_item):
    store.add_to_cart(sample_item)  # 2 x 100 INR / 2 x 1.2 USD
    return store


class TestOrderSummary:
    """Tests for build_order_summary."""

    def test_standard_shipping(self, filled_store):
        """Test subtotal, 10% tax and free standard shipping."""
        summary = build_order_summary(filled_store)

        assert summary.currency == Currency.INR
        assert summary.item_count == 2
        assert summary.subtotal == Decimal("200.00")
        assert summary.tax == Decimal("20.00")
        assert summary.shipping == Decimal("0.00")
        assert summary.total == Decimal("220.00")

    def test_express_shipping(self, filled_store):
        """Test express shipping adds the flat fee."""
        summary = build_order_summary(filled_store, ShippingMethod.EXPRESS)

        assert summary.shipping == Decimal("100.00")
        assert summary.total == Decimal("320.00")

    def test_follows_display_currency(self, filled_store):
        """Test the summary uses the current currency's totals."""
        filled_store.toggle_currency()

        summary = build_order_summary(filled_store, "standard")

        assert summary.currency == Currency.USD
        assert summary.subtotal == Decimal("2.40")
        assert summary.tax == Decimal("0.24")
        assert summary.total == Decimal("2.64")

    def test_custom_tax_rate(self, filled_store):
        summary = build_order_summary(filled_store, tax_rate="0.18")

        assert summary.tax == Decimal("36.00")

    def test_empty_cart(self, store):
        summary = build_order_summary(store)

        assert summary.total == Decimal("0.00")
        assert summary.item_count == 0

    def test_unknown_shipping_method(self, filled_store):
        with pytest.raises(ValueError):
            build_order_summary(filled_store, "drone")


class TestOrderPayload:
    """Tests for build_order_payload."""

    def test_payload(self, filled_store, customer):
        """Test the payload carries items, totals and addresses."""
        payload = build_order_payload(filled_store, customer, "express", "card")

        assert payload.items[0].id == 1
        assert payload.items[0].quantity == 2
        assert payload.items[0].variant_id is None
        assert payload.currency == Currency.INR
        assert payload.total == Decimal("320.00")
        assert payload.shipping_method == ShippingMethod.EXPRESS
        assert payload.payment_method == PaymentMethod.CARD
        assert payload.shipping_address == customer.billing

    def test_variant_details(self, store, sample_variant_item, customer):
        """Test variant sku and attributes are included."""
        store.add_to_cart(sample_variant_item)

        item = build_order_payload(store, customer).items[0]

        assert item.variant_id == "V-RED-L"
        assert item.sku == "SCARF-RED-L"
        assert item.attributes == [{"name": "Color", "value": "Red"}, {"name": "Size", "value": "L"}]

    def test_separate_shipping_address(self, filled_store, sample_customer):
        """Test a distinct shipping address is used when given."""
        shipping = {
            "address1": "4 Park Street",
            "city": "Kolkata",
            "state": "West Bengal",
            "postal_code": "700016",
        }
        customer = CustomerDetails(**sample_customer, same_as_billing=False, shipping=shipping)

        payload = build_order_payload(filled_store, customer)

        assert payload.shipping_address.city == "Kolkata"
        assert payload.billing_address.city == "Kochi"


class TestPlaceOrder:
    """Tests for place_order / confirm_payment."""

    def test_cash_on_delivery_clears_cart(self, filled_store, customer, notifier):
        """Test a successful COD order empties the cart."""
        create_order = Mock(return_value={"success": True, "order": {"id": "ORD123456"}})

        result = place_order(filled_store, create_order, customer, payment_method="cod")

        assert result.success is True
        assert result.awaiting_payment is False
        assert result.order["id"] == "ORD123456"
        assert len(filled_store) == 0
        assert notifier.last.message == MSG_ORDER_PLACED

        sent = create_order.call_args[0][0]
        assert sent["currency"] == "INR"
        assert sent["items"][0]["quantity"] == 2
        assert Decimal(sent["total"]) == Decimal("220.00")
        assert sent["payment_method"] == "cod"

    def test_online_payment_keeps_cart(self, filled_store, customer):
        """Test card orders wait for payment before clearing."""
        create_order = Mock(return_value={"success": True, "order": {"id": "ORD654321"}})

        result = place_order(filled_store, create_order, customer, payment_method=PaymentMethod.UPI)

        assert result.success is True
        assert result.awaiting_payment is True
        assert len(filled_store) == 1

        confirm_payment(filled_store)

        assert len(filled_store) == 0

    def test_order_reference_not_a_mapping(self, filled_store, customer):
        """Test a bare order id from the server action is accepted."""
        create_order = Mock(return_value={"success": True, "order": "ORD-1"})

        result = place_order(filled_store, create_order, customer, payment_method="cod")

        assert result.success is True
        assert result.order == {"id": "ORD-1"}
        assert len(filled_store) == 0

    def test_unusable_order_reference(self, filled_store, customer):
        create_order = Mock(return_value={"success": True, "order": ["ORD-1"]})

        result = place_order(filled_store, create_order, customer, payment_method="card")

        assert result.success is True
        assert result.order == {}
        assert result.awaiting_payment is True

    def test_rejected_order(self, filled_store, customer, notifier):
        """Test a failed server response keeps the cart."""
        create_order = Mock(return_value={"success": False, "error": "Out of stock"})

        result = place_order(filled_store, create_order, customer)

        assert result.success is False
        assert result.error == "Out of stock"
        assert len(filled_store) == 1
        assert notifier.last.level == NotificationLevel.ERROR

    def test_rejected_without_message(self, filled_store, customer):
        create_order = Mock(return_value=None)

        result = place_order(filled_store, create_order, customer)

        assert result.error == ERROR_ORDER_FAILED

    def test_server_action_raises(self, filled_store, customer, notifier):
        """Test exceptions from the server action are reported, not raised."""
        create_order = Mock(side_effect=RuntimeError("network down"))

        result = place_order(filled_store, create_order, customer)

        assert result.success is False
        assert result.error == ERROR_ORDER_PROCESSING
        assert notifier.last.message == ERROR_ORDER_PROCESSING
        assert len(filled_store) == 1

    def test_empty_cart_not_submitted(self, store, customer):
        create_order = Mock()

        result = place_order(store, create_order, customer)

        assert result.error == ERROR_EMPTY_CART
        create_order.assert_not_called()
