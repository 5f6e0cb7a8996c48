"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Set test environment variables
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from core.cart import CartStore, MemoryStorage, StorageError
from core.services.notifications import RecordingNotifier


@pytest.fixture
def storage():
    """Empty in-memory client storage"""
    return MemoryStorage()


@pytest.fixture
def notifier():
    """Notifier that records every toast"""
    return RecordingNotifier()


@pytest.fixture
def store(storage, notifier):
    """Fresh cart store on in-memory storage"""
    return CartStore(storage=storage, notifier=notifier)


@pytest.fixture
def failing_storage():
    """Storage whose every call fails"""
    broken = Mock()
    broken.get.side_effect = StorageError("connection refused")
    broken.set.side_effect = StorageError("connection refused")
    broken.remove.side_effect = StorageError("connection refused")
    return broken


@pytest.fixture
def sample_item():
    """Base product line item (no variant)"""
    return {
        "id": 1,
        "title": "Brass Diya",
        "price": 100,
        "priceDollars": 1.2,
        "quantity": 2,
        "image": "products/diya.jpg",
    }


@pytest.fixture
def sample_variant_item():
    """Line item for a specific variant"""
    return {
        "id": 7,
        "title": "Silk Scarf",
        "price": 850,
        "priceDollars": 10.5,
        "quantity": 1,
        "variant": {
            "id": "V-RED-L",
            "sku": "SCARF-RED-L",
            "attributes": [
                {"name": "Color", "value": "Red"},
                {"name": "Size", "value": "L"},
            ],
        },
    }


@pytest.fixture
def sample_product():
    """Catalogue product with two variants"""
    return {
        "id": 42,
        "title": "Handwoven Basket",
        "price_rupees": "1200",
        "price_dollars": "14.50",
        "stock_count": 10,
        "stock_status": "yes",
        "has_variants": True,
        "images": ["products/basket-1.jpg", "products/basket-2.jpg"],
        "variants": [
            {
                "id": 101,
                "sku": "BASKET-S",
                "price_rupees": "900",
                "price_dollars": "11",
                "stock_count": 3,
                "stock_status": "yes",
                "attributes": [{"name": "Size", "value": "Small"}],
            },
            {
                "id": 102,
                "sku": "BASKET-L",
                "price_rupees": "1500",
                "price_dollars": "18",
                "stock_count": 0,
                "stock_status": "no",
                "attributes": [{"name": "Size", "value": "Large"}],
            },
        ],
    }


@pytest.fixture
def sample_customer():
    """Checkout customer details"""
    return {
        "first_name": "Asha",
        "last_name": "Menon",
        "email": "asha@example.com",
        "phone": "9876543210",
        "billing": {
            "address1": "12 MG Road",
            "city": "Kochi",
            "state": "Kerala",
            "postal_code": "682001",
            "country": "India",
        },
    }
