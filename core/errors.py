"""
Common Message Constants

Centralized user-facing messages for cart and checkout notifications.
Templates use str.format placeholders.
"""

# Cart notifications
MSG_ITEM_ADDED = "{title} added to cart"
MSG_ITEM_MERGED = "Updated {title} quantity in cart"
MSG_ITEM_REMOVED = "{title} removed from cart"
MSG_CART_CLEARED = "Cart cleared"

# Cart errors
ERROR_MAX_STOCK = "Only {max_stock} units of {title} available"
ERROR_MIN_QUANTITY = "Quantity must be at least 1"
ERROR_INVALID_ITEM = "Could not add this item to your cart"
ERROR_CART_CONTEXT = "use_cart must be used within a cart_provider"

# Product page errors
ERROR_SELECT_OPTIONS = "Please select all required options"
ERROR_OUT_OF_STOCK = "Not enough stock available"

# Checkout
ERROR_EMPTY_CART = "Your cart is empty"
ERROR_ORDER_FAILED = "Failed to create order"
ERROR_ORDER_PROCESSING = "An error occurred while processing your order"
MSG_ORDER_PLACED = "Order placed successfully"