"""Canteen ordering: carts, checkout, payment and kitchen fulfillment."""
