"""
Module 'cart' (feature-first): panier invité par session et totaux autoritaires.
"""

from .pricing import to_decimal, price_from_product, to_cents, format_amount
from .models import CartTotal, CartTotalLine, MIN_QUANTITY, MAX_QUANTITY
from .service import calculate_cart_total, add_to_cart, update_quantity, remove_line, clear_cart

__all__ = [
    # pricing
    "to_decimal",
    "price_from_product",
    "to_cents",
    "format_amount",
    # models
    "CartTotal",
    "CartTotalLine",
    "MIN_QUANTITY",
    "MAX_QUANTITY",
    # services
    "calculate_cart_total",
    "add_to_cart",
    "update_quantity",
    "remove_line",
    "clear_cart",
]
