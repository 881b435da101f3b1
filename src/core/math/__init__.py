"""
Core math modules для пула ликвидности

Целочисленные примитивы и формула постоянного произведения.
Никаких float: все количества — беззнаковые целые в пределах U128.
"""

# Integer Safeguards
from src.core.math.integer_safeguards import (
    # Bounds
    U128_MAX,
    # Exceptions
    ArithmeticOverflow,
    # Validation
    is_u128,
    validate_amount,
    validate_positive_amount,
    # Checked arithmetic
    checked_add,
    checked_sub,
    floor_div,
)

# Constant Product
from src.core.math.constant_product import (
    ExchangeQuote,
    quote_exchange,
)

__all__ = [
    # Integer Safeguards: Bounds
    "U128_MAX",
    # Integer Safeguards: Exceptions
    "ArithmeticOverflow",
    # Integer Safeguards: Validation
    "is_u128",
    "validate_amount",
    "validate_positive_amount",
    # Integer Safeguards: Checked arithmetic
    "checked_add",
    "checked_sub",
    "floor_div",
    # Constant Product
    "ExchangeQuote",
    "quote_exchange",
]
