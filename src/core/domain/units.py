"""
AmountUnits — Централизованный модуль представления количеств активов

Единственный допустимый способ преобразований между:
- int (внутреннее представление, беззнаковое 128-битное)
- str (JSON wire-формат asset ledgers: десятичная строка, например "1000")

ЗАПРЕЩЕНО передавать количества как float: только int или десятичная строка.
"""

from typing import Annotated, Union

from pydantic import BeforeValidator, Field, PlainSerializer

from src.core.math.integer_safeguards import U128_MAX, validate_amount


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def parse_u128(value: Union[int, str]) -> int:
    """
    Конверсия: wire-значение → int.

    Принимает int или десятичную строку без знака и пробелов.

    Args:
        value: Количество как int или str (например, "1000")

    Returns:
        Количество как int в [0, U128_MAX]

    Raises:
        ValueError: Если value не int/str, строка не является десятичным
            числом или значение вне диапазона
    """
    if isinstance(value, str):
        if not value.isdecimal() or not value.isascii():
            raise ValueError(f"amount string must be decimal digits, got {value!r}")
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"amount must be an integer or decimal string, got {value!r}")
    return validate_amount(value, "amount")


def format_u128(value: int) -> str:
    """
    Конверсия: int → wire-строка.

    Args:
        value: Количество в [0, U128_MAX]

    Returns:
        Десятичная строка
    """
    return str(validate_amount(value, "amount"))


# =============================================================================
# PYDANTIC TYPE
# =============================================================================

# Беззнаковое 128-битное количество:
# - python mode: int
# - json mode: десятичная строка
U128 = Annotated[
    int,
    BeforeValidator(parse_u128),
    Field(ge=0, le=U128_MAX),
    PlainSerializer(format_u128, return_type=str, when_used="json"),
]
