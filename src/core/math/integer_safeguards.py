"""
Integer Safeguards — Bounded Unsigned Integer Primitives

Модуль обеспечивает безопасную арифметику над беззнаковыми 128-битными
количествами активов (tracked supply, deposit, payout, refund):
- Checked сложение/вычитание с детекцией overflow/underflow
- Валидация, что значение является целым числом в диапазоне [0, U128_MAX]
- Floor-деление с защитой от деления на ноль

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат никогда не выходит за пределы [0, max_value] — иначе ArithmeticOverflow
2. bool никогда не принимается как количество (True/False не являются amount)
3. Все операции детерминированы и воспроизводимы (только int, без float)
"""

from typing import Final

# =============================================================================
# ГРАНИЦЫ
# =============================================================================

# Максимальное представимое беззнаковое 128-битное значение
U128_MAX: Final[int] = 2**128 - 1


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ArithmeticOverflow(ArithmeticError):
    """
    Критическое нарушение границ: результат операции вне [0, max_value].

    При возникновении вся invocation должна быть отменена целиком:
    никаких частичных зачислений в tracked supply.
    """

    pass


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_u128(value: object, max_value: int = U128_MAX) -> bool:
    """
    Проверка, является ли значение беззнаковым целым в [0, max_value].

    Args:
        value: Проверяемое значение
        max_value: Верхняя граница (default: U128_MAX)

    Returns:
        True если value — int (не bool) и 0 <= value <= max_value
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= max_value


def validate_amount(value: object, name: str, max_value: int = U128_MAX) -> int:
    """
    Валидация неотрицательного количества.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        max_value: Верхняя граница (default: U128_MAX)

    Returns:
        value (как int)

    Raises:
        TypeError: Если value не int (или является bool)
        ValueError: Если value < 0 или value > max_value
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")

    return value


def validate_positive_amount(value: object, name: str, max_value: int = U128_MAX) -> int:
    """
    Валидация строго положительного количества.

    Raises:
        TypeError: Если value не int
        ValueError: Если value <= 0 или value > max_value
    """
    amount = validate_amount(value, name, max_value)
    if amount == 0:
        raise ValueError(f"{name} must be positive, got 0")
    return amount


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


def checked_add(a: int, b: int, max_value: int = U128_MAX) -> int:
    """
    Сложение с детекцией overflow.

    Args:
        a: Первое слагаемое (>= 0)
        b: Второе слагаемое (>= 0)
        max_value: Верхняя граница результата (default: U128_MAX)

    Returns:
        a + b

    Raises:
        ArithmeticOverflow: Если a + b > max_value

    Examples:
        >>> checked_add(1000, 100)
        1100
        >>> checked_add(U128_MAX, 1)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ArithmeticOverflow: ...
    """
    result = a + b
    if result > max_value:
        raise ArithmeticOverflow(f"Addition overflow: {a} + {b} exceeds {max_value}")
    return result


def checked_sub(a: int, b: int) -> int:
    """
    Вычитание с детекцией underflow.

    Raises:
        ArithmeticOverflow: Если a - b < 0
    """
    result = a - b
    if result < 0:
        raise ArithmeticOverflow(f"Subtraction underflow: {a} - {b} is negative")
    return result


def floor_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное (truncating) деление неотрицательных значений.

    В отличие от float-деления, fallback не применяется: деление на ноль
    является ошибкой вызывающего кода.

    Raises:
        ZeroDivisionError: Если denominator == 0
        ValueError: Если numerator или denominator отрицательны
    """
    if numerator < 0 or denominator < 0:
        raise ValueError(
            f"floor_div expects non-negative operands, got {numerator} / {denominator}"
        )
    if denominator == 0:
        raise ZeroDivisionError("floor_div by zero")
    return numerator // denominator
