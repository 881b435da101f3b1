"""
Constant Product — Exchange Formula x * y = k

Модуль вычисляет payout обмена для двухсторонного пула без комиссий:

ФОРМУЛЫ:
    product     = S_in * S_out              (до зачисления депозита)
    S_in'       = S_in + amount
    S_out'      = floor(product / S_in')
    payout      = S_out - S_out'
    remainder   = product - S_in' * S_out'  (потеря от truncation)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. payout >= 0 и payout <= S_out (нельзя выплатить больше, чем есть в пуле)
2. S_in' * S_out' <= product (truncation только уменьшает k, никогда не увеличивает)
3. remainder НЕ компенсируется: он возвращается только для аудита
4. S_in' проверяется на overflow против max_value (U128 по умолчанию)

Промежуточный product вычисляется с неограниченной точностью (в пределах
256 бит для двух U128 множителей), поэтому overflow возможен только для
tracked supply, а не для k.
"""

from typing import NamedTuple

from src.core.math.integer_safeguards import (
    U128_MAX,
    checked_add,
    checked_sub,
    floor_div,
    validate_amount,
    validate_positive_amount,
)


# =============================================================================
# TYPES
# =============================================================================


class ExchangeQuote(NamedTuple):
    """Результат расчёта обмена по формуле постоянного произведения."""

    product: int  # k до сделки
    new_supply_in: int  # S_in'
    new_supply_out: int  # S_out'
    payout: int  # S_out - S_out'
    remainder: int  # product - S_in' * S_out' (truncation loss)

    @property
    def is_degenerate(self) -> bool:
        """True если payout == 0 (downstream ledger отклонит такой transfer)."""
        return self.payout == 0


# =============================================================================
# EXCHANGE
# =============================================================================


def quote_exchange(
    supply_in: int,
    supply_out: int,
    amount: int,
    max_value: int = U128_MAX,
) -> ExchangeQuote:
    """
    Расчёт обмена amount единиц входного актива на выходной актив.

    Args:
        supply_in: Tracked supply входной стороны ДО депозита
        supply_out: Tracked supply выходной стороны ДО сделки
        amount: Полученное количество входного актива (> 0)
        max_value: Верхняя граница tracked supply (default: U128_MAX)

    Returns:
        ExchangeQuote с новыми supplies и payout

    Raises:
        ArithmeticOverflow: Если supply_in + amount > max_value
        ValueError: Если amount <= 0 или supplies отрицательны

    Examples:
        >>> quote_exchange(1000, 1000, 100).payout
        91
        >>> quote_exchange(1000, 0, 10).payout
        0
    """
    validate_amount(supply_in, "supply_in", max_value)
    validate_amount(supply_out, "supply_out", max_value)
    validate_positive_amount(amount, "amount")

    product = supply_in * supply_out
    new_supply_in = checked_add(supply_in, amount, max_value)

    # amount > 0 гарантирует new_supply_in > 0
    new_supply_out = floor_div(product, new_supply_in)
    payout = checked_sub(supply_out, new_supply_out)

    return ExchangeQuote(
        product=product,
        new_supply_in=new_supply_in,
        new_supply_out=new_supply_out,
        payout=payout,
        remainder=product - new_supply_in * new_supply_out,
    )
