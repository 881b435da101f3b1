"""
Pool errors — таксономия фатальных ошибок invocation.

Любое исключение из этого модуля прерывает invocation целиком: записи в
StateStore отбрасываются, повторов внутри пула нет. ForeignAsset не является
ошибкой (см. DepositOutcome.FOREIGN_ASSET).

ArithmeticOverflow определён в src.core.math (его поднимает математический
слой) и реэкспортируется здесь для удобства.
"""

from src.core.math.integer_safeguards import ArithmeticOverflow


class PoolError(Exception):
    """Базовый класс ошибок пула."""

    pass


class AlreadyDeployed(PoolError):
    """Запись пула уже существует под этим account id."""

    pass


class NotDeployed(PoolError):
    """Под этим account id нет записи пула."""

    pass


class Unauthorized(PoolError):
    """Привилегированная операция вызвана не controller'ом."""

    pass


class AlreadyBootstrapped(PoolError):
    """Bootstrap после того, как PoolLedger уже создан."""

    pass


class DuplicateAsset(PoolError):
    """Bootstrap с одинаковыми адресами обеих сторон."""

    pass


class Uninitialized(PoolError):
    """Операция требует PoolLedger, а bootstrap ещё не завершён."""

    pass


class BootstrapJoinFailure(PoolError):
    """
    Один или оба запроса метаданных завершились ошибкой.

    PoolLedger не создаётся; guard bootstrap остаётся открытым для повтора.
    """

    def __init__(self, message: str, failed_addresses: tuple[str, ...]):
        super().__init__(message)
        self.failed_addresses = failed_addresses


class RejectedPayout(PoolError):
    """
    Downstream asset ledger отклонил payout обмена (в частности payout == 0).

    Вся invocation откатывается, включая зачисление депозита.
    """

    def __init__(self, message: str, asset_address: str, receiver: str, payout: int):
        super().__init__(message)
        self.asset_address = asset_address
        self.receiver = receiver
        self.payout = payout


__all__ = [
    "PoolError",
    "AlreadyDeployed",
    "NotDeployed",
    "Unauthorized",
    "AlreadyBootstrapped",
    "DuplicateAsset",
    "Uninitialized",
    "BootstrapJoinFailure",
    "RejectedPayout",
    "ArithmeticOverflow",
]
