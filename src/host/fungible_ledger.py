"""
InMemoryFungibleLedger — эталонный fungible asset ledger для симуляций и тестов

Не является частью пула. Моделирует внешний asset ledger с двумя
capabilities, на которые опирается пул:
- fetch_metadata(): описательные метаданные актива (JSON dict)
- transfer(sender, receiver, amount): перевод как единое целое

И с transfer-notification механизмом (transfer_call):
1. Перевод amount от sender к receiver
2. Вызов receiver.on_incoming_transfer(sender, <адрес ledger>, amount)
3. Возврат sender'у отклонённой части (или всего amount, если вызов упал)
"""

import logging
from typing import Any, Dict, Protocol

from src.core.math.integer_safeguards import (
    U128_MAX,
    checked_add,
    validate_amount,
)

logger = logging.getLogger(__name__)

# Стандарт метаданных по умолчанию
FT_METADATA_SPEC = "ft-1.0.0"


class TransferRejected(Exception):
    """Ledger отклонил перевод (перевод не выполнен ни в какой части)."""

    pass


class TransferReceiver(Protocol):
    """Контракт получателя transfer_call."""

    async def on_incoming_transfer(self, sender: str, asset_address: str, amount: int) -> int:
        ...


class InMemoryFungibleLedger:
    """
    Fungible asset ledger с балансами в памяти.

    Аккаунт должен быть зарегистрирован (register) до получения средств.
    """

    def __init__(
        self,
        address: str,
        name: str,
        symbol: str,
        decimals: int = 12,
        spec: str = FT_METADATA_SPEC,
    ):
        self.address = address
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.spec = spec
        self._balances: Dict[str, int] = {}
        self._total_supply = 0

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def register(self, account_id: str) -> None:
        """Регистрация аккаунта (идемпотентна)."""
        self._balances.setdefault(account_id, 0)

    def is_registered(self, account_id: str) -> bool:
        return account_id in self._balances

    def balance_of(self, account_id: str) -> int:
        return self._balances.get(account_id, 0)

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def mint(self, account_id: str, amount: int) -> None:
        """Эмиссия amount на аккаунт (аккаунт регистрируется автоматически)."""
        validate_amount(amount, "amount")
        self.register(account_id)
        self._total_supply = checked_add(self._total_supply, amount, U128_MAX)
        self._balances[account_id] += amount

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    def metadata(self) -> Dict[str, Any]:
        return {
            "spec": self.spec,
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "icon": None,
            "reference": None,
            "reference_hash": None,
        }

    async def fetch_metadata(self) -> Dict[str, Any]:
        return self.metadata()

    def transfer(self, sender: str, receiver: str, amount: int) -> None:
        """
        Перевод amount от sender к receiver.

        Raises:
            TransferRejected: amount == 0, незарегистрированный аккаунт,
                перевод самому себе или недостаточный баланс
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise TransferRejected(f"The amount should be a positive number, got {amount!r}")
        if sender == receiver:
            raise TransferRejected("Sender and receiver should be different")
        if not self.is_registered(sender):
            raise TransferRejected(f"The account {sender} is not registered")
        if not self.is_registered(receiver):
            raise TransferRejected(f"The account {receiver} is not registered")
        if self._balances[sender] < amount:
            raise TransferRejected(
                f"The account {sender} doesn't have enough balance: "
                f"{self._balances[sender]} < {amount}"
            )
        self._balances[sender] -= amount
        self._balances[receiver] += amount

    async def transfer_call(
        self,
        sender: str,
        receiver: str,
        amount: int,
        receiver_contract: TransferReceiver,
    ) -> int:
        """
        Перевод с уведомлением получателя и возвратом отклонённой части.

        Args:
            sender: Отправитель
            receiver: Аккаунт получателя (контракт)
            amount: Количество
            receiver_contract: Обработчик уведомления получателя

        Returns:
            Фактически использованное получателем количество

        Raises:
            TransferRejected: Если начальный перевод отклонён
        """
        self.transfer(sender, receiver, amount)

        try:
            declined = await receiver_contract.on_incoming_transfer(sender, self.address, amount)
        except Exception as e:
            # invocation получателя упала: возвращаем всё
            logger.warning(
                "ledger=%s receiver=%s failed on incoming transfer, refunding %d to %s: %s",
                self.address, receiver, amount, sender, e,
            )
            declined = amount

        return amount - self._resolve_refund(sender, receiver, amount, declined)

    def _resolve_refund(self, sender: str, receiver: str, amount: int, declined: int) -> int:
        refund = min(max(declined, 0), amount, self.balance_of(receiver))
        if refund > 0:
            self._balances[receiver] -= refund
            self._balances[sender] += refund
        return refund
