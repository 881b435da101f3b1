"""Deposit / Exchange Engine — обработка входящих переводов.

Вызывается asset ledger'ом, когда он перевёл amount своего актива в пул.
Возвращает отклонённую часть amount (её ledger возвращает отправителю).

Классификация:
1. Адрес актива не принадлежит пулу → FOREIGN_ASSET, вернуть весь amount
2. sender == owner → CONTRIBUTION, зачислить amount, без обмена
3. Иначе → EXCHANGE по формуле постоянного произведения, payout
   отправляется downstream ledger'у выходной стороны

Атомарность: все записи invocation буферизуются в транзакции StateStore.
Отказ payout (RejectedPayout) или overflow отбрасывают буфер целиком,
включая зачисление депозита.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.core.domain import ContractState, PoolLedger, PoolSideKey
from src.core.math import checked_add, quote_exchange, validate_positive_amount
from src.host.gateway import AssetLedgerGateway, RemoteCallError
from src.host.state_store import StoreTransaction
from src.pool.config import PoolConfig
from src.pool.errors import RejectedPayout, Uninitialized
from src.pool.repository import ContractStateRepository

logger = logging.getLogger(__name__)


class DepositOutcome(str, Enum):
    """Класс входящего перевода."""

    FOREIGN_ASSET = "FOREIGN_ASSET"
    CONTRIBUTION = "CONTRIBUTION"
    EXCHANGE = "EXCHANGE"


@dataclass(frozen=True)
class DepositResult:
    """Результат обработки входящего перевода."""

    outcome: DepositOutcome
    sender: str
    asset_address: str
    amount: int

    # Часть amount, которую пул не оставил себе
    refund: int

    # Обмен (только для EXCHANGE)
    payout: int
    payout_asset: Optional[str]
    truncation_remainder: int

    # Supplies после invocation (None для FOREIGN_ASSET)
    supply_a: Optional[int]
    supply_b: Optional[int]

    details: str


class DepositExchangeEngine:
    """Engine депозитов и обменов."""

    def __init__(
        self,
        repository: ContractStateRepository,
        gateway: AssetLedgerGateway,
        config: Optional[PoolConfig] = None,
    ):
        self.repository = repository
        self.gateway = gateway
        self.config = config or PoolConfig()

    async def on_incoming_transfer(self, sender: str, asset_address: str, amount: int) -> DepositResult:
        """
        Обработка входящего перевода.

        Args:
            sender: Аккаунт, переведший актив в пул
            asset_address: Адрес ledger, сообщающего о переводе
            amount: Переведённое количество (> 0)

        Returns:
            DepositResult (refund — отклонённая часть amount)

        Raises:
            ValueError: amount <= 0
            Uninitialized: bootstrap не завершён
            ArithmeticOverflow: tracked supply превысит max_amount
            RejectedPayout: downstream ledger отклонил payout
        """
        validate_positive_amount(amount, "amount")
        logger.debug("%s %d", sender, amount)

        with self.repository.transaction(name="on_incoming_transfer") as tx:
            state = self.repository.load(tx)
            ledger = state.ledger
            if ledger is None:
                raise Uninitialized("Contract uninitialized")

            in_key = ledger.match_side(asset_address)
            if in_key is None:
                logger.warning(
                    "Deposited token address does not belong to liquidity pool: %s", asset_address
                )
                return DepositResult(
                    outcome=DepositOutcome.FOREIGN_ASSET,
                    sender=sender,
                    asset_address=asset_address,
                    amount=amount,
                    refund=amount,
                    payout=0,
                    payout_asset=None,
                    truncation_remainder=0,
                    supply_a=None,
                    supply_b=None,
                    details=f"Foreign asset {asset_address}: refunding {amount}",
                )

            if sender == state.owner:
                new_ledger = self._contribute(ledger, in_key, amount)
                self.repository.write(tx, state.model_copy(update={"ledger": new_ledger}))
                logger.info(
                    "Owner contribution: %d of %s, supply=%d",
                    amount, asset_address, new_ledger.side(in_key).tracked_supply,
                )
                return DepositResult(
                    outcome=DepositOutcome.CONTRIBUTION,
                    sender=sender,
                    asset_address=asset_address,
                    amount=amount,
                    refund=0,
                    payout=0,
                    payout_asset=None,
                    truncation_remainder=0,
                    supply_a=new_ledger.token_a.tracked_supply,
                    supply_b=new_ledger.token_b.tracked_supply,
                    details=f"Owner contribution of {amount} into {in_key.value}",
                )

            return await self._exchange(tx, state, ledger, in_key, sender, amount)

    def _contribute(self, ledger: PoolLedger, in_key: PoolSideKey, amount: int) -> PoolLedger:
        in_side = ledger.side(in_key)
        new_supply = checked_add(in_side.tracked_supply, amount, self.config.max_amount)
        return ledger.with_side_supply(in_key, new_supply)

    async def _exchange(
        self,
        tx: StoreTransaction,
        state: ContractState,
        ledger: PoolLedger,
        in_key: PoolSideKey,
        sender: str,
        amount: int,
    ) -> DepositResult:
        in_side = ledger.side(in_key)
        out_side = ledger.side(in_key.other)

        quote = quote_exchange(
            supply_in=in_side.tracked_supply,
            supply_out=out_side.tracked_supply,
            amount=amount,
            max_value=self.config.max_amount,
        )

        if in_key is PoolSideKey.A:
            new_ledger = ledger.with_supplies(quote.new_supply_in, quote.new_supply_out)
        else:
            new_ledger = ledger.with_supplies(quote.new_supply_out, quote.new_supply_in)
        self.repository.write(tx, state.model_copy(update={"ledger": new_ledger}))

        # payout == 0 тоже отправляется: downstream ledger отклонит его,
        # и транзакция будет отброшена целиком
        try:
            await self.gateway.transfer(out_side.address, sender, quote.payout)
        except RemoteCallError as e:
            logger.warning(
                "Payout of %d %s to %s rejected, rolling back deposit of %d: %s",
                quote.payout, out_side.address, sender, amount, e.reason,
            )
            raise RejectedPayout(
                f"payout of {quote.payout} {out_side.address} to {sender} rejected: {e.reason}",
                asset_address=out_side.address,
                receiver=sender,
                payout=quote.payout,
            ) from e

        logger.info(
            "Exchange: %s sent %d %s, received %d %s",
            sender, amount, in_side.address, quote.payout, out_side.address,
        )
        return DepositResult(
            outcome=DepositOutcome.EXCHANGE,
            sender=sender,
            asset_address=in_side.address,
            amount=amount,
            refund=0,
            payout=quote.payout,
            payout_asset=out_side.address,
            truncation_remainder=quote.remainder,
            supply_a=new_ledger.token_a.tracked_supply,
            supply_b=new_ledger.token_b.tracked_supply,
            details=(
                f"Exchange {amount} {in_key.value} -> {quote.payout} {in_key.other.value}, "
                f"k {quote.product} -> {quote.new_supply_in * quote.new_supply_out}"
            ),
        )
