"""Bootstrap Coordinator — двухфазное связывание пула с двумя asset ledgers.

Фаза 1 (begin_bootstrap):
- Проверка controller и guard (PoolLedger ещё не существует)
- Два независимых запроса fetch_metadata, одновременно в полёте
- Join: продолжение вызывается только когда ОБА запроса завершились
  (не race: первый завершившийся ничего не запускает)

Фаза 2 (complete_bootstrap):
- Создание PoolLedger с нулевыми supplies и запись в StateStore
- Единственное место, где PoolLedger создаётся

До завершения join ничего не записывается. При ошибке join guard остаётся
открытым, owner может повторить вызов. Автоматических повторов нет.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from src.core.contracts import validate_asset_metadata
from src.core.domain import AssetMetadata, PoolLedger
from src.host.gateway import AssetLedgerGateway
from src.pool.config import PoolConfig
from src.pool.errors import (
    AlreadyBootstrapped,
    BootstrapJoinFailure,
    DuplicateAsset,
    Unauthorized,
)
from src.pool.repository import ContractStateRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingBootstrap:
    """Адреса активов, ожидающие join. Никогда не персистится."""

    token_a: str
    token_b: str


class BootstrapCoordinator:
    """Coordinator двухфазного bootstrap."""

    def __init__(
        self,
        repository: ContractStateRepository,
        gateway: AssetLedgerGateway,
        config: Optional[PoolConfig] = None,
    ):
        self.repository = repository
        self.gateway = gateway
        self.config = config or PoolConfig()

    @property
    def controller(self) -> str:
        return self.config.resolve_controller(self.repository.account_id)

    async def begin_bootstrap(self, caller: str, token_a: str, token_b: str) -> PoolLedger:
        """
        Запуск bootstrap.

        Args:
            caller: Аккаунт, вызывающий операцию (должен быть controller)
            token_a: Адрес ledger актива A
            token_b: Адрес ledger актива B

        Returns:
            Созданный PoolLedger

        Raises:
            Unauthorized: caller != controller
            AlreadyBootstrapped: PoolLedger уже существует
            DuplicateAsset: token_a == token_b
            BootstrapJoinFailure: один или оба запроса метаданных упали
        """
        if caller != self.controller:
            raise Unauthorized(f"begin_bootstrap is restricted to {self.controller!r}, called by {caller!r}")

        if self.repository.load().ledger is not None:
            raise AlreadyBootstrapped("Already initialized")

        if token_a == token_b:
            raise DuplicateAsset(f"pool sides must be distinct assets, got {token_a!r} twice")

        pending = PendingBootstrap(token_a=token_a, token_b=token_b)
        logger.info("Bootstrap started: token_a=%s token_b=%s", token_a, token_b)

        metadata_a, metadata_b = await self._join(pending)
        return self.complete_bootstrap(pending, metadata_a, metadata_b)

    def complete_bootstrap(
        self,
        pending: PendingBootstrap,
        metadata_a: AssetMetadata,
        metadata_b: AssetMetadata,
    ) -> PoolLedger:
        """
        Продолжение join: создание и запись PoolLedger.

        Guard перепроверяется внутри транзакции.
        """
        with self.repository.transaction(name="complete_bootstrap") as tx:
            state = self.repository.load(tx)
            if state.ledger is not None:
                raise AlreadyBootstrapped("Already initialized")

            ledger = PoolLedger.create(pending.token_a, metadata_a, pending.token_b, metadata_b)
            self.repository.write(tx, state.model_copy(update={"ledger": ledger}))

        logger.info("Bootstrap completed: ticker=%s decimals=%d", ledger.ticker, ledger.decimals)
        return ledger

    async def _join(self, pending: PendingBootstrap) -> tuple[AssetMetadata, AssetMetadata]:
        # return_exceptions=True: ждём оба ответа, даже если один уже упал
        results = await asyncio.gather(
            self._fetch_metadata(pending.token_a),
            self._fetch_metadata(pending.token_b),
            return_exceptions=True,
        )

        failed = []
        for address, result in zip((pending.token_a, pending.token_b), results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                failed.append((address, result))

        if failed:
            reasons = "; ".join(f"{address}: {error}" for address, error in failed)
            logger.warning("Bootstrap join failed, no state written: %s", reasons)
            raise BootstrapJoinFailure(
                f"metadata fetch failed: {reasons}",
                failed_addresses=tuple(address for address, _ in failed),
            ) from failed[0][1]

        return results[0], results[1]

    async def _fetch_metadata(self, address: str) -> AssetMetadata:
        raw = await self.gateway.fetch_metadata(address)
        if self.config.validate_contracts:
            validate_asset_metadata(raw)
        return AssetMetadata.model_validate(raw)
