"""
LiquidityPoolContract — внешний интерфейс пула ликвидности

Связывает компоненты с host environment:
- BootstrapCoordinator (begin_bootstrap, privileged)
- DepositExchangeEngine (on_incoming_transfer, вызывается asset ledgers)
- InfoProjector (get_pool_info / get_contract_info, read-only)

Мутирующие entry points сериализуются asyncio.Lock: одновременно выполняется
не более одной invocation, включая её точки ожидания (join метаданных и
отправка payout).
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from src.core.domain import ContractState, PoolLedger
from src.host.gateway import AssetLedgerGateway
from src.host.state_store import StateStore
from src.pool.bootstrap import BootstrapCoordinator
from src.pool.config import PoolConfig
from src.pool.errors import AlreadyDeployed, NotDeployed
from src.pool.exchange import DepositExchangeEngine, DepositResult
from src.pool.info import InfoProjector
from src.pool.repository import ContractStateRepository

logger = logging.getLogger(__name__)


class LiquidityPoolContract:
    """
    Двухсторонний пул ликвидности с обменом по постоянному произведению.

    Экземпляр создаётся через deploy (новая запись) или load (существующая).
    """

    def __init__(
        self,
        account_id: str,
        store: StateStore,
        gateway: AssetLedgerGateway,
        config: Optional[PoolConfig] = None,
    ):
        self.account_id = account_id
        self.config = config or PoolConfig()
        self.repository = ContractStateRepository(
            store, account_id, validate_contracts=self.config.validate_contracts
        )
        if not self.repository.exists():
            raise NotDeployed(f"no pool state stored under {account_id!r}")

        self.bootstrap = BootstrapCoordinator(self.repository, gateway, self.config)
        self.engine = DepositExchangeEngine(self.repository, gateway, self.config)
        self.info = InfoProjector(self.repository, validate_contracts=self.config.validate_contracts)
        self._lock = asyncio.Lock()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @classmethod
    def deploy(
        cls,
        account_id: str,
        owner: str,
        store: StateStore,
        gateway: AssetLedgerGateway,
        config: Optional[PoolConfig] = None,
    ) -> "LiquidityPoolContract":
        """
        Создание записи пула с owner и без PoolLedger.

        Raises:
            AlreadyDeployed: Если запись под account_id уже существует
        """
        if store.exists(account_id):
            raise AlreadyDeployed("Already initialized")

        repository = ContractStateRepository(store, account_id)
        with repository.transaction(name="deploy") as tx:
            repository.write(tx, ContractState(owner=owner))

        logger.info("Contract initialized with %s as owner", owner)
        return cls(account_id, store, gateway, config)

    @classmethod
    def load(
        cls,
        account_id: str,
        store: StateStore,
        gateway: AssetLedgerGateway,
        config: Optional[PoolConfig] = None,
    ) -> "LiquidityPoolContract":
        """
        Привязка к существующей записи (например, после рестарта).

        Raises:
            NotDeployed: Если записи нет
        """
        return cls(account_id, store, gateway, config)

    @property
    def owner(self) -> str:
        return self.repository.load().owner

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    async def begin_bootstrap(self, caller: str, token_a: str, token_b: str) -> PoolLedger:
        """Privileged: связывание пула с двумя asset ledgers."""
        async with self._lock:
            return await self.bootstrap.begin_bootstrap(caller, token_a, token_b)

    async def on_incoming_transfer(self, sender: str, asset_address: str, amount: int) -> int:
        """
        Уведомление asset ledger о переводе в пул.

        Returns:
            Отклонённая часть amount (возвращается отправителю)
        """
        result = await self.process_incoming_transfer(sender, asset_address, amount)
        return result.refund

    async def process_incoming_transfer(self, sender: str, asset_address: str, amount: int) -> DepositResult:
        """Как on_incoming_transfer, но с полным DepositResult."""
        async with self._lock:
            return await self.engine.on_incoming_transfer(sender, asset_address, amount)

    def get_pool_info(self) -> Optional[PoolLedger]:
        return self.info.get_pool_info()

    def get_contract_info(self) -> Optional[Dict[str, Any]]:
        return self.info.get_contract_info()
