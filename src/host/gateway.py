"""
AssetLedgerGateway — исходящие host-mediated вызовы к asset ledgers

Пул никогда не обращается к хранилищу других ledgers напрямую: он отправляет
запросы через gateway и продолжает выполнение, когда приходит ответ.

Capabilities:
- fetch_metadata(asset_address) → JSON dict метаданных
- transfer(asset_address, receiver, amount) → перевод от имени вызывающего
  аккаунта; успех или отказ как единое целое
"""

import asyncio
from typing import Any, Dict, Protocol

from src.host.fungible_ledger import InMemoryFungibleLedger, TransferRejected


class RemoteCallError(Exception):
    """Удалённый вызов не выполнен (нет адресата или адресат отклонил запрос)."""

    def __init__(self, address: str, method: str, reason: str):
        self.address = address
        self.method = method
        self.reason = reason
        super().__init__(f"{address}.{method} failed: {reason}")


class AssetLedgerGateway(Protocol):
    """Исходящий транспорт пула к asset ledgers."""

    async def fetch_metadata(self, asset_address: str) -> Dict[str, Any]:
        ...

    async def transfer(self, asset_address: str, receiver: str, amount: int) -> None:
        ...


class LocalAssetNetwork:
    """
    Реестр in-memory asset ledgers по адресу.

    Симулирует адресацию host environment внутри одного процесса.
    """

    def __init__(self) -> None:
        self._ledgers: Dict[str, InMemoryFungibleLedger] = {}

    def add(self, ledger: InMemoryFungibleLedger) -> InMemoryFungibleLedger:
        if ledger.address in self._ledgers:
            raise ValueError(f"ledger {ledger.address} is already registered")
        self._ledgers[ledger.address] = ledger
        return ledger

    def get(self, address: str) -> InMemoryFungibleLedger:
        """
        Raises:
            KeyError: Если по адресу нет ledger
        """
        return self._ledgers[address]

    def gateway(self, caller_id: str) -> "LocalAssetGateway":
        """Gateway, выполняющий вызовы от имени caller_id."""
        return LocalAssetGateway(self, caller_id)


class LocalAssetGateway:
    """AssetLedgerGateway поверх LocalAssetNetwork."""

    def __init__(self, network: LocalAssetNetwork, caller_id: str):
        self._network = network
        self.caller_id = caller_id

    def _resolve(self, address: str, method: str) -> InMemoryFungibleLedger:
        try:
            return self._network.get(address)
        except KeyError:
            raise RemoteCallError(address, method, "no asset ledger at this address") from None

    async def fetch_metadata(self, asset_address: str) -> Dict[str, Any]:
        ledger = self._resolve(asset_address, "fetch_metadata")
        # ответ приходит асинхронно, после передачи управления event loop
        await asyncio.sleep(0)
        return await ledger.fetch_metadata()

    async def transfer(self, asset_address: str, receiver: str, amount: int) -> None:
        ledger = self._resolve(asset_address, "transfer")
        await asyncio.sleep(0)
        try:
            ledger.transfer(self.caller_id, receiver, amount)
        except TransferRejected as e:
            raise RemoteCallError(asset_address, "transfer", str(e)) from e
