"""Host — execution environment, на который опирается пул.

- StateStore: персистентность с транзакциями уровня invocation
- AssetLedgerGateway: исходящие вызовы к asset ledgers
- InMemoryFungibleLedger: эталонный asset ledger для симуляций и тестов
"""

from .fungible_ledger import InMemoryFungibleLedger, TransferReceiver, TransferRejected
from .gateway import AssetLedgerGateway, LocalAssetGateway, LocalAssetNetwork, RemoteCallError
from .state_store import StateStore, StoreTransaction

__all__ = [
    "StateStore",
    "StoreTransaction",
    "AssetLedgerGateway",
    "LocalAssetNetwork",
    "LocalAssetGateway",
    "RemoteCallError",
    "InMemoryFungibleLedger",
    "TransferReceiver",
    "TransferRejected",
]
