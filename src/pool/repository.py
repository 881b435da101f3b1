"""
ContractStateRepository — чтение и запись единственной записи пула.

Запись хранится в StateStore под account id пула как JSON bytes
(pydantic model_dump_json), при каждом чтении проходит валидацию
JSON Schema (опционально) и pydantic.
"""

import json
from typing import Optional

from src.core.contracts import validate_contract_state
from src.core.domain import ContractState
from src.host.state_store import StateStore, StoreTransaction
from src.pool.errors import NotDeployed


class ContractStateRepository:
    """Доступ к записи ContractState одного экземпляра пула."""

    def __init__(self, store: StateStore, account_id: str, validate_contracts: bool = True):
        self.store = store
        self.account_id = account_id
        self.validate_contracts = validate_contracts

    def exists(self) -> bool:
        return self.store.exists(self.account_id)

    def transaction(self, name: Optional[str] = None) -> StoreTransaction:
        return self.store.transaction(self.account_id, name=name)

    def load(self, tx: Optional[StoreTransaction] = None) -> ContractState:
        """
        Чтение записи (внутри транзакции — с учётом её незакоммиченных записей).

        Raises:
            NotDeployed: Если записи нет
        """
        raw = tx.read() if tx is not None else self.store.read(self.account_id)
        if raw is None:
            raise NotDeployed(f"no pool state stored under {self.account_id!r}")
        return self.decode(raw)

    def write(self, tx: StoreTransaction, state: ContractState) -> None:
        tx.write(self.encode(state))

    def encode(self, state: ContractState) -> bytes:
        return state.model_dump_json().encode("utf-8")

    def decode(self, raw: bytes) -> ContractState:
        if self.validate_contracts:
            validate_contract_state(json.loads(raw))
        return ContractState.model_validate_json(raw)
