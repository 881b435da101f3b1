"""Info Projector — чтение ledger пула для внешних вызовов.

Никаких побочных эффектов. Отсутствие PoolLedger (до bootstrap) — явный
результат None, а не ошибка.
"""

from typing import Any, Dict, Optional

from src.core.contracts import validate_contract_info
from src.core.domain import ContractInfo, PoolLedger
from src.pool.repository import ContractStateRepository


class InfoProjector:
    """Read-only доступ к PoolLedger."""

    def __init__(self, repository: ContractStateRepository, validate_contracts: bool = True):
        self.repository = repository
        self.validate_contracts = validate_contracts

    def get_pool_info(self) -> Optional[PoolLedger]:
        """Снапшот ledger (оба descriptor + tracked supply) или None."""
        return self.repository.load().ledger

    def get_contract_info(self) -> Optional[Dict[str, Any]]:
        """
        Плоское JSON-представление ledger или None.

        Supplies — десятичные строки (wire-формат asset ledgers).
        """
        ledger = self.get_pool_info()
        if ledger is None:
            return None

        data = ContractInfo.from_ledger(ledger).model_dump(mode="json")
        if self.validate_contracts:
            validate_contract_info(data)
        return data
