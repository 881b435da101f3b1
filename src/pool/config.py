"""Конфигурация пула ликвидности."""

from dataclasses import dataclass
from typing import Optional

from src.core.math.integer_safeguards import U128_MAX


@dataclass(frozen=True)
class PoolConfig:
    """
    Конфигурация экземпляра пула.

    - controller: аккаунт, которому разрешён begin_bootstrap;
      None означает собственный account id пула (private call)
    - max_amount: верхняя граница tracked supply
    - validate_contracts: проверять ответы fetch_metadata, персистентную
      запись и публичное представление по JSON Schema
    """

    controller: Optional[str] = None
    max_amount: int = U128_MAX
    validate_contracts: bool = True

    def __post_init__(self):
        if isinstance(self.max_amount, bool) or not isinstance(self.max_amount, int):
            raise TypeError(f"max_amount must be an integer, got {self.max_amount!r}")
        if not 0 < self.max_amount <= U128_MAX:
            raise ValueError(f"max_amount must be in (0, U128_MAX], got {self.max_amount}")

    def resolve_controller(self, account_id: str) -> str:
        return self.controller if self.controller is not None else account_id
