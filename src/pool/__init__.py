"""Pool — state machine пула ликвидности.

- Bootstrap Coordinator: двухфазный bootstrap с join двух запросов метаданных
- Deposit/Exchange Engine: классификация входящих переводов и обмен x * y = k
- Info Projector: read-only представление ledger
- LiquidityPoolContract: внешний интерфейс, связывающий компоненты с host
"""

from .bootstrap import BootstrapCoordinator, PendingBootstrap
from .config import PoolConfig
from .contract import LiquidityPoolContract
from .errors import (
    AlreadyBootstrapped,
    AlreadyDeployed,
    ArithmeticOverflow,
    BootstrapJoinFailure,
    DuplicateAsset,
    NotDeployed,
    PoolError,
    RejectedPayout,
    Unauthorized,
    Uninitialized,
)
from .exchange import DepositExchangeEngine, DepositOutcome, DepositResult
from .info import InfoProjector
from .repository import ContractStateRepository

__all__ = [
    "LiquidityPoolContract",
    "PoolConfig",
    "BootstrapCoordinator",
    "PendingBootstrap",
    "DepositExchangeEngine",
    "DepositOutcome",
    "DepositResult",
    "InfoProjector",
    "ContractStateRepository",
    # Errors
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
