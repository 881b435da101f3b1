"""
Domain models and value objects.

Contains fundamental domain entities like AssetDescriptor, PoolLedger,
ContractState and the U128 amount type.
"""

from src.core.domain.asset import AssetDescriptor, AssetMetadata
from src.core.domain.pool_ledger import (
    ContractInfo,
    ContractState,
    PoolLedger,
    PoolSide,
    PoolSideKey,
)
from src.core.domain.units import U128, format_u128, parse_u128

__all__ = [
    # Units module
    "U128",
    "parse_u128",
    "format_u128",
    # Asset models
    "AssetMetadata",
    "AssetDescriptor",
    # Pool ledger models
    "PoolSide",
    "PoolSideKey",
    "PoolLedger",
    "ContractState",
    "ContractInfo",
]
