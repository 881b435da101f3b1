"""
Contract Validation Module

Модуль для валидации JSON контрактов пула ликвидности.
"""

from .validators import (
    SCHEMA_DIR,
    SchemaLoader,
    get_validator,
    validate_asset_metadata,
    validate_contract_info,
    validate_contract_state,
)

__all__ = [
    "SCHEMA_DIR",
    "SchemaLoader",
    "get_validator",
    "validate_asset_metadata",
    "validate_contract_info",
    "validate_contract_state",
]
