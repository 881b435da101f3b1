"""
PoolLedger — Модель персистентного состояния пула ликвидности

Immutable Pydantic модели:
- PoolSide: AssetDescriptor + tracked_supply одной стороны пула
- PoolLedger: две стороны пула + производные поля (ticker, decimals)
- ContractState: единственная персистентная запись (owner + optional PoolLedger)
- ContractInfo: плоское публичное представление для внешних вызовов

Все изменения ledger создают новый экземпляр (model_copy), исходный
экземпляр никогда не мутирует. Это позволяет откатить invocation,
просто не записав новый экземпляр в store.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .asset import AssetDescriptor, AssetMetadata
from .units import U128


# =============================================================================
# ENUMS
# =============================================================================


class PoolSideKey(str, Enum):
    """Сторона пула."""

    A = "token_a"
    B = "token_b"

    @property
    def other(self) -> "PoolSideKey":
        """Противоположная сторона."""
        return PoolSideKey.B if self is PoolSideKey.A else PoolSideKey.A


# =============================================================================
# NESTED MODELS
# =============================================================================


class PoolSide(BaseModel):
    """Одна сторона пула: descriptor актива и его tracked supply."""

    descriptor: AssetDescriptor = Field(..., description="Descriptor актива стороны")
    tracked_supply: U128 = Field(default=0, description="Учтённый пулом баланс актива")

    model_config = {"frozen": True}

    @property
    def address(self) -> str:
        return self.descriptor.address


# =============================================================================
# POOL LEDGER
# =============================================================================


class PoolLedger(BaseModel):
    """
    Ledger пула: две стороны с tracked supply.

    Создаётся ровно один раз — при успешном завершении bootstrap.
    Адреса сторон обязаны различаться.
    """

    token_a: PoolSide = Field(..., description="Сторона A")
    token_b: PoolSide = Field(..., description="Сторона B")

    # Производные поля (фиксируются при создании)
    ticker: str = Field(..., min_length=1, description="Тикер пула '<a>-<b>-LP'")
    decimals: int = Field(..., ge=0, description="Сумма точностей обоих активов")

    model_config = {"frozen": True}

    @field_validator("token_b")
    @classmethod
    def validate_distinct_assets(cls, v: PoolSide, info) -> PoolSide:
        """Проверка, что стороны пула ссылаются на разные asset ledgers."""
        if "token_a" in info.data and info.data["token_a"].address == v.address:
            raise ValueError(f"pool sides must reference distinct assets, got {v.address!r} twice")
        return v

    @classmethod
    def create(
        cls,
        token_a: str,
        metadata_a: AssetMetadata,
        token_b: str,
        metadata_b: AssetMetadata,
    ) -> "PoolLedger":
        """
        Построение нового ledger с нулевыми supplies по обеим сторонам.

        Args:
            token_a: Адрес ledger актива A
            metadata_a: Метаданные актива A
            token_b: Адрес ledger актива B
            metadata_b: Метаданные актива B

        Returns:
            PoolLedger с tracked_supply == 0 на обеих сторонах
        """
        return cls(
            token_a=PoolSide(descriptor=AssetDescriptor.from_metadata(token_a, metadata_a)),
            token_b=PoolSide(descriptor=AssetDescriptor.from_metadata(token_b, metadata_b)),
            ticker=f"{token_a}-{token_b}-LP",
            decimals=metadata_a.decimals + metadata_b.decimals,
        )

    def side(self, key: PoolSideKey) -> PoolSide:
        """Сторона пула по ключу."""
        return self.token_a if key is PoolSideKey.A else self.token_b

    def match_side(self, asset_address: str) -> Optional[PoolSideKey]:
        """
        Классификация адреса актива.

        Returns:
            PoolSideKey стороны, если адрес принадлежит пулу, иначе None
        """
        if asset_address == self.token_a.address:
            return PoolSideKey.A
        if asset_address == self.token_b.address:
            return PoolSideKey.B
        return None

    def with_supplies(self, supply_a: int, supply_b: int) -> "PoolLedger":
        """
        Новый экземпляр ledger с обновлёнными supplies.

        Значения проходят полную валидацию U128 (model_validate), а не
        просто копируются.
        """
        data = self.model_dump()
        data["token_a"]["tracked_supply"] = supply_a
        data["token_b"]["tracked_supply"] = supply_b
        return PoolLedger.model_validate(data)

    def with_side_supply(self, key: PoolSideKey, supply: int) -> "PoolLedger":
        """Новый экземпляр ledger с обновлённым supply одной стороны."""
        if key is PoolSideKey.A:
            return self.with_supplies(supply, self.token_b.tracked_supply)
        return self.with_supplies(self.token_a.tracked_supply, supply)


# =============================================================================
# PERSISTED RECORD
# =============================================================================


class ContractState(BaseModel):
    """
    Единственная персистентная запись пула (ключ — account id пула).

    owner существует с момента deploy, ledger — только после bootstrap.
    """

    owner: str = Field(..., min_length=1, description="Привилегированный контрибьютор")
    ledger: Optional[PoolLedger] = Field(default=None, description="Ledger пула (None до bootstrap)")

    model_config = {"frozen": True}


# =============================================================================
# PUBLIC VIEW
# =============================================================================


class ContractInfo(BaseModel):
    """
    Плоское публичное представление ledger пула.

    Полная совместимость с JSON Schema (contracts/schema/contract_info.json).
    Supplies в JSON mode сериализуются как десятичные строки.
    """

    token_a_id: str = Field(..., min_length=1)
    token_a_name: str
    token_a_symbol: str
    token_a_supply: U128
    token_a_decimals: int = Field(..., ge=0, le=255)

    token_b_id: str = Field(..., min_length=1)
    token_b_name: str
    token_b_symbol: str
    token_b_supply: U128
    token_b_decimals: int = Field(..., ge=0, le=255)

    model_config = {"frozen": True}

    @classmethod
    def from_ledger(cls, ledger: PoolLedger) -> "ContractInfo":
        a, b = ledger.token_a, ledger.token_b
        return cls(
            token_a_id=a.address,
            token_a_name=a.descriptor.name,
            token_a_symbol=a.descriptor.symbol,
            token_a_supply=a.tracked_supply,
            token_a_decimals=a.descriptor.decimals,
            token_b_id=b.address,
            token_b_name=b.descriptor.name,
            token_b_symbol=b.descriptor.symbol,
            token_b_supply=b.tracked_supply,
            token_b_decimals=b.descriptor.decimals,
        )
