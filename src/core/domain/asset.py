"""
Asset — Модели внешнего актива (fungible asset ledger)

Immutable Pydantic модели:
- AssetMetadata: ответ удалённого ledger на fetch_metadata
- AssetDescriptor: снапшот идентичности и метаданных актива, фиксируется
  один раз при bootstrap и никогда не перезапрашивается
"""

from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# METADATA (REMOTE REPLY)
# =============================================================================


class AssetMetadata(BaseModel):
    """
    Метаданные fungible актива, как их отдаёт asset ledger.

    Полная совместимость с JSON Schema (contracts/schema/asset_metadata.json).
    """

    spec: str = Field(default="ft-1.0.0", min_length=1, description="Версия стандарта метаданных")
    name: str = Field(..., description="Отображаемое имя актива")
    symbol: str = Field(..., description="Тикер актива")
    decimals: int = Field(..., ge=0, le=255, description="Точность актива (u8)")

    # Опциональные поля стандарта
    icon: Optional[str] = Field(default=None, description="Data URL иконки")
    reference: Optional[str] = Field(default=None, description="Ссылка на off-chain описание")
    reference_hash: Optional[str] = Field(default=None, description="Хеш reference (base64)")

    model_config = {"frozen": True}


# =============================================================================
# DESCRIPTOR (POOL SIDE IDENTITY)
# =============================================================================


class AssetDescriptor(BaseModel):
    """
    Снапшот одного внешнего актива в составе пула.

    name/symbol/decimals копируются из AssetMetadata без изменений.
    """

    address: str = Field(..., min_length=1, description="Адрес ledger, владеющего активом")
    name: str = Field(..., description="Отображаемое имя актива")
    symbol: str = Field(..., description="Тикер актива")
    decimals: int = Field(..., ge=0, le=255, description="Точность актива")

    model_config = {"frozen": True}

    @classmethod
    def from_metadata(cls, address: str, metadata: AssetMetadata) -> "AssetDescriptor":
        """Построение descriptor из адреса и полученных метаданных."""
        return cls(
            address=address,
            name=metadata.name,
            symbol=metadata.symbol,
            decimals=metadata.decimals,
        )
