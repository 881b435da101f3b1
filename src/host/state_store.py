"""
StateStore — персистентное key/value хранилище host environment

Хост гарантирует для каждой invocation:
- Все записи invocation либо коммитятся вместе, либо не коммитятся вовсе
- Записи буферизуются в StoreTransaction и становятся видимы другим
  invocations только после успешного выхода из блока `with`
- Любое исключение внутри блока отбрасывает буфер и пробрасывается дальше

Транзакция привязана к одному ключу (account id экземпляра). На один ключ
открыта не более чем одна транзакция; транзакции разных ключей независимы,
поэтому несколько пулов могут делить одно хранилище.

Значения — непрозрачные bytes; сериализацией занимается вызывающий код.
"""

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class StoreTransaction:
    """
    Буфер записи одного ключа в пределах одной invocation.

    Чтение внутри транзакции видит собственную незакоммиченную запись.
    """

    def __init__(self, store: "StateStore", key: str, name: Optional[str] = None):
        self._store = store
        self.key = key
        self.name = name or "tx"
        self._value: Optional[bytes] = None
        self._closed = False

    def read(self) -> Optional[bytes]:
        self._ensure_open()
        if self._value is not None:
            return self._value
        return self._store.read(self.key)

    def write(self, value: bytes) -> None:
        self._ensure_open()
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"store values must be bytes, got {type(value).__name__}")
        self._value = bytes(value)

    @property
    def dirty(self) -> bool:
        return self._value is not None

    def __enter__(self) -> "StoreTransaction":
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            # исключение внутри invocation: отбрасываем буфер и пробрасываем
            self._abort()
            return False
        self._commit()
        return False

    def _commit(self) -> None:
        if self._value is not None:
            self._store._apply(self.key, self._value)
        logger.debug("tx=%s key=%s committed dirty=%s", self.name, self.key, self.dirty)
        self._close()

    def _abort(self) -> None:
        logger.debug("tx=%s key=%s aborted, discarded dirty=%s", self.name, self.key, self.dirty)
        self._value = None
        self._close()

    def _close(self) -> None:
        self._closed = True
        self._store._release(self.key)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"transaction {self.name} on {self.key} is already closed")


class StateStore:
    """In-memory персистентное хранилище с транзакциями уровня invocation."""

    def __init__(self) -> None:
        self._records: Dict[str, bytes] = {}
        self._active: Dict[str, StoreTransaction] = {}

    def read(self, key: str) -> Optional[bytes]:
        """Чтение закоммиченного значения (None если ключа нет)."""
        return self._records.get(key)

    def exists(self, key: str) -> bool:
        return key in self._records

    def transaction(self, key: str, name: Optional[str] = None) -> StoreTransaction:
        """
        Открытие транзакции на ключ.

        Raises:
            RuntimeError: Если на этот ключ уже открыта транзакция
        """
        active = self._active.get(key)
        if active is not None:
            raise RuntimeError(
                f"transaction {active.name} on {key} is still open, invocations must be serialized"
            )
        tx = StoreTransaction(self, key, name)
        self._active[key] = tx
        return tx

    def _apply(self, key: str, value: bytes) -> None:
        self._records[key] = value

    def _release(self, key: str) -> None:
        self._active.pop(key, None)
