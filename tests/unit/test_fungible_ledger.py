"""
Тесты для эталонного asset ledger и LocalAssetNetwork gateway

Проверяет:
1. Mint, регистрацию, балансы
2. Правила отказа transfer (amount == 0, нерегистрированный аккаунт,
   недостаточный баланс, перевод самому себе)
3. transfer_call: возврат отклонённой части и полный возврат при ошибке
4. Gateway: маршрутизация по адресу и RemoteCallError
"""

import asyncio

import pytest

from src.host import (
    InMemoryFungibleLedger,
    LocalAssetNetwork,
    RemoteCallError,
    TransferRejected,
)


@pytest.fixture
def ledger() -> InMemoryFungibleLedger:
    token = InMemoryFungibleLedger("token-a.test", "TokenA", "TKNA")
    token.mint("alice.test", 1_000)
    token.register("bob.test")
    return token


class _Receiver:
    """Получатель transfer_call с фиксированным ответом."""

    def __init__(self, declined=0, error=None):
        self.declined = declined
        self.error = error
        self.calls = []

    async def on_incoming_transfer(self, sender, asset_address, amount):
        self.calls.append((sender, asset_address, amount))
        if self.error is not None:
            raise self.error
        return self.declined


# =============================================================================
# LEDGER
# =============================================================================


class TestInMemoryFungibleLedger:
    """Тесты InMemoryFungibleLedger"""

    def test_mint(self, ledger: InMemoryFungibleLedger) -> None:
        assert ledger.balance_of("alice.test") == 1_000
        assert ledger.total_supply == 1_000
        assert ledger.is_registered("alice.test")

    def test_metadata(self, ledger: InMemoryFungibleLedger) -> None:
        metadata = asyncio.run(ledger.fetch_metadata())
        assert metadata["name"] == "TokenA"
        assert metadata["symbol"] == "TKNA"
        assert metadata["decimals"] == 12
        assert metadata["spec"] == "ft-1.0.0"

    def test_transfer(self, ledger: InMemoryFungibleLedger) -> None:
        ledger.transfer("alice.test", "bob.test", 300)
        assert ledger.balance_of("alice.test") == 700
        assert ledger.balance_of("bob.test") == 300
        assert ledger.total_supply == 1_000

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_amount_rejected(self, ledger: InMemoryFungibleLedger, amount: int) -> None:
        with pytest.raises(TransferRejected, match="positive"):
            ledger.transfer("alice.test", "bob.test", amount)

    def test_unregistered_receiver_rejected(self, ledger: InMemoryFungibleLedger) -> None:
        with pytest.raises(TransferRejected, match="not registered"):
            ledger.transfer("alice.test", "carol.test", 1)
        assert ledger.balance_of("alice.test") == 1_000

    def test_insufficient_balance_rejected(self, ledger: InMemoryFungibleLedger) -> None:
        with pytest.raises(TransferRejected, match="enough balance"):
            ledger.transfer("alice.test", "bob.test", 1_001)

    def test_self_transfer_rejected(self, ledger: InMemoryFungibleLedger) -> None:
        with pytest.raises(TransferRejected, match="different"):
            ledger.transfer("alice.test", "alice.test", 1)


class TestTransferCall:
    """Тесты transfer_call"""

    def test_receiver_keeps_everything(self, ledger: InMemoryFungibleLedger) -> None:
        receiver = _Receiver(declined=0)
        used = asyncio.run(ledger.transfer_call("alice.test", "bob.test", 100, receiver))

        assert used == 100
        assert receiver.calls == [("alice.test", "token-a.test", 100)]
        assert ledger.balance_of("bob.test") == 100

    def test_declined_part_refunded(self, ledger: InMemoryFungibleLedger) -> None:
        used = asyncio.run(ledger.transfer_call("alice.test", "bob.test", 100, _Receiver(declined=40)))

        assert used == 60
        assert ledger.balance_of("alice.test") == 940
        assert ledger.balance_of("bob.test") == 60

    def test_receiver_failure_refunds_all(self, ledger: InMemoryFungibleLedger) -> None:
        receiver = _Receiver(error=RuntimeError("receiver failed"))
        used = asyncio.run(ledger.transfer_call("alice.test", "bob.test", 100, receiver))

        assert used == 0
        assert ledger.balance_of("alice.test") == 1_000
        assert ledger.balance_of("bob.test") == 0

    def test_initial_transfer_rejected(self, ledger: InMemoryFungibleLedger) -> None:
        receiver = _Receiver()
        with pytest.raises(TransferRejected):
            asyncio.run(ledger.transfer_call("alice.test", "carol.test", 100, receiver))
        assert receiver.calls == []


# =============================================================================
# GATEWAY
# =============================================================================


class TestLocalAssetGateway:
    """Тесты LocalAssetNetwork / LocalAssetGateway"""

    def test_fetch_metadata_routes_by_address(self, ledger: InMemoryFungibleLedger) -> None:
        network = LocalAssetNetwork()
        network.add(ledger)
        metadata = asyncio.run(network.gateway("pool.test").fetch_metadata("token-a.test"))
        assert metadata["symbol"] == "TKNA"

    def test_unknown_address(self) -> None:
        gateway = LocalAssetNetwork().gateway("pool.test")
        with pytest.raises(RemoteCallError, match="no asset ledger") as exc_info:
            asyncio.run(gateway.fetch_metadata("nobody.test"))
        assert exc_info.value.address == "nobody.test"
        assert exc_info.value.method == "fetch_metadata"

    def test_transfer_from_caller(self, ledger: InMemoryFungibleLedger) -> None:
        network = LocalAssetNetwork()
        network.add(ledger)
        ledger.mint("pool.test", 50)

        asyncio.run(network.gateway("pool.test").transfer("token-a.test", "bob.test", 20))

        assert ledger.balance_of("pool.test") == 30
        assert ledger.balance_of("bob.test") == 20

    def test_rejected_transfer_wrapped(self, ledger: InMemoryFungibleLedger) -> None:
        network = LocalAssetNetwork()
        network.add(ledger)
        ledger.register("pool.test")

        with pytest.raises(RemoteCallError, match="positive") as exc_info:
            asyncio.run(network.gateway("pool.test").transfer("token-a.test", "bob.test", 0))
        assert isinstance(exc_info.value.__cause__, TransferRejected)

    def test_duplicate_ledger_address(self, ledger: InMemoryFungibleLedger) -> None:
        network = LocalAssetNetwork()
        network.add(ledger)
        with pytest.raises(ValueError, match="already registered"):
            network.add(InMemoryFungibleLedger("token-a.test", "Other", "OTH"))
