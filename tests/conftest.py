from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest
from hexbytes import HexBytes

from chain_tokens.connections import Web3Signer
from chain_tokens.types import NetworkDescriptor, TokenDescriptor

SIGNER_ADDRESS = "0x1111111111111111111111111111111111111111"
RECIPIENT_ADDRESS = "0x2222222222222222222222222222222222222222"
ORACLE_TOKEN_ADDRESS = "0x3333333333333333333333333333333333333333"
ORACLE_ADDRESS = "0x4444444444444444444444444444444444444444"
PLAIN_TOKEN_ADDRESS = "0x5555555555555555555555555555555555555555"
TX_HASH = HexBytes(b"\xab" * 32)


class DummyCall:
    def __init__(self, fn: Callable[[], Any]) -> None:
        self._fn = fn

    async def call(self) -> Any:
        return self._fn()

    async def transact(self, tx: dict[str, Any] | None = None) -> Any:
        return self._fn()


class DummyContract:
    """Token or price oracle contract backed by plain attributes."""

    def __init__(
        self,
        address: str,
        *,
        decimals: int = 18,
        balance: int = 0,
        answer: int = 0,
    ) -> None:
        self.address = address
        self.decimals = decimals
        self.balance = balance
        self.answer = answer
        self.round_id = 1
        self.balance_error: Exception | None = None
        self.price_error: Exception | None = None
        self.decimals_error: Exception | None = None
        self.decimals_calls = 0
        self.balance_queries: list[str] = []
        self.transfers: list[tuple[str, int]] = []
        self.functions = SimpleNamespace(
            decimals=lambda: DummyCall(self._decimals),
            balanceOf=lambda owner: DummyCall(lambda: self._balance_of(owner)),
            latestRoundData=lambda: DummyCall(self._round_data),
            transfer=lambda to, amount: DummyCall(lambda: self._transfer(to, amount)),
        )

    def _decimals(self) -> int:
        self.decimals_calls += 1
        if self.decimals_error is not None:
            raise self.decimals_error
        return self.decimals

    def _balance_of(self, owner: str) -> int:
        self.balance_queries.append(owner)
        if self.balance_error is not None:
            raise self.balance_error
        return self.balance

    def _round_data(self) -> tuple[int, int, int, int, int]:
        if self.price_error is not None:
            raise self.price_error
        return (self.round_id, self.answer, 1_700_000_000, 1_700_000_060, self.round_id)

    def _transfer(self, to: str, amount: int) -> HexBytes:
        self.transfers.append((to, amount))
        return TX_HASH


class DummyEth:
    def __init__(self, chain_id: int, contracts: dict[str, DummyContract]) -> None:
        self._chain_id = chain_id
        self.contracts = contracts
        self.contract_requests: list[str] = []

    @property
    def chain_id(self) -> Any:
        return self._read_chain_id()

    async def _read_chain_id(self) -> int:
        return self._chain_id

    def contract(self, address: str, abi: Any) -> DummyContract:
        self.contract_requests.append(address)
        if address not in self.contracts:
            self.contracts[address] = DummyContract(address)
        return self.contracts[address]


class DummyWeb3:
    def __init__(self, chain_id: int, contracts: dict[str, DummyContract] | None = None) -> None:
        self.eth = DummyEth(chain_id, contracts if contracts is not None else {})


def make_signer(web3: DummyWeb3 | None) -> Web3Signer:
    return Web3Signer(SimpleNamespace(address=SIGNER_ADDRESS), web3)  # type: ignore[arg-type]


@pytest.fixture
def oracle_token() -> TokenDescriptor:
    return TokenDescriptor(
        name="Wrapped Ether",
        symbol="WETH",
        address=ORACLE_TOKEN_ADDRESS,
        oracle_address=ORACLE_ADDRESS,
        image="https://example.com/weth.svg",
    )


@pytest.fixture
def plain_token() -> TokenDescriptor:
    return TokenDescriptor(
        name="Magic Internet Money",
        symbol="MIM",
        address=PLAIN_TOKEN_ADDRESS,
        image="https://example.com/mim.png",
    )


@pytest.fixture
def network(oracle_token: TokenDescriptor, plain_token: TokenDescriptor) -> NetworkDescriptor:
    return NetworkDescriptor(
        name="Binance Smart Chain",
        native_currency="BNB",
        rpc_url="https://rpc.example.com/bsc",
        explorer_url="https://bscscan.com/",
        tokens=(oracle_token, plain_token),
    )


@pytest.fixture
def contracts() -> dict[str, DummyContract]:
    return {
        ORACLE_TOKEN_ADDRESS: DummyContract(
            ORACLE_TOKEN_ADDRESS, decimals=18, balance=1_500_000_000_000_000_000
        ),
        ORACLE_ADDRESS: DummyContract(ORACLE_ADDRESS, answer=123_456_789_000),
        PLAIN_TOKEN_ADDRESS: DummyContract(PLAIN_TOKEN_ADDRESS, decimals=6, balance=2_500_000),
    }


@pytest.fixture
def web3(contracts: dict[str, DummyContract]) -> DummyWeb3:
    return DummyWeb3(56, contracts)


@pytest.fixture
def signer(web3: DummyWeb3) -> Web3Signer:
    return make_signer(web3)
