"""Type definitions and data models for chain-tokens."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from web3.types import ChecksumAddress

from .exceptions import ValidationError
from .utils import normalise_address

Address = str  # Ethereum address, checksummed on ingestion


@dataclass(frozen=True)
class TokenDescriptor:
    """Static description of an ERC-20 token; identity is the contract address."""

    name: str = field(compare=False)
    symbol: str = field(compare=False)
    address: ChecksumAddress
    oracle_address: ChecksumAddress | None = field(default=None, compare=False)
    image: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", normalise_address(self.address, "address"))
        if self.oracle_address:
            object.__setattr__(
                self, "oracle_address", normalise_address(self.oracle_address, "oracle_address")
            )
        else:
            object.__setattr__(self, "oracle_address", None)

    @property
    def has_oracle(self) -> bool:
        return self.oracle_address is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TokenDescriptor:
        """Construct a descriptor from a JSON-like dictionary."""

        if not isinstance(data, Mapping):
            raise ValidationError("Token entry must be a mapping", field="token", value=data)

        try:
            name = data["name"]
            symbol = data["symbol"]
            address = data["address"]
        except KeyError as exc:
            raise ValidationError(
                f"Token entry is missing '{exc.args[0]}'", field=str(exc.args[0]), value=data
            ) from exc

        return cls(
            name=str(name),
            symbol=str(symbol),
            address=address,
            oracle_address=data.get("oracleAddress") or data.get("oracle_address"),
            image=str(data.get("image") or data.get("icon") or ""),
        )


@dataclass(frozen=True)
class NetworkDescriptor:
    """Static description of a network and its ordered token list."""

    name: str
    native_currency: str
    rpc_url: str
    explorer_url: str
    tokens: tuple[TokenDescriptor, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(self.tokens))

    def token_by_symbol(self, symbol: str) -> TokenDescriptor | None:
        wanted = symbol.upper()
        for token in self.tokens:
            if token.symbol.upper() == wanted:
                return token
        return None

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"

    def address_url(self, address: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/address/{address}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NetworkDescriptor:
        """Construct a network from a JSON-like dictionary."""

        if not isinstance(data, Mapping):
            raise ValidationError("Network entry must be a mapping", field="network", value=data)

        try:
            name = data["name"]
            rpc_url = data.get("rpc") or data["rpc_url"]
        except KeyError as exc:
            raise ValidationError(
                f"Network entry is missing '{exc.args[0]}'", field=str(exc.args[0]), value=data
            ) from exc

        native_currency = data.get("nativeCurrency") or data.get("native_currency") or ""
        explorer_url = data.get("explorer") or data.get("explorer_url") or ""

        return cls(
            name=str(name),
            native_currency=str(native_currency),
            rpc_url=str(rpc_url),
            explorer_url=str(explorer_url),
            tokens=tuple(TokenDescriptor.from_dict(entry) for entry in _iterable(data.get("tokens"))),
        )


@dataclass(frozen=True)
class TokenSnapshot:
    """Balance and USD price read together in one refresh."""

    balance: float
    price: float

    @property
    def value(self) -> float:
        return self.balance * self.price


@dataclass(frozen=True)
class RoundData:
    """Decoded ``latestRoundData`` response of a price oracle."""

    round_id: int
    answer: int
    started_at: int
    updated_at: int
    answered_in_round: int

    @classmethod
    def from_tuple(cls, values: Iterable[Any]) -> RoundData:
        round_id, answer, started_at, updated_at, answered_in_round = (int(v) for v in values)
        return cls(round_id, answer, started_at, updated_at, answered_in_round)


@dataclass(frozen=True)
class TransferArgs:
    """Recipient and human-scaled amount decoded from ``transfer`` calldata."""

    to: ChecksumAddress
    amount: float
    raw_amount: int


@dataclass(frozen=True)
class PendingTransfer:
    """A submitted but unconfirmed token transfer."""

    tx_hash: str
    token: TokenDescriptor
    to: ChecksumAddress
    amount: float
    raw_amount: int
    explorer_url: str | None = None


def _iterable(value: Any) -> Iterable:
    if isinstance(value, list | tuple):
        return value

    if value is None:
        return []

    return [value]
