"""Read-only registry of supported networks keyed by chain id."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .exceptions import UnsupportedNetworkError, ValidationError
from .types import NetworkDescriptor, TokenDescriptor

logger = logging.getLogger(__name__)


class NetworkRegistry(Mapping[int, NetworkDescriptor]):
    """Immutable mapping from chain id to network metadata.

    Lookups of unknown chain ids raise :class:`UnsupportedNetworkError`, which
    is also a ``KeyError`` so ``in`` and ``.get`` behave like any mapping.
    """

    def __init__(self, networks: Mapping[int, NetworkDescriptor]) -> None:
        entries: dict[int, NetworkDescriptor] = {}
        for chain_id, network in networks.items():
            if not isinstance(network, NetworkDescriptor):
                raise ValidationError(
                    "Registry values must be NetworkDescriptor instances",
                    field="network",
                    value=network,
                )
            entries[_coerce_chain_id(chain_id)] = network
        self._networks = MappingProxyType(entries)

    def __getitem__(self, chain_id: int) -> NetworkDescriptor:
        try:
            return self._networks[chain_id]
        except KeyError:
            raise UnsupportedNetworkError(chain_id) from None

    def __iter__(self) -> Iterator[int]:
        return iter(self._networks)

    def __len__(self) -> int:
        return len(self._networks)

    def __repr__(self) -> str:
        return f"NetworkRegistry(chain_ids={sorted(self._networks)})"

    def resolve(self, chain_id: int) -> NetworkDescriptor:
        """Return the network for ``chain_id`` or raise UnsupportedNetworkError."""

        network = self[chain_id]
        logger.debug("Resolved chain id %s to %s", chain_id, network.name)
        return network

    @classmethod
    def from_dict(cls, data: Mapping[Any, Any]) -> NetworkRegistry:
        """Build a registry from JSON-like configuration.

        Keys may be integers or numeric strings (JSON object keys are always
        strings); values are network entries accepted by
        :meth:`NetworkDescriptor.from_dict`.
        """

        if not isinstance(data, Mapping):
            raise ValidationError("Registry configuration must be a mapping", value=data)

        networks = {
            _coerce_chain_id(chain_id): NetworkDescriptor.from_dict(entry)
            for chain_id, entry in data.items()
        }
        logger.info("Loaded network registry with %d networks", len(networks))
        return cls(networks)


def _coerce_chain_id(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("Chain id must be an integer", field="chain_id", value=value)
    try:
        if isinstance(value, str):
            return int(value.strip(), 0)
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            "Chain id must be an integer", field="chain_id", value=value
        ) from exc


DEFAULT_NETWORKS = NetworkRegistry(
    {
        56: NetworkDescriptor(
            name="Binance Smart Chain",
            native_currency="BNB",
            rpc_url="https://rpc.ankr.com/bsc",
            explorer_url="https://bscscan.com/",
            tokens=(
                TokenDescriptor(
                    name="Binance-Peg BUSD Token",
                    symbol="BUSD",
                    address="0xe9e7CEA3DedcA5984780Bafc599bD69ADd087D56",
                    oracle_address="0xcBb98864Ef56E9042e7d2efef76141f15731B82f",
                    image="https://cryptologos.cc/logos/binance-usd-busd-logo.svg",
                ),
                TokenDescriptor(
                    name="Binance-Peg Ethereum Token",
                    symbol="ETH",
                    address="0x2170Ed0880ac9A755fd29B2688956BD959F933F8",
                    oracle_address="0x9ef1B8c0E4F7dc8bF5719Ea496883DC6401d5b2e",
                    image="https://cryptologos.cc/logos/ethereum-eth-logo.svg",
                ),
                TokenDescriptor(
                    name="Binance-Peg USD COIN",
                    symbol="USDC",
                    address="0x8AC76a51cc950d9822D68b83fE1Ad97B32Cd580d",
                    oracle_address="0x51597f405303C4377E36123cBc172b13269EA163",
                    image="https://cryptologos.cc/logos/usd-coin-usdc-logo.svg",
                ),
            ),
        ),
        43114: NetworkDescriptor(
            name="Avalanche C-Chain",
            native_currency="AVAX",
            rpc_url="https://api.avax.network/ext/bc/C/rpc",
            explorer_url="https://snowtrace.io/",
            tokens=(
                TokenDescriptor(
                    name="USD Coin",
                    symbol="USDC",
                    address="0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E",
                    oracle_address="0xF096872672F44d6EBA71458D74fe67F9a77a23B9",
                    image="https://cryptologos.cc/logos/usd-coin-usdc-logo.svg",
                ),
                TokenDescriptor(
                    name="Magic Internet Money",
                    symbol="MIM",
                    address="0x130966628846BFd36ff31a822705796e8cb8C18D",
                    image="https://s2.coinmarketcap.com/static/img/coins/200x200/162.png",
                ),
            ),
        ),
    }
)
