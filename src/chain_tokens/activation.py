"""Entry points that activate every configured token of a signer's network."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .connections import Web3Signer
from .exceptions import UnsupportedNetworkError
from .pricing import FallbackPriceFn
from .registry import NetworkRegistry
from .tokens import ActivatedToken, bind_token
from .types import NetworkDescriptor, TokenSnapshot
from .utils import join_all

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivatedNetwork:
    """A registry network together with the activated handles of its tokens."""

    chain_id: int
    network: NetworkDescriptor
    tokens: tuple[ActivatedToken, ...]

    @property
    def name(self) -> str:
        return self.network.name

    @property
    def native_currency(self) -> str:
        return self.network.native_currency

    @property
    def explorer_url(self) -> str:
        return self.network.explorer_url

    @property
    def total_value(self) -> float:
        return sum(token.value for token in self.tokens)

    def token_by_symbol(self, symbol: str) -> ActivatedToken | None:
        wanted = symbol.upper()
        for token in self.tokens:
            if token.symbol.upper() == wanted:
                return token
        return None

    async def update(self) -> list[TokenSnapshot]:
        """Refresh every token concurrently.

        All reads finish before any token is updated, so a failure leaves every
        token with its previous balance and price.
        """

        snapshots = await join_all(token.fetch_snapshot() for token in self.tokens)
        for token, snapshot in zip(self.tokens, snapshots):
            token.commit(snapshot)
        return snapshots


async def resolve_active_network(
    signer: Web3Signer,
    registry: Mapping[int, NetworkDescriptor],
) -> tuple[int, NetworkDescriptor]:
    """Return the signer's chain id and its registry entry."""

    chain_id = await signer.get_chain_id()
    if isinstance(registry, NetworkRegistry):
        return chain_id, registry.resolve(chain_id)

    network = registry.get(chain_id)
    if network is None:
        raise UnsupportedNetworkError(chain_id)
    return chain_id, network


async def activate_network(
    signer: Web3Signer,
    registry: Mapping[int, NetworkDescriptor],
    fallback_price_fn: FallbackPriceFn | None = None,
) -> ActivatedNetwork:
    """Activate all tokens of the signer's network.

    Every token is bound before any chain read is issued, so a token without
    a price source fails the call up front. Initialisation then runs
    concurrently across tokens and the first failure aborts the batch.
    """

    chain_id, network = await resolve_active_network(signer, registry)

    bindings = [
        bind_token(signer, chain_id, token, fallback_price_fn, network=network)
        for token in network.tokens
    ]
    tokens = await join_all(ActivatedToken.initialize(binding) for binding in bindings)

    logger.info("Activated %d tokens on %s (chain id %s)", len(tokens), network.name, chain_id)
    return ActivatedNetwork(chain_id=chain_id, network=network, tokens=tuple(tokens))


async def activate_tokens(
    signer: Web3Signer,
    registry: Mapping[int, NetworkDescriptor],
    fallback_price_fn: FallbackPriceFn | None = None,
) -> list[ActivatedToken]:
    """Return activated handles for the signer's network, in registry order."""

    activated = await activate_network(signer, registry, fallback_price_fn)
    return list(activated.tokens)
