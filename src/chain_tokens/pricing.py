"""USD price sources: an on-chain oracle or a caller-supplied function."""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from web3 import AsyncWeb3
from web3.contract import AsyncContract

from .constants import ORACLE_DECIMALS, PRICE_ORACLE_ABI
from .exceptions import MissingPriceSourceError
from .types import RoundData, TokenDescriptor
from .utils import from_raw_amount

logger = logging.getLogger(__name__)

FallbackPriceFn = Callable[[int, TokenDescriptor], float | Awaitable[float]]


class PriceSource(ABC):
    """Where an activated token gets its USD price from."""

    @abstractmethod
    async def fetch_price(self, chain_id: int, token: TokenDescriptor) -> float:
        pass


@dataclass(frozen=True)
class OraclePriceSource(PriceSource):
    """Price read from a Chainlink-style aggregator's latest round."""

    contract: AsyncContract

    async def fetch_latest_round(self) -> RoundData:
        return RoundData.from_tuple(await self.contract.functions.latestRoundData().call())

    async def fetch_price(self, chain_id: int, token: TokenDescriptor) -> float:
        round_data = await self.fetch_latest_round()
        price = float(from_raw_amount(round_data.answer, ORACLE_DECIMALS))
        logger.debug(
            "Oracle price for %s on chain %s: %s (round %s)",
            token.symbol,
            chain_id,
            price,
            round_data.round_id,
        )
        return price


@dataclass(frozen=True)
class CallbackPriceSource(PriceSource):
    """Price computed by a caller-supplied function, sync or async."""

    fn: FallbackPriceFn

    async def fetch_price(self, chain_id: int, token: TokenDescriptor) -> float:
        result = self.fn(chain_id, token)
        if inspect.isawaitable(result):
            result = await result
        logger.debug("Fallback price for %s on chain %s: %s", token.symbol, chain_id, result)
        return float(result)


def resolve_price_source(
    web3: AsyncWeb3,
    token: TokenDescriptor,
    fallback_price_fn: FallbackPriceFn | None = None,
) -> PriceSource:
    """Pick the price source for ``token``; the oracle wins when both are available."""

    if token.oracle_address is not None:
        contract = web3.eth.contract(address=token.oracle_address, abi=PRICE_ORACLE_ABI)
        return OraclePriceSource(contract)

    if fallback_price_fn is None:
        raise MissingPriceSourceError(token)

    return CallbackPriceSource(fallback_price_fn)
