"""chain-tokens - activate the configured ERC-20 tokens of a signer's network.

Given a signer and a registry of networks, resolves the active chain, binds a
handle per token and reads balances and USD prices through web3.py.
"""

from .activation import (
    ActivatedNetwork,
    activate_network,
    activate_tokens,
    resolve_active_network,
)
from .config import SignerConfig
from .connections import Web3Signer
from .exceptions import (
    ChainTokensError,
    MissingPriceSourceError,
    NetworkError,
    NoProviderError,
    UnsupportedNetworkError,
    ValidationError,
)
from .pricing import (
    CallbackPriceSource,
    FallbackPriceFn,
    OraclePriceSource,
    PriceSource,
    resolve_price_source,
)
from .registry import DEFAULT_NETWORKS, NetworkRegistry
from .tokens import ActivatedToken, TokenBinding, bind_token
from .types import (
    NetworkDescriptor,
    PendingTransfer,
    RoundData,
    TokenDescriptor,
    TokenSnapshot,
    TransferArgs,
)
from .utils import from_raw_amount, join_all, to_raw_amount

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "activate_tokens",
    "activate_network",
    "resolve_active_network",
    "ActivatedNetwork",
    "ActivatedToken",
    "TokenBinding",
    "bind_token",
    # Registry and configuration
    "NetworkRegistry",
    "DEFAULT_NETWORKS",
    "SignerConfig",
    "Web3Signer",
    # Price sources
    "PriceSource",
    "OraclePriceSource",
    "CallbackPriceSource",
    "FallbackPriceFn",
    "resolve_price_source",
    # Types
    "TokenDescriptor",
    "NetworkDescriptor",
    "TokenSnapshot",
    "RoundData",
    "TransferArgs",
    "PendingTransfer",
    # Exceptions
    "ChainTokensError",
    "NoProviderError",
    "NetworkError",
    "UnsupportedNetworkError",
    "MissingPriceSourceError",
    "ValidationError",
    # Utility functions
    "to_raw_amount",
    "from_raw_amount",
    "join_all",
]
