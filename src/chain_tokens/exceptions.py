"""Exception hierarchy for chain-tokens."""

from typing import Any


class ChainTokensError(Exception):
    """Base exception for all chain-tokens errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class NoProviderError(ChainTokensError):
    """Raised when a signer has no connected provider."""

    def __init__(self, message: str = "Signer must have a provider", details: dict | None = None):
        super().__init__(message, details)


class NetworkError(ChainTokensError):
    """Raised when an RPC endpoint cannot be reached."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class UnsupportedNetworkError(ChainTokensError, KeyError):
    """Raised when a chain id is not present in the network registry."""

    def __init__(self, chain_id: int, details: dict | None = None):
        super().__init__(f"Network not supported: chain id {chain_id}", details)
        self.chain_id = chain_id


class MissingPriceSourceError(ChainTokensError):
    """Raised when a token has neither a price oracle nor a fallback price function."""

    def __init__(self, token: Any, details: dict | None = None):
        symbol = getattr(token, "symbol", token)
        super().__init__(
            f"Token {symbol} has no oracle address and no fallback price function was given",
            details,
        )
        self.token = token


class ValidationError(ChainTokensError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value
