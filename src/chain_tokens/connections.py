"""Signer wiring: an eth-account key bound to an async Web3 provider."""

from __future__ import annotations

import logging
from typing import Any, cast

from aiohttp import ClientTimeout
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import ChecksumAddress

from .config import DEFAULT_REQUEST_TIMEOUT, SignerConfig
from .exceptions import NetworkError, NoProviderError, ValidationError
from .types import NetworkDescriptor
from .utils import normalise_address

logger = logging.getLogger(__name__)


class Web3Signer:
    """An account able to sign transactions, optionally bound to a provider.

    ``web3`` may be ``None`` for a detached signer; any operation that needs
    the chain then raises :class:`NoProviderError`.
    """

    def __init__(self, account: LocalAccount | Any, web3: AsyncWeb3 | None = None) -> None:
        self._account = account
        self._address = normalise_address(account.address, "account")
        self._web3 = web3

    @property
    def account(self) -> LocalAccount:
        return self._account

    @property
    def address(self) -> ChecksumAddress:
        return self._address

    @property
    def has_provider(self) -> bool:
        return self._web3 is not None

    @property
    def web3(self) -> AsyncWeb3:
        if self._web3 is None:
            raise NoProviderError()
        return self._web3

    async def get_chain_id(self) -> int:
        """Return the chain id of the connected network."""

        chain_id = int(await self.web3.eth.chain_id)
        logger.debug("Signer %s is connected to chain id %s", self._address, chain_id)
        return chain_id

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    async def connect(cls, config: SignerConfig) -> Web3Signer:
        """Derive the account from ``config`` and connect it to ``config.rpc_url``."""

        account = _account_from_key(config.private_key)

        provider = AsyncHTTPProvider(
            config.rpc_url,
            request_kwargs={"timeout": ClientTimeout(total=config.request_timeout)},
        )
        web3 = AsyncWeb3(provider)
        if not await web3.is_connected():
            raise NetworkError("Unable to connect to RPC", endpoint=config.rpc_url)

        web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(account))  # type: ignore[arg-type]
        web3.eth.default_account = account.address

        logger.info("Connected signer %s to RPC at %s", account.address, config.rpc_url)
        return cls(account, web3)

    @classmethod
    async def for_network(
        cls,
        network: NetworkDescriptor,
        private_key: str,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> Web3Signer:
        """Connect a signer to the RPC endpoint listed for ``network``."""

        config = SignerConfig(
            private_key=private_key,
            rpc_url=network.rpc_url,
            request_timeout=request_timeout,
        )
        return await cls.connect(config)

    @classmethod
    def detached(cls, private_key: str) -> Web3Signer:
        """Return a signer with no provider."""

        return cls(_account_from_key(private_key))


def _account_from_key(private_key: str) -> LocalAccount:
    try:
        return cast(LocalAccount, Account.from_key(private_key))  # type: ignore[arg-type]
    except Exception as exc:
        raise ValidationError(
            "Failed to derive signer account from provided private key",
            field="private_key",
            details={"error": str(exc)},
        ) from exc
