"""Activated tokens: per-token handles caching decimals, balance and price."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from hexbytes import HexBytes
from web3.contract import AsyncContract
from web3.types import ChecksumAddress

from .connections import Web3Signer
from .constants import ERC20_ABI, TRANSFER_ARG_TYPES, TRANSFER_SELECTOR
from .pricing import FallbackPriceFn, PriceSource, resolve_price_source
from .types import (
    NetworkDescriptor,
    PendingTransfer,
    TokenDescriptor,
    TokenSnapshot,
    TransferArgs,
)
from .utils import from_raw_amount, join_all, normalise_address, to_raw_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenBinding:
    """A token descriptor bound to its contracts, before any chain read."""

    signer: Web3Signer
    chain_id: int
    descriptor: TokenDescriptor
    contract: AsyncContract
    price_source: PriceSource
    network: NetworkDescriptor | None = None

    async def fetch_decimals(self) -> int:
        return int(await self.contract.functions.decimals().call())

    async def fetch_balance(self, decimals: int) -> float:
        raw_balance = await self.contract.functions.balanceOf(self.signer.address).call()
        balance = float(from_raw_amount(int(raw_balance), decimals))
        logger.debug("Balance of %s for %s: %s", self.descriptor.symbol, self.signer.address, balance)
        return balance

    async def fetch_price(self) -> float:
        return await self.price_source.fetch_price(self.chain_id, self.descriptor)

    async def fetch_snapshot(self, decimals: int) -> TokenSnapshot:
        balance, price = await join_all([self.fetch_balance(decimals), self.fetch_price()])
        return TokenSnapshot(balance=balance, price=price)


def bind_token(
    signer: Web3Signer,
    chain_id: int,
    token: TokenDescriptor,
    fallback_price_fn: FallbackPriceFn | None = None,
    network: NetworkDescriptor | None = None,
) -> TokenBinding:
    """Bind ``token`` to its contract and price source without touching the chain.

    Raises MissingPriceSourceError when the token has no oracle and no
    fallback function was supplied.
    """

    web3 = signer.web3
    contract = web3.eth.contract(address=token.address, abi=ERC20_ABI)
    price_source = resolve_price_source(web3, token, fallback_price_fn)
    return TokenBinding(
        signer=signer,
        chain_id=chain_id,
        descriptor=token,
        contract=contract,
        price_source=price_source,
        network=network,
    )


class ActivatedToken:
    """Runtime handle for one token of the active network.

    Instances are produced by :meth:`initialize`, so decimals and a first
    balance/price snapshot are always present.
    """

    def __init__(self, binding: TokenBinding, decimals: int, snapshot: TokenSnapshot) -> None:
        self._binding = binding
        self._decimals = decimals
        self._snapshot = snapshot

    @classmethod
    async def initialize(cls, binding: TokenBinding) -> ActivatedToken:
        """Fetch decimals once, then the first balance and price."""

        decimals = await binding.fetch_decimals()
        snapshot = await binding.fetch_snapshot(decimals)
        logger.debug(
            "Activated %s on chain %s (decimals=%s)",
            binding.descriptor.symbol,
            binding.chain_id,
            decimals,
        )
        return cls(binding, decimals, snapshot)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def descriptor(self) -> TokenDescriptor:
        return self._binding.descriptor

    @property
    def name(self) -> str:
        return self._binding.descriptor.name

    @property
    def symbol(self) -> str:
        return self._binding.descriptor.symbol

    @property
    def address(self) -> ChecksumAddress:
        return self._binding.descriptor.address

    @property
    def oracle_address(self) -> ChecksumAddress | None:
        return self._binding.descriptor.oracle_address

    @property
    def image(self) -> str:
        return self._binding.descriptor.image

    @property
    def chain_id(self) -> int:
        return self._binding.chain_id

    @property
    def price_source(self) -> PriceSource:
        return self._binding.price_source

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def snapshot(self) -> TokenSnapshot:
        return self._snapshot

    @property
    def balance(self) -> float:
        return self._snapshot.balance

    @property
    def price(self) -> float:
        return self._snapshot.price

    @property
    def value(self) -> float:
        return self._snapshot.value

    def __repr__(self) -> str:
        return (
            f"ActivatedToken(symbol={self.symbol!r}, chain_id={self.chain_id}, "
            f"balance={self.balance}, price={self.price})"
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    async def get_balance(self) -> float:
        return await self._binding.fetch_balance(self._decimals)

    async def get_price(self) -> float:
        return await self._binding.fetch_price()

    async def fetch_snapshot(self) -> TokenSnapshot:
        """Read balance and price concurrently without touching the cached values."""

        return await self._binding.fetch_snapshot(self._decimals)

    def commit(self, snapshot: TokenSnapshot) -> None:
        self._snapshot = snapshot

    async def update(self) -> TokenSnapshot:
        """Refresh balance and price together.

        Both reads run concurrently; the cached values change only when both
        succeed.
        """

        snapshot = await self.fetch_snapshot()
        self.commit(snapshot)
        return snapshot

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------
    async def transfer(self, to: str, amount: float | Decimal | int) -> PendingTransfer:
        """Submit ``transfer(to, amount)`` and return without waiting for a receipt."""

        recipient = normalise_address(to, "to")
        raw_amount = to_raw_amount(amount, self._decimals)
        signer = self._binding.signer

        tx_hash = await self._binding.contract.functions.transfer(recipient, raw_amount).transact(
            {"from": signer.address}
        )
        tx_hex = HexBytes(tx_hash).to_0x_hex()
        logger.info(
            "Transfer of %s %s to %s sent hash=%s", amount, self.symbol, recipient, tx_hex
        )

        network = self._binding.network
        return PendingTransfer(
            tx_hash=tx_hex,
            token=self.descriptor,
            to=recipient,
            amount=float(amount),
            raw_amount=raw_amount,
            explorer_url=network.tx_url(tx_hex) if network and network.explorer_url else None,
        )

    def decode_transfer(self, data: Any) -> TransferArgs | None:
        """Decode ERC-20 ``transfer`` calldata; return None for any other call."""

        payload = HexBytes(data)
        if payload[:4] != TRANSFER_SELECTOR or len(payload) < 4 + 64:
            return None

        try:
            to, raw_amount = abi_decode(list(TRANSFER_ARG_TYPES), bytes(payload[4:]))
        except DecodingError:
            logger.debug("Malformed transfer calldata for %s: %s", self.symbol, payload.to_0x_hex())
            return None

        return TransferArgs(
            to=normalise_address(to, "to"),
            amount=float(from_raw_amount(raw_amount, self._decimals)),
            raw_amount=int(raw_amount),
        )
